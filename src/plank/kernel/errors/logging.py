"""Logging errors – level parsing, lane lifecycle, formatter faults."""

from __future__ import annotations

from typing import Any

from plank.kernel.errors.base import BaseError


class PlankError(BaseError):
    """Base class for every error raised by plank."""

    default_code = "plank_error"


class InvalidLevelError(PlankError):
    """A level name does not match any defined :class:`~plank.core.levels.Level`."""

    default_code = "invalid_level"

    def __init__(self, value: Any, **kwargs: Any) -> None:
        super().__init__(f"Unknown log level {value!r}", detail={"value": repr(value)}, **kwargs)
        self.value = value


class LaneClosedError(PlankError):
    """A request was submitted to a lane that has been closed."""

    default_code = "lane_closed"

    def __init__(self, lane_name: str, **kwargs: Any) -> None:
        super().__init__(f"Logging lane '{lane_name}' is closed", **kwargs)
        self.lane_name = lane_name

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["lane_name"] = self.lane_name
        return base


class FormatterError(PlankError):
    """A custom formatter raised or returned something other than ``str``.

    Never propagated: the emitter reports it on the diagnostic logger and
    falls back to the default text for that entry.
    """

    default_code = "formatter_error"

    def __init__(self, tag: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"Custom formatter failed for tag '{tag}'", **kwargs)
        self.tag = tag


__all__ = ["FormatterError", "InvalidLevelError", "LaneClosedError", "PlankError"]
