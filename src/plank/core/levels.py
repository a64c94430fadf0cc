"""Core – severity levels and the threshold policy.

Messages whose level ranks below the logger's threshold are dropped before
anything else happens to them; that check is the only cancellation point in
the emission pipeline.
"""
from __future__ import annotations

import logging
from enum import IntEnum

from plank.kernel.errors import InvalidLevelError


class Level(IntEnum):
    """Ordered severity levels, compared by integer rank.

    - ``ERROR``: unexpected or undesired outcomes during execution.
    - ``WARNING``: non-critical issues, for instance failed HTTP requests.
    - ``INFO``: important information, for instance successful responses.
    - ``VERBOSE``: debug information.
    """

    VERBOSE = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def to_python_level(self) -> int:
        """Return the :mod:`logging` constant used when mirroring to the system log."""
        return _PYTHON_LEVELS[self]

    def __str__(self) -> str:
        return self.display_name

    @classmethod
    def from_name(cls, name: str) -> Level:
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise InvalidLevelError(name) from exc


_DISPLAY_NAMES = {
    Level.VERBOSE: "Verbose",
    Level.INFO: "Info",
    Level.WARNING: "Warning",
    Level.ERROR: "Error",
}

_PYTHON_LEVELS = {
    Level.VERBOSE: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARNING: logging.WARNING,
    Level.ERROR: logging.ERROR,
}


def should_emit(level: Level, threshold: Level) -> bool:
    """Return ``True`` iff *level* ranks at or above *threshold*."""
    return int(level) >= int(threshold)


def coerce_level(value: Level | int | str) -> Level:
    """Turn *value* into a :class:`Level`.

    Integers outside the defined range fall back to ``Level.VERBOSE``, so a
    bad numeric threshold logs everything instead of nothing.  Unknown names
    raise :class:`~plank.kernel.errors.InvalidLevelError`.
    """
    if isinstance(value, Level):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.lstrip("-").isdigit():
            return coerce_level(int(stripped))
        return Level.from_name(stripped)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidLevelError(value)
    try:
        return Level(value)
    except ValueError:
        return Level.VERBOSE


__all__ = ["Level", "coerce_level", "should_emit"]
