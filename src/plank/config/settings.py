"""Config settings – Settings base class and LoggerConfig.

``LoggerConfig`` is owned by one logger and read by its emitter on every
call.  Nothing guards it against concurrent mutation: set it up before
steady-state logging, or synchronise writes against emission yourself.
"""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar

from plank.config.errors import InvalidSettingValueError
from plank.core.formatting import Formatter
from plank.core.levels import Level, coerce_level
from plank.core.observers import Observer
from plank.kernel.errors import InvalidLevelError


@dataclasses.dataclass
class Settings:
    """Base class for environment-backed settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


def runtime_only(default: Any = None) -> Any:
    """Declare a field that environment loaders must skip."""
    return dataclasses.field(default=default, metadata={"env": False})


@dataclasses.dataclass
class LoggerConfig(Settings):
    """Mutable configuration of one :class:`~plank.core.logger.Logger`.

    Attributes
    ----------
    enabled:
        Master switch; a disabled logger filters everything.
    system_log_enabled:
        Mirror each written entry to the platform log.
    threshold_level:
        Entries ranking below this level are filtered.  Accepts a
        :class:`Level`, an int (out of range falls back to ``VERBOSE``) or a
        level name.
    synchronous:
        Block each call until its entry has been fully processed.
    formatter:
        Custom formatter replacing the default layout.
    observer:
        Delegate or notification adapter told about each entry.
    """

    _prefix: ClassVar[str] = "PLANK"

    enabled: bool = True
    system_log_enabled: bool = True
    threshold_level: Level = Level.WARNING
    synchronous: bool = False
    formatter: Formatter | None = runtime_only()
    observer: Observer | None = runtime_only()

    def _validate(self) -> None:
        try:
            self.threshold_level = coerce_level(self.threshold_level)
        except InvalidLevelError as exc:
            raise InvalidSettingValueError("threshold_level", self.threshold_level, exc.message) from exc
        if self.formatter is not None and not callable(self.formatter):
            raise InvalidSettingValueError("formatter", self.formatter, "must be callable")


def env_fields(settings_class: type[Settings]) -> list[dataclasses.Field[Any]]:
    """Fields of *settings_class* that may be populated from the environment."""
    return [
        f for f in dataclasses.fields(settings_class)  # type: ignore[arg-type]
        if f.metadata.get("env", True)
    ]


__all__ = ["LoggerConfig", "Settings", "env_fields", "runtime_only"]
