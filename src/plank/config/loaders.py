"""Config settings – SettingsLoader port and EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Mapping, TypeVar

from plank.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from plank.config.settings import Settings, env_fields
from plank.core.levels import Level, coerce_level
from plank.kernel.errors import InvalidLevelError

T = TypeVar("T", bound=Settings)

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from environment variables named ``{PREFIX}_{FIELD}``.

    With ``LoggerConfig`` that gives ``PLANK_ENABLED``,
    ``PLANK_SYSTEM_LOG_ENABLED``, ``PLANK_THRESHOLD_LEVEL`` (name or integer)
    and ``PLANK_SYNCHRONOUS``.  Unset variables keep the field default.

    Parameters
    ----------
    environ:
        Mapping to read instead of :data:`os.environ`.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        prefix = getattr(settings_class, "_prefix", "").upper()
        kwargs: dict[str, Any] = {}

        for field in env_fields(settings_class):
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue

            kwargs[field.name] = self._coerce(env_key, raw, field.type)

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc

    def _coerce(self, key: str, value: str, type_hint: Any) -> Any:  # noqa: PLR0911
        if type_hint in (bool, "bool"):
            lowered = value.strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise InvalidSettingValueError(key, value, "expected a boolean")
        if type_hint in (Level, "Level"):
            try:
                return coerce_level(value)
            except InvalidLevelError as exc:
                raise InvalidSettingValueError(key, value, exc.message) from exc
        if type_hint in (int, "int"):
            return int(value)
        if type_hint in (float, "float"):
            return float(value)
        return value


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
