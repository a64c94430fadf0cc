"""Config errors – raised while building or loading a LoggerConfig."""
from __future__ import annotations

from typing import Any

from plank.kernel.errors import PlankError


class ConfigError(PlankError):
    """A logger was configured inconsistently, or its settings failed to load."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """An environment variable backing a field without default is unset."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"Setting '{setting_name}' is required but not set",
            detail={"setting": setting_name},
            **kwargs,
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot be used, e.g. ``PLANK_ENABLED=maybe``."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Setting '{setting_name}' rejected {value!r}: {reason}",
            detail={"setting": setting_name, "value": repr(value), "reason": reason},
            **kwargs,
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
