"""Config – logger settings, environment loader, and config errors."""

from plank.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from plank.config.loaders import EnvSettingsLoader, SettingsLoader
from plank.config.settings import LoggerConfig, Settings

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "LoggerConfig",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
