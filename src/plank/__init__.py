"""
plank – leveled, taggable logging on a serial lane.

Import path convention::

    from plank import Level, Logger
    from plank.core.observers import NotificationCenter, DID_LOG_NOTIFICATION
    from plank.config import LoggerConfig, EnvSettingsLoader
"""

from plank.core.levels import Level
from plank.core.logger import Logger

__version__ = "0.1.0"
__all__ = ["Level", "Logger", "__version__"]
