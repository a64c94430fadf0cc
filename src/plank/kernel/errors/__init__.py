"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    └── PlankError               (logging.py)
        ├── InvalidLevelError
        ├── LaneClosedError
        ├── FormatterError
        └── ConfigError          (plank.config.errors)
            ├── MissingRequiredSettingError
            └── InvalidSettingValueError
"""

from plank.kernel.errors.base import BaseError
from plank.kernel.errors.logging import (
    FormatterError,
    InvalidLevelError,
    LaneClosedError,
    PlankError,
)

__all__ = [
    "BaseError",
    "FormatterError",
    "InvalidLevelError",
    "LaneClosedError",
    "PlankError",
]
