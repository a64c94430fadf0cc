"""Testing support – fakes, fixtures, and hypothesis strategies.

Import in your ``conftest.py``::

    pytest_plugins = ["plank.testing.fixtures"]
"""

from plank.testing.fakes import (
    MISSING,
    FailingSink,
    FakeClock,
    MemorySink,
    MemorySystemSink,
    NotificationRecorder,
    RecordingDelegate,
    TickingClock,
)

__all__ = [
    "MISSING",
    "FailingSink",
    "FakeClock",
    "MemorySink",
    "MemorySystemSink",
    "NotificationRecorder",
    "RecordingDelegate",
    "TickingClock",
]
