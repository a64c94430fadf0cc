"""Testing fakes – in-memory doubles for plank ports."""
from plank.kernel.time import FrozenClock
from plank.testing.fakes.clock import FakeClock, TickingClock
from plank.testing.fakes.delegate import RecordingDelegate
from plank.testing.fakes.notifications import MISSING, NotificationRecorder
from plank.testing.fakes.sinks import FailingSink, MemorySink, MemorySystemSink

__all__ = [
    "MISSING",
    "FailingSink",
    "FakeClock",
    "FrozenClock",
    "MemorySink",
    "MemorySystemSink",
    "NotificationRecorder",
    "RecordingDelegate",
    "TickingClock",
]
