"""Testing fixtures – pytest fixtures for plank doubles.

Register in your ``conftest.py``::

    pytest_plugins = ["plank.testing.fixtures"]
"""
from __future__ import annotations

from typing import Iterator

import pytest

from plank.core.logger import Logger
from plank.kernel.time import FrozenClock
from plank.testing.fakes import FakeClock, MemorySink, MemorySystemSink, RecordingDelegate


@pytest.fixture
def fake_clock() -> FrozenClock:
    """A clock pinned to 2026-01-01 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def recording_delegate() -> RecordingDelegate:
    return RecordingDelegate()


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def memory_system_sink() -> MemorySystemSink:
    return MemorySystemSink()


@pytest.fixture
def logger(
    recording_delegate: RecordingDelegate,
    memory_sink: MemorySink,
    memory_system_sink: MemorySystemSink,
    fake_clock: FrozenClock,
) -> Iterator[Logger]:
    """Logger tagged ``"Tag"`` wired to in-memory doubles; closed on teardown."""
    log = Logger(
        "Tag",
        recording_delegate,
        sink=memory_sink,
        system_sink=memory_system_sink,
        clock=fake_clock,
    )
    yield log
    log.close(timeout=5)


__all__ = ["fake_clock", "logger", "memory_sink", "memory_system_sink", "recording_delegate"]
