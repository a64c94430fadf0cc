"""conftest.py for benchmarks.

Provides quiet loggers and an event loop shared by the async drain
benchmarks.
"""

from __future__ import annotations

import asyncio

import pytest

from plank import Logger
from plank.testing import MemorySink, MemorySystemSink


@pytest.fixture(scope="session")
def event_loop():
    """Session-scoped event loop shared by all async benchmark helpers."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture(scope="session")
def run_async(event_loop):
    """Execute a coroutine in the session event loop."""

    def _run(coro):
        return event_loop.run_until_complete(coro)

    return _run


@pytest.fixture
def bench_logger():
    """Logger writing to in-memory sinks with the threshold at ``VERBOSE``."""
    log = Logger("Bench", sink=MemorySink(), system_sink=MemorySystemSink())
    log.threshold_level = 0
    yield log
    log.close(timeout=10)
