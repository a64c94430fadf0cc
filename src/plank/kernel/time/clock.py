"""Kernel time – Clock protocol + implementations."""
from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: source of the timestamp stamped on each formatted entry."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Test clock pinned to a fixed point in time.

    ``advance`` may be called from the test thread while the logging lane
    reads ``now``; both go through a lock.
    """

    def __init__(self, fixed: datetime) -> None:
        self._fixed = fixed
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            return self._fixed

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        with self._lock:
            self._fixed += timedelta(**kwargs)


def utc_now() -> datetime:
    """Shorthand for ``datetime.now(UTC)``."""
    return datetime.now(UTC)


__all__ = ["Clock", "FrozenClock", "SystemClock", "utc_now"]
