"""Core – SerialLane.

One FIFO drained by one worker thread.  Everything submitted to a lane runs
strictly in submission order and never concurrently with anything else on
the same lane, whichever thread submitted it.  Separate lanes are
independent of each other.
"""
from __future__ import annotations

import asyncio
import logging
import queue
import threading
from typing import Callable

from plank.kernel.errors import LaneClosedError

logger = logging.getLogger(__name__)

Task = Callable[[], None]

_STOP = object()


class SerialLane:
    """Single-consumer execution lane.

    The worker is a daemon thread started on first submission.

    Parameters
    ----------
    name:
        Thread name of the worker; shows up in diagnostics.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._queue: queue.SimpleQueue[object] = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._closed = False

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self, task: Task) -> None:
        """Enqueue *task* and return immediately."""
        with self._lock:
            if self._closed:
                raise LaneClosedError(self.name)
            self._ensure_worker()
            self._queue.put(task)

    def run(self, task: Task, timeout: float | None = None) -> bool:
        """Enqueue *task* and block until it has run.

        Called from the lane's own thread (a completion action or observer
        logging synchronously) the task is enqueued behind the current one
        instead, since waiting for it there would never return.  Returns
        ``True`` when the task finished before this call returned.
        """
        if self.in_lane:
            self.submit(task)
            return False
        finished = threading.Event()

        def _wrapped() -> None:
            try:
                task()
            finally:
                finished.set()

        self.submit(_wrapped)
        return finished.wait(timeout)

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every task submitted before this call has run."""
        if self.in_lane:
            return False
        with self._lock:
            if self._thread is None:
                return True
        try:
            return self.run(lambda: None, timeout)
        except LaneClosedError:
            return self._join(timeout)

    async def drain(self, timeout: float | None = None) -> bool:
        """Awaitable :meth:`flush` that keeps the event loop free."""
        return await asyncio.to_thread(self.flush, timeout)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self, timeout: float | None = None) -> bool:
        """Run what is queued, stop the worker, reject later submissions."""
        with self._lock:
            if not self._closed:
                self._closed = True
                if self._thread is not None:
                    self._queue.put(_STOP)
        if self.in_lane:
            return False
        return self._join(timeout)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def in_lane(self) -> bool:
        """``True`` when called from the lane's worker thread."""
        thread = self._thread
        return thread is not None and thread is threading.current_thread()

    @property
    def pending(self) -> int:
        """Approximate number of tasks waiting to run."""
        return self._queue.qsize()

    # ------------------------------------------------------------------
    # Worker
    # ------------------------------------------------------------------

    def _ensure_worker(self) -> None:
        if self._thread is None:
            self._thread = threading.Thread(target=self._work, name=self.name, daemon=True)
            self._thread.start()

    def _join(self, timeout: float | None) -> bool:
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _work(self) -> None:
        while True:
            task = self._queue.get()
            if task is _STOP:
                break
            try:
                task()  # type: ignore[operator]
            except BaseException as exc:  # noqa: BLE001
                logger.error("plank.lane_task_failed lane=%s exc=%r", self.name, exc)
            finally:
                # released before blocking on the next get()
                task = None

    def __repr__(self) -> str:
        return f"SerialLane(name={self.name!r}, closed={self._closed})"


__all__ = ["SerialLane", "Task"]
