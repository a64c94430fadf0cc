"""Core – external write primitives.

``WriteSink`` receives one formatted text per entry (standard output by
default).  ``SystemSink`` mirrors the same text, tagged with its level, to
the platform log, which in Python means a structlog logger routed through
:mod:`logging`.
"""
from __future__ import annotations

import logging
import sys
import threading
from typing import Any, Protocol, TextIO

import structlog

from plank.core.levels import Level

#: structlog logger name the system mirror writes to.
SYSTEM_LOGGER_NAME = "plank.system"


class WriteSink(Protocol):
    """Port: destination for formatted entry text."""

    def write(self, text: str) -> None: ...


class SystemSink(Protocol):
    """Port: platform log facility receiving text tagged with a level."""

    def log(self, text: str, level: Level, tag: str) -> None: ...


class StreamSink:
    """Write each entry as one line to *stream* (``sys.stdout`` by default).

    The default stream is resolved on every write so redirections made
    after construction are honoured.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def write(self, text: str) -> None:
        stream = self._stream or sys.stdout
        with self._lock:
            stream.write(text + "\n")
            stream.flush()


class SystemLogSink:
    """Mirror entries to a structlog logger.

    Each call is emitted at the stdlib level mapped from the entry level,
    with ``tag`` and ``plank_level`` (the numeric rank) bound as keys.

    Parameters
    ----------
    logger:
        A structlog (or structlog-compatible) logger.  Defaults to the
        stdlib logger ``plank.system`` wrapped by structlog, so the
        processors installed by
        :meth:`~plank.observability.SystemLogFactory.configure` apply.
    """

    def __init__(self, logger: Any = None) -> None:
        if logger is None:
            logger = structlog.wrap_logger(
                logging.getLogger(SYSTEM_LOGGER_NAME),
                wrapper_class=structlog.stdlib.BoundLogger,
            )
        self._log = logger

    def log(self, text: str, level: Level, tag: str) -> None:
        self._log.log(level.to_python_level(), text, tag=tag, plank_level=int(level))


__all__ = ["SYSTEM_LOGGER_NAME", "StreamSink", "SystemLogSink", "SystemSink", "WriteSink"]
