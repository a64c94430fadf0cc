"""Core – Logger facade.

A :class:`Logger` is bound to a tag and owns one lane, one emitter and one
:class:`~plank.config.LoggerConfig`.  Any number of threads may log through
the same instance; their entries are processed one at a time, in the order
the calls were made.

Typical usage::

    log = Logger("network", delegate=my_delegate)
    log.threshold_level = Level.INFO
    log.info("request sent")
    log.error("request failed", lambda: done.set())

Configuration is read on every call but not synchronised: configure the
logger before steady-state use, or guard changes against concurrent
logging yourself.
"""
from __future__ import annotations

import sys
import weakref
from types import TracebackType

from plank.config.errors import ConfigError
from plank.config.settings import LoggerConfig
from plank.core.emitter import LogEmitter
from plank.core.formatting import DefaultFormatter, Formatter, executable_name
from plank.core.lane import SerialLane
from plank.core.levels import Level, coerce_level
from plank.core.observers import (
    DelegateObserver,
    LoggerDelegate,
    NotificationCenter,
    NotificationObserver,
    Observer,
)
from plank.core.request import CallSite, Completion, Emission, LogRequest
from plank.core.sinks import SystemSink, WriteSink
from plank.kernel.time import Clock

_UNKNOWN_SITE = CallSite("<unknown>", "<unknown>", 0)


def _caller_site(depth: int) -> CallSite:
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return _UNKNOWN_SITE
    code = frame.f_code
    return CallSite(code.co_name, code.co_filename, frame.f_lineno)


class Logger:
    """Leveled, taggable logger writing on its own serial lane.

    Parameters
    ----------
    tag:
        Attached to every entry; handy for visually filtering output.
    delegate:
        Optional :class:`~plank.core.observers.LoggerDelegate`, held weakly.
    notification_center:
        Optional center receiving "will log" / "did log" notifications.
        Mutually exclusive with *delegate*.
    config:
        Initial configuration.  A fresh :class:`LoggerConfig` by default.
    sink, system_sink, clock:
        Collaborators handed to the :class:`~plank.core.emitter.LogEmitter`.
    """

    def __init__(
        self,
        tag: str = "",
        delegate: LoggerDelegate | None = None,
        *,
        notification_center: NotificationCenter | None = None,
        config: LoggerConfig | None = None,
        sink: WriteSink | None = None,
        system_sink: SystemSink | None = None,
        clock: Clock | None = None,
    ) -> None:
        if delegate is not None and notification_center is not None:
            raise ConfigError("A logger takes either a delegate or a notification center, not both")
        self.tag = tag
        self.config = config or LoggerConfig()
        self._default_formatter = DefaultFormatter()
        self._lane = SerialLane(f"{executable_name()}.logging[{tag}]")
        # stops the worker of a logger dropped without close()
        weakref.finalize(self, self._lane.close, 0)
        self._emitter = LogEmitter(
            self.config,
            self._lane,
            sender=self,
            sink=sink,
            system_sink=system_sink,
            clock=clock,
            default_formatter=self._default_formatter,
        )
        if delegate is not None:
            self.delegate = delegate
        if notification_center is not None:
            self.notification_center = notification_center

    # ------------------------------------------------------------------
    # Per-level API
    # ------------------------------------------------------------------

    def error(
        self,
        message: str | None = None,
        completion: Completion | None = None,
        *,
        function: str | None = None,
        file: str | None = None,
        line: int | None = None,
        stacklevel: int = 1,
    ) -> Emission:
        """Log *message* at ``ERROR``; unexpected or undesired outcomes.

        *completion* fires on the lane once the entry has been processed.
        """
        return self._log(Level.ERROR, message, completion, function, file, line, stacklevel)

    def warning(
        self,
        message: str | None = None,
        completion: Completion | None = None,
        *,
        function: str | None = None,
        file: str | None = None,
        line: int | None = None,
        stacklevel: int = 1,
    ) -> Emission:
        """Log *message* at ``WARNING``; non-critical issues."""
        return self._log(Level.WARNING, message, completion, function, file, line, stacklevel)

    def info(
        self,
        message: str | None = None,
        completion: Completion | None = None,
        *,
        function: str | None = None,
        file: str | None = None,
        line: int | None = None,
        stacklevel: int = 1,
    ) -> Emission:
        """Log *message* at ``INFO``; important runtime information."""
        return self._log(Level.INFO, message, completion, function, file, line, stacklevel)

    def verbose(
        self,
        message: str | None = None,
        completion: Completion | None = None,
        *,
        function: str | None = None,
        file: str | None = None,
        line: int | None = None,
        stacklevel: int = 1,
    ) -> Emission:
        """Log *message* at ``VERBOSE``; debug information."""
        return self._log(Level.VERBOSE, message, completion, function, file, line, stacklevel)

    def log(
        self,
        level: Level | int | str,
        message: str | None = None,
        completion: Completion | None = None,
        *,
        function: str | None = None,
        file: str | None = None,
        line: int | None = None,
        stacklevel: int = 1,
    ) -> Emission:
        """Log *message* at an arbitrary *level* (coerced like the threshold)."""
        return self._log(coerce_level(level), message, completion, function, file, line, stacklevel)

    def _log(
        self,
        level: Level,
        message: str | None,
        completion: Completion | None,
        function: str | None,
        file: str | None,
        line: int | None,
        stacklevel: int,
    ) -> Emission:
        # caller -> public method -> _log -> _caller_site
        site = _caller_site(stacklevel + 1)
        request = LogRequest(
            message=message,
            level=level,
            tag=self.tag,
            site=CallSite(
                function if function is not None else site.function,
                file if file is not None else site.file,
                line if line is not None else site.line,
            ),
            completion=completion,
        )
        return self._emitter.submit(request)

    # ------------------------------------------------------------------
    # Configuration surface
    # ------------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self.config.enabled = bool(value)

    @property
    def system_log_enabled(self) -> bool:
        return self.config.system_log_enabled

    @system_log_enabled.setter
    def system_log_enabled(self, value: bool) -> None:
        self.config.system_log_enabled = bool(value)

    @property
    def threshold_level(self) -> Level:
        return self.config.threshold_level

    @threshold_level.setter
    def threshold_level(self, value: Level | int | str) -> None:
        self.config.threshold_level = coerce_level(value)

    @property
    def primitive_threshold_level(self) -> int:
        """Threshold as a plain int; out-of-range values fall back to ``VERBOSE``."""
        return int(self.config.threshold_level)

    @primitive_threshold_level.setter
    def primitive_threshold_level(self, value: int) -> None:
        self.config.threshold_level = coerce_level(int(value))

    @property
    def synchronous(self) -> bool:
        return self.config.synchronous

    @synchronous.setter
    def synchronous(self, value: bool) -> None:
        self.config.synchronous = bool(value)

    @property
    def formatter(self) -> Formatter | None:
        return self.config.formatter

    @formatter.setter
    def formatter(self, value: Formatter | None) -> None:
        if value is not None and not callable(value):
            raise ConfigError(f"Formatter must be callable, got {type(value).__name__}")
        self.config.formatter = value

    @property
    def observer(self) -> Observer | None:
        return self.config.observer

    @observer.setter
    def observer(self, value: Observer | None) -> None:
        self.config.observer = value

    @property
    def delegate(self) -> LoggerDelegate | None:
        observer = self.config.observer
        if isinstance(observer, DelegateObserver):
            return observer.delegate
        return None

    @delegate.setter
    def delegate(self, value: LoggerDelegate | None) -> None:
        self.config.observer = DelegateObserver(value) if value is not None else None

    @property
    def notification_center(self) -> NotificationCenter | None:
        observer = self.config.observer
        if isinstance(observer, NotificationObserver):
            return observer.center
        return None

    @notification_center.setter
    def notification_center(self, value: NotificationCenter | None) -> None:
        self.config.observer = NotificationObserver(value) if value is not None else None

    @property
    def lane(self) -> SerialLane:
        return self._lane

    @property
    def emitter(self) -> LogEmitter:
        return self._emitter

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every entry logged so far has been processed."""
        return self._lane.flush(timeout)

    async def drain(self, timeout: float | None = None) -> bool:
        """Awaitable :meth:`flush`."""
        return await self._lane.drain(timeout)

    def close(self, timeout: float | None = None) -> bool:
        """Process what is queued and stop the lane; later calls raise ``LaneClosedError``."""
        return self._lane.close(timeout)

    def __enter__(self) -> Logger:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Logger(tag={self.tag!r}, threshold={self.threshold_level.display_name}, "
            f"enabled={self.enabled}, synchronous={self.synchronous})"
        )


__all__ = ["Logger"]
