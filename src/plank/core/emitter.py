"""Core – LogEmitter.

Drives each request through the emission sequence on the logger's lane::

    submit ──► FILTERED                       (disabled, or below threshold)
           └─► FORMATTING ─► NOTIFYING_BEFORE ─► WRITING
                          ─► NOTIFYING_AFTER ─► COMPLETING ─► COMPLETED

Filtering happens on the calling thread before anything irreversible.
Every later step runs on the lane, isolated from the others: a failing
observer, sink or completion action is reported on the diagnostic logger
and the sequence carries on.  Nothing is retried.
"""
from __future__ import annotations

import functools
import logging
from typing import Any, Callable

from plank.config.settings import LoggerConfig
from plank.core.formatting import DefaultFormatter, Formatter
from plank.core.lane import SerialLane
from plank.core.levels import should_emit
from plank.core.request import Emission, EntryState, FormattedEntry, LogRequest
from plank.core.sinks import StreamSink, SystemLogSink, SystemSink, WriteSink
from plank.kernel.errors import FormatterError
from plank.kernel.time import Clock, SystemClock

logger = logging.getLogger(__name__)


class LogEmitter:
    """Serial execution core shared by every caller of one logger.

    Parameters
    ----------
    config:
        Live configuration, read on every submission and again on the lane.
    lane:
        The lane requests run on.
    sender:
        Object passed to observers as the origin of each entry.
    sink:
        Primary destination.  Defaults to :class:`StreamSink` on stdout.
    system_sink:
        Platform mirror used while ``config.system_log_enabled`` is set.
    clock:
        Timestamp source, read when an entry is formatted.
    default_formatter:
        Layout used when no custom formatter is installed, or when the
        installed one fails.
    """

    def __init__(
        self,
        config: LoggerConfig,
        lane: SerialLane,
        *,
        sender: Any = None,
        sink: WriteSink | None = None,
        system_sink: SystemSink | None = None,
        clock: Clock | None = None,
        default_formatter: Formatter | None = None,
    ) -> None:
        self.config = config
        self.lane = lane
        self.sender = sender
        self.sink: WriteSink = sink or StreamSink()
        self.system_sink: SystemSink = system_sink or SystemLogSink()
        self.clock: Clock = clock or SystemClock()
        self.default_formatter: Formatter = default_formatter or DefaultFormatter()

    def accepts(self, request: LogRequest) -> bool:
        config = self.config
        return config.enabled and should_emit(request.level, config.threshold_level)

    def submit(self, request: LogRequest) -> Emission:
        """Filter *request*, then queue it (or run it, in synchronous mode)."""
        if not self.accepts(request):
            return Emission.filtered(request)
        emission = Emission(request)
        task = functools.partial(self._process, emission)
        if self.config.synchronous:
            self.lane.run(task)
        else:
            self.lane.submit(task)
        return emission

    # ------------------------------------------------------------------
    # Lane side
    # ------------------------------------------------------------------

    def _process(self, emission: Emission) -> None:
        request = emission.request
        config = self.config
        try:
            emission._advance(EntryState.FORMATTING)
            entry = self._format(request, config.formatter)
            emission.entry = entry
            observer = config.observer

            if observer is not None:
                emission._advance(EntryState.NOTIFYING_BEFORE)
                self._guard("will_log", request, observer.will_log, self.sender, entry.message, entry.text)

            emission._advance(EntryState.WRITING)
            self._guard("write", request, self.sink.write, entry.text)
            if config.system_log_enabled:
                self._guard("system_log", request, self.system_sink.log, entry.text, request.level, request.tag)

            if observer is not None:
                emission._advance(EntryState.NOTIFYING_AFTER)
                self._guard("did_log", request, observer.did_log, self.sender, entry.message, entry.text)

            if request.completion is not None:
                emission._advance(EntryState.COMPLETING)
                self._guard("completion", request, request.completion)
        finally:
            emission._finish()

    def _format(self, request: LogRequest, formatter: Formatter | None) -> FormattedEntry:
        timestamp = self.clock.now()
        args = (request.text, request.tag, request.level, request.site, timestamp)
        if formatter is not None:
            try:
                text = formatter(*args)
                if not isinstance(text, str):
                    raise FormatterError(
                        request.tag,
                        f"Custom formatter returned {type(text).__name__}, expected str",
                    )
                return FormattedEntry(request, text, timestamp)
            except FormatterError as exc:
                logger.warning("plank.formatter_failed tag=%s exc=%r", request.tag, exc)
            except BaseException as exc:  # noqa: BLE001
                logger.warning(
                    "plank.formatter_failed tag=%s exc=%r",
                    request.tag,
                    FormatterError(request.tag, cause=exc),
                )
        return FormattedEntry(request, self.default_formatter(*args), timestamp)

    @staticmethod
    def _guard(step: str, request: LogRequest, fn: Callable[..., Any], *args: Any) -> None:
        try:
            fn(*args)
        except BaseException as exc:  # noqa: BLE001
            logger.error(
                "plank.step_failed step=%s tag=%s level=%s exc=%r",
                step,
                request.tag,
                request.level.display_name,
                exc,
            )


__all__ = ["LogEmitter"]
