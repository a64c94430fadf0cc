"""Unit tests for the Logger facade with a delegate observer."""

from __future__ import annotations

import asyncio
import gc
import threading
import time
from typing import Any

import pytest
from hypothesis import given, settings

from plank import Level, Logger
from plank.config import ConfigError, LoggerConfig
from plank.core.observers import DelegateObserver, NotificationCenter, NotificationObserver
from plank.core.request import NULL_MESSAGE, EntryState
from plank.kernel.errors import InvalidLevelError, LaneClosedError
from plank.testing import MemorySink, MemorySystemSink, RecordingDelegate
from plank.testing.strategies import message_strategy

MESSAGE = "Test"
TAG = "Tag"


# ---------------------------------------------------------------------------
# Delegate notifications
# ---------------------------------------------------------------------------


class TestDelegateLogging:
    @pytest.mark.parametrize(
        ("method", "level"),
        [
            ("verbose", Level.VERBOSE),
            ("info", Level.INFO),
            ("warning", Level.WARNING),
            ("error", Level.ERROR),
        ],
    )
    def test_logs_at_threshold(
        self, logger: Logger, recording_delegate: RecordingDelegate, method: str, level: Level
    ) -> None:
        logger.threshold_level = level
        getattr(logger, method)(MESSAGE)
        assert recording_delegate.wait_for(1)
        assert recording_delegate.message == MESSAGE

    def test_includes_tag_in_body(self, logger: Logger, recording_delegate: RecordingDelegate) -> None:
        logger.synchronous = True
        logger.error(MESSAGE)
        assert TAG in (recording_delegate.body or "")

    def test_default_body_contains_tag_level_and_message(
        self, logger: Logger, recording_delegate: RecordingDelegate
    ) -> None:
        logger.synchronous = True
        logger.error(MESSAGE)
        body = recording_delegate.body or ""
        assert TAG in body
        assert "Error" in body
        assert MESSAGE in body

    def test_logs_asynchronously(self, logger: Logger, recording_delegate: RecordingDelegate) -> None:
        gate = threading.Event()
        logger.lane.submit(gate.wait)
        logger.synchronous = False
        emission = logger.error(MESSAGE)
        assert recording_delegate.fire_count == 0
        assert not emission.done
        gate.set()
        assert recording_delegate.wait_for(1)
        assert emission.wait(5)

    def test_logs_synchronously(self, logger: Logger, recording_delegate: RecordingDelegate) -> None:
        logger.synchronous = True
        emission = logger.error(MESSAGE)
        assert recording_delegate.fire_count == 1
        assert emission.state is EntryState.COMPLETED

    def test_logs_when_over_threshold(self, logger: Logger, recording_delegate: RecordingDelegate) -> None:
        logger.threshold_level = Level.VERBOSE
        logger.error(MESSAGE)
        assert recording_delegate.wait_for(1)

    @pytest.mark.parametrize("method", ["warning", "verbose"])
    def test_not_logged_under_threshold(
        self, logger: Logger, recording_delegate: RecordingDelegate, method: str
    ) -> None:
        logger.threshold_level = Level.ERROR
        emission = getattr(logger, method)(MESSAGE)
        assert emission.state is EntryState.FILTERED
        assert logger.flush(timeout=5)
        assert recording_delegate.fire_count == 0

    def test_not_logged_when_disabled(self, logger: Logger, recording_delegate: RecordingDelegate) -> None:
        logger.enabled = False
        logger.error(MESSAGE)
        assert logger.flush(timeout=5)
        assert recording_delegate.fire_count == 0

    def test_threshold_warning_info_filtered(self, logger: Logger, recording_delegate: RecordingDelegate) -> None:
        logger.threshold_level = Level.WARNING
        logger.synchronous = True
        logger.info(MESSAGE)
        assert recording_delegate.fire_count == 0

    def test_threshold_warning_error_delivered_once(
        self, logger: Logger, recording_delegate: RecordingDelegate
    ) -> None:
        logger.threshold_level = Level.WARNING
        logger.synchronous = True
        logger.error(MESSAGE)
        assert recording_delegate.fire_count == 1
        assert recording_delegate.message == MESSAGE
        assert TAG in (recording_delegate.body or "")

    def test_obeys_formatting(self, logger: Logger, recording_delegate: RecordingDelegate) -> None:
        logger.formatter = lambda message, tag, level, site, ts: f"{message}{tag}{level.display_name}"
        logger.error(MESSAGE)
        assert recording_delegate.wait_for(1)
        assert recording_delegate.body == f"{MESSAGE}{TAG}{Level.ERROR.display_name}"

    def test_null_message(self, logger: Logger, recording_delegate: RecordingDelegate) -> None:
        logger.synchronous = True
        logger.error(None)
        assert recording_delegate.message == "(null)"

    @given(message=message_strategy())
    @settings(max_examples=25, deadline=None)
    def test_any_message_reaches_delegate(self, message: str | None) -> None:
        delegate = RecordingDelegate()
        with Logger(TAG, delegate, sink=MemorySink(), system_sink=MemorySystemSink()) as log:
            log.synchronous = True
            log.error(message)
        expected = NULL_MESSAGE if message is None else message
        assert delegate.message == expected
        assert expected in (delegate.body or "")

    def test_dropped_delegate_stops_callbacks(self, memory_sink: MemorySink) -> None:
        delegate = RecordingDelegate()
        with Logger(TAG, delegate, sink=memory_sink, system_sink=MemorySystemSink()) as log:
            log.synchronous = True
            del delegate
            log.error(MESSAGE)
            assert log.delegate is None
            assert len(memory_sink.lines) == 1


# ---------------------------------------------------------------------------
# Completion actions
# ---------------------------------------------------------------------------


class TestCompletion:
    def test_called_on_synchronous_logs(self, logger: Logger) -> None:
        called = False

        def done() -> None:
            nonlocal called
            called = True

        logger.synchronous = True
        logger.error(MESSAGE, done)
        assert called is True

    def test_called_on_asynchronous_logs(self, logger: Logger) -> None:
        called = threading.Event()
        logger.synchronous = False
        logger.error(MESSAGE, called.set)
        assert called.wait(5)

    def test_runs_on_lane_thread(self, logger: Logger) -> None:
        threads: list[str] = []
        logger.synchronous = True
        logger.error(MESSAGE, lambda: threads.append(threading.current_thread().name))
        assert threads == [logger.lane.name]

    def test_not_called_when_filtered(self, logger: Logger) -> None:
        calls: list[int] = []
        logger.threshold_level = Level.ERROR
        logger.info(MESSAGE, lambda: calls.append(1))
        logger.flush(timeout=5)
        assert calls == []

    def test_system_exit_in_completion_keeps_logging(self, logger: Logger, memory_sink: MemorySink) -> None:
        def leave() -> None:
            raise SystemExit(1)

        logger.error("one", leave)
        assert logger.flush(timeout=5)
        logger.synchronous = True
        assert logger.error("two").state is EntryState.COMPLETED
        assert [line.splitlines()[1] for line in memory_sink.lines] == ["one", "two"]

    def test_synchronous_log_from_completion_does_not_deadlock(
        self, logger: Logger, memory_sink: MemorySink
    ) -> None:
        logger.synchronous = True
        logger.error("outer", lambda: logger.error("inner"))
        assert logger.flush(timeout=5)
        assert [line.splitlines()[1] for line in memory_sink.lines] == ["outer", "inner"]


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class TestOrdering:
    def test_calls_from_one_thread_processed_in_order(
        self, logger: Logger, memory_sink: MemorySink
    ) -> None:
        logger.threshold_level = Level.VERBOSE
        for i in range(100):
            logger.log(Level(i % 4), str(i))
        assert logger.flush(timeout=5)
        assert [line.splitlines()[1] for line in memory_sink.lines] == [str(i) for i in range(100)]

    def test_concurrent_callers_keep_per_thread_order(self, logger: Logger, memory_sink: MemorySink) -> None:
        logger.threshold_level = Level.VERBOSE
        logger.formatter = lambda message, tag, level, site, ts: message

        def producer(n: int) -> None:
            for i in range(100):
                logger.info(f"{n}:{i}")

        threads = [threading.Thread(target=producer, args=(n,)) for n in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert logger.flush(timeout=10)

        lines = memory_sink.lines
        assert len(lines) == 600
        for n in range(6):
            assert [int(l.split(":")[1]) for l in lines if l.startswith(f"{n}:")] == list(range(100))

    def test_sync_call_waits_behind_earlier_async_entries(
        self, logger: Logger, memory_sink: MemorySink
    ) -> None:
        logger.formatter = lambda message, tag, level, site, ts: message
        logger.error("first", lambda: time.sleep(0.05))
        logger.synchronous = True
        logger.error("second")
        assert memory_sink.lines == ["first", "second"]

    def test_loggers_have_independent_lanes(self, logger: Logger) -> None:
        other = Logger("Other", sink=MemorySink(), system_sink=MemorySystemSink())
        gate = threading.Event()
        try:
            logger.lane.submit(gate.wait)
            other.synchronous = True
            assert other.error(MESSAGE).state is EntryState.COMPLETED
        finally:
            gate.set()
            other.close(timeout=5)


# ---------------------------------------------------------------------------
# Call site
# ---------------------------------------------------------------------------


class TestCallSite:
    def test_defaults_to_caller(self, logger: Logger) -> None:
        logger.synchronous = True
        emission = logger.error(MESSAGE)
        assert emission.entry is not None
        site = emission.request.site
        assert site.function == "test_defaults_to_caller"
        assert site.file_name == "test_logger.py"
        assert f"[test_logger.py test_defaults_to_caller:{site.line}]" in emission.entry.text

    def test_generic_log_reports_caller(self, logger: Logger) -> None:
        emission = logger.log("error", MESSAGE)
        assert emission.request.site.function == "test_generic_log_reports_caller"

    def test_explicit_metadata_wins(self, logger: Logger) -> None:
        emission = logger.error(MESSAGE, function="fetch", file="/x/net.py", line=9)
        site = emission.request.site
        assert (site.function, site.file, site.line) == ("fetch", "/x/net.py", 9)

    def test_stacklevel_skips_wrapper(self, logger: Logger) -> None:
        def report(msg: str) -> Any:
            return logger.error(msg, stacklevel=2)

        emission = report(MESSAGE)
        assert emission.request.site.function == "test_stacklevel_skips_wrapper"


# ---------------------------------------------------------------------------
# Configuration surface
# ---------------------------------------------------------------------------


class TestConfiguration:
    def test_defaults(self) -> None:
        with Logger(TAG, sink=MemorySink(), system_sink=MemorySystemSink()) as log:
            assert log.enabled is True
            assert log.system_log_enabled is True
            assert log.threshold_level == Level.WARNING
            assert log.synchronous is False
            assert log.formatter is None
            assert log.delegate is None
            assert log.notification_center is None

    def test_primitive_threshold_roundtrip(self, logger: Logger) -> None:
        logger.primitive_threshold_level = 3
        assert logger.threshold_level == Level.ERROR
        assert logger.primitive_threshold_level == 3

    def test_primitive_threshold_out_of_range_fails_open(self, logger: Logger) -> None:
        logger.primitive_threshold_level = 99
        assert logger.threshold_level == Level.VERBOSE

    def test_threshold_accepts_names(self, logger: Logger) -> None:
        logger.threshold_level = "info"
        assert logger.threshold_level == Level.INFO

    def test_threshold_rejects_unknown_names(self, logger: Logger) -> None:
        with pytest.raises(InvalidLevelError):
            logger.threshold_level = "loudest"

    def test_formatter_must_be_callable(self, logger: Logger) -> None:
        with pytest.raises(ConfigError):
            logger.formatter = "not callable"  # type: ignore[assignment]

    def test_system_log_mirror_toggle(self, logger: Logger, memory_system_sink: MemorySystemSink) -> None:
        logger.synchronous = True
        logger.error("mirrored")
        logger.system_log_enabled = False
        logger.error("not mirrored")
        assert [r[0].splitlines()[1] for r in memory_system_sink.records] == ["mirrored"]
        assert memory_system_sink.records[0][1] is Level.ERROR

    def test_explicit_config(self) -> None:
        config = LoggerConfig(threshold_level=Level.INFO, synchronous=True)
        with Logger(TAG, config=config, sink=MemorySink(), system_sink=MemorySystemSink()) as log:
            assert log.config is config
            assert log.info(MESSAGE).state is EntryState.COMPLETED

    def test_delegate_and_center_are_exclusive(self) -> None:
        with pytest.raises(ConfigError):
            Logger(TAG, RecordingDelegate(), notification_center=NotificationCenter())

    def test_assigning_center_replaces_delegate(self, logger: Logger) -> None:
        center = NotificationCenter()
        assert isinstance(logger.observer, DelegateObserver)
        logger.notification_center = center
        assert isinstance(logger.observer, NotificationObserver)
        assert logger.notification_center is center
        assert logger.delegate is None

    def test_clearing_delegate(self, logger: Logger) -> None:
        logger.delegate = None
        assert logger.observer is None

    def test_repr(self, logger: Logger) -> None:
        assert "tag='Tag'" in repr(logger)
        assert "Warning" in repr(logger)


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_close_processes_pending_entries(self, memory_sink: MemorySink) -> None:
        log = Logger(TAG, sink=memory_sink, system_sink=MemorySystemSink())
        for i in range(20):
            log.error(str(i))
        assert log.close(timeout=5)
        assert len(memory_sink.lines) == 20

    def test_logging_after_close_raises(self) -> None:
        log = Logger(TAG, sink=MemorySink(), system_sink=MemorySystemSink())
        log.close()
        with pytest.raises(LaneClosedError):
            log.error(MESSAGE)

    def test_filtered_after_close_does_not_raise(self) -> None:
        log = Logger(TAG, sink=MemorySink(), system_sink=MemorySystemSink())
        log.close()
        assert log.verbose(MESSAGE).state is EntryState.FILTERED

    def test_drain(self, logger: Logger, recording_delegate: RecordingDelegate) -> None:
        logger.error(MESSAGE)
        assert asyncio.run(logger.drain(timeout=5)) is True
        assert recording_delegate.fire_count == 1

    def test_lane_named_after_tag(self, logger: Logger) -> None:
        assert logger.lane.name.endswith(".logging[Tag]")

    def test_dropped_logger_stops_its_worker(self) -> None:
        before = threading.active_count()
        for _ in range(5):
            log = Logger(TAG, sink=MemorySink(), system_sink=MemorySystemSink())
            log.synchronous = True
            log.error(MESSAGE)
        del log

        deadline = time.monotonic() + 5
        while threading.active_count() > before and time.monotonic() < deadline:
            gc.collect()
            time.sleep(0.01)
        assert threading.active_count() <= before
