"""Core – levels, formatting, observers, sinks, lane, emitter and the Logger facade."""
from plank.core.levels import Level, coerce_level, should_emit
from plank.core.request import (
    NULL_MESSAGE,
    CallSite,
    Completion,
    Emission,
    EntryState,
    FormattedEntry,
    LogRequest,
)
from plank.core.formatting import DefaultFormatter, Formatter, TimestampFormatter, executable_name
from plank.core.observers import (
    DID_LOG_NOTIFICATION,
    LOG_BODY_KEY,
    LOG_MESSAGE_KEY,
    WILL_LOG_NOTIFICATION,
    DelegateObserver,
    LoggerDelegate,
    Notification,
    NotificationCenter,
    NotificationObserver,
    Observer,
)
from plank.core.sinks import StreamSink, SystemLogSink, SystemSink, WriteSink
from plank.core.lane import SerialLane
from plank.core.emitter import LogEmitter
from plank.core.logger import Logger

__all__ = [
    "DID_LOG_NOTIFICATION",
    "LOG_BODY_KEY",
    "LOG_MESSAGE_KEY",
    "NULL_MESSAGE",
    "WILL_LOG_NOTIFICATION",
    "CallSite",
    "Completion",
    "DefaultFormatter",
    "DelegateObserver",
    "Emission",
    "EntryState",
    "FormattedEntry",
    "Formatter",
    "Level",
    "LogEmitter",
    "LogRequest",
    "Logger",
    "LoggerDelegate",
    "Notification",
    "NotificationCenter",
    "NotificationObserver",
    "Observer",
    "SerialLane",
    "StreamSink",
    "SystemLogSink",
    "SystemSink",
    "TimestampFormatter",
    "WriteSink",
    "coerce_level",
    "executable_name",
    "should_emit",
]
