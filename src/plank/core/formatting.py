"""Core – message formatting.

A formatter turns a message plus its context into the exact text that is
written and handed to observers.  Installing a custom formatter replaces
:class:`DefaultFormatter` completely; its return value is used verbatim.
"""
from __future__ import annotations

import os
import sys
from datetime import UTC, datetime
from typing import Callable

from plank.core.levels import Level
from plank.core.request import CallSite

#: ``formatter(message, tag, level, site, timestamp) -> text``
Formatter = Callable[[str, str, Level, CallSite, datetime], str]


def executable_name() -> str:
    """Basename of the running program, ``"Unknown"`` when it cannot be determined."""
    argv0 = sys.argv[0] if sys.argv else ""
    return os.path.basename(argv0) or "Unknown"


class TimestampFormatter:
    """Render timestamps as ``YYYY-MM-DD HH:MM:SS:mmm (UTC)``.

    Naive datetimes are assumed to already be UTC.
    """

    def __call__(self, timestamp: datetime) -> str:
        if timestamp.tzinfo is not None:
            timestamp = timestamp.astimezone(UTC)
        millis = timestamp.microsecond // 1000
        return f"{timestamp:%Y-%m-%d %H:%M:%S}:{millis:03d} (UTC)"


class DefaultFormatter:
    """Default text layout::

        2026-01-01 12:00:00:000 (UTC) [app|Plank] [Tag|Error] [views.py load:42]
        message
        <blank line>

    Parameters
    ----------
    timestamp_formatter:
        Callable turning the entry timestamp into text.
    executable:
        Process identifier shown in the header.  Defaults to
        :func:`executable_name`.
    """

    def __init__(
        self,
        timestamp_formatter: Callable[[datetime], str] | None = None,
        executable: str | None = None,
    ) -> None:
        self._timestamp_formatter = timestamp_formatter or TimestampFormatter()
        self._executable = executable or executable_name()

    @property
    def executable(self) -> str:
        return self._executable

    def __call__(
        self,
        message: str,
        tag: str,
        level: Level,
        site: CallSite,
        timestamp: datetime,
    ) -> str:
        stamp = self._timestamp_formatter(timestamp)
        return (
            f"{stamp} [{self._executable}|Plank] [{tag}|{level.display_name}] "
            f"[{site.file_name} {site.function}:{site.line}]\n{message}\n"
        )


__all__ = ["DefaultFormatter", "Formatter", "TimestampFormatter", "executable_name"]
