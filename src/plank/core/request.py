"""Core – per-call values: call site, request, formatted entry, emission handle."""
from __future__ import annotations

import dataclasses
import os
import threading
from datetime import datetime
from enum import Enum
from typing import Callable

from plank.core.levels import Level

#: Completion action fired on the lane once the entry has been fully processed.
Completion = Callable[[], None]

#: Placeholder substituted for an absent message.
NULL_MESSAGE = "(null)"


@dataclasses.dataclass(frozen=True)
class CallSite:
    """Where the log call was made."""

    function: str
    file: str
    line: int

    @property
    def file_name(self) -> str:
        """Basename of :attr:`file`, as shown in the default text."""
        return os.path.basename(self.file) or self.file


@dataclasses.dataclass(frozen=True)
class LogRequest:
    """One log call, created on the calling thread and consumed once by the emitter."""

    message: str | None
    level: Level
    tag: str
    site: CallSite
    completion: Completion | None = None

    @property
    def text(self) -> str:
        """The message with :data:`NULL_MESSAGE` substituted for ``None``."""
        return NULL_MESSAGE if self.message is None else self.message


@dataclasses.dataclass(frozen=True)
class FormattedEntry:
    """The final text produced for a request; what observers and sinks receive."""

    request: LogRequest
    text: str
    timestamp: datetime

    @property
    def message(self) -> str:
        return self.request.text


class EntryState(str, Enum):
    """Lifecycle of a request on the lane."""

    PENDING = "pending"
    FILTERED = "filtered"
    FORMATTING = "formatting"
    NOTIFYING_BEFORE = "notifying_before"
    WRITING = "writing"
    NOTIFYING_AFTER = "notifying_after"
    COMPLETING = "completing"
    COMPLETED = "completed"

    @property
    def terminal(self) -> bool:
        return self in (EntryState.FILTERED, EntryState.COMPLETED)


class Emission:
    """Handle returned by every log call.

    Filtered requests come back already ``FILTERED`` and done.  Accepted
    ones move through the states on the lane; :meth:`wait` blocks until the
    sequence (completion action included) has finished.
    """

    def __init__(self, request: LogRequest) -> None:
        self.request = request
        self.entry: FormattedEntry | None = None
        self._state = EntryState.PENDING
        self._done = threading.Event()

    @classmethod
    def filtered(cls, request: LogRequest) -> Emission:
        emission = cls(request)
        emission._finish(EntryState.FILTERED)
        return emission

    @property
    def state(self) -> EntryState:
        return self._state

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the emission reached a terminal state; ``False`` on timeout."""
        return self._done.wait(timeout)

    def _advance(self, state: EntryState) -> None:
        self._state = state

    def _finish(self, state: EntryState = EntryState.COMPLETED) -> None:
        self._state = state
        self._done.set()

    def __repr__(self) -> str:
        return f"Emission(level={self.request.level.display_name}, state={self._state.value})"


__all__ = [
    "NULL_MESSAGE",
    "CallSite",
    "Completion",
    "Emission",
    "EntryState",
    "FormattedEntry",
    "LogRequest",
]
