"""Core – observer channel.

Two notification styles share one :class:`Observer` capability:

* **delegate** – a single :class:`LoggerDelegate` called once per entry,
  after the write (:class:`DelegateObserver`);
* **event** – a "will log" and a "did log" notification posted to a
  :class:`NotificationCenter` around the write (:class:`NotificationObserver`).

Both run on the logger's lane.  A failing delegate or subscriber is
reported on the diagnostic logger and never reaches the lane.
"""
from __future__ import annotations

import dataclasses
import itertools
import logging
import threading
import weakref
from types import MappingProxyType
from typing import Any, Callable, Mapping, Protocol

logger = logging.getLogger(__name__)

#: Posted on the lane immediately before an entry is written.
WILL_LOG_NOTIFICATION = "PlankWillLogNotification"

#: Posted on the lane immediately after an entry is written.
DID_LOG_NOTIFICATION = "PlankDidLogNotification"

#: ``user_info`` key holding the unaltered message.
LOG_MESSAGE_KEY = "PlankLogMessageKey"

#: ``user_info`` key holding the formatted text.
LOG_BODY_KEY = "PlankLogBodyKey"


class Observer(Protocol):
    """Capability notified around each written entry."""

    def will_log(self, sender: Any, message: str, body: str) -> None: ...
    def did_log(self, sender: Any, message: str, body: str) -> None: ...


class LoggerDelegate(Protocol):
    """Receives one callback per written entry."""

    def did_log(self, logger: Any, message: str, body: str) -> None: ...


class DelegateObserver:
    """Adapt a :class:`LoggerDelegate` to :class:`Observer`.

    The delegate is held weakly when it supports weak references, so an
    owner that drops its delegate stops receiving callbacks.
    """

    def __init__(self, delegate: LoggerDelegate) -> None:
        try:
            self._ref: Callable[[], LoggerDelegate | None] = weakref.ref(delegate)
        except TypeError:
            # __slots__ classes without a __weakref__ slot
            self._ref = lambda: delegate

    @property
    def delegate(self) -> LoggerDelegate | None:
        return self._ref()

    def will_log(self, sender: Any, message: str, body: str) -> None:
        """Delegates are only told about completed writes."""

    def did_log(self, sender: Any, message: str, body: str) -> None:
        delegate = self._ref()
        if delegate is not None:
            delegate.did_log(sender, message, body)


@dataclasses.dataclass(frozen=True)
class Notification:
    """A posted notification; ``user_info`` is read-only."""

    name: str
    sender: Any
    user_info: Mapping[str, Any]


NotificationCallback = Callable[[Notification], None]


@dataclasses.dataclass(frozen=True)
class _Registration:
    token: int
    callback: NotificationCallback
    name: str | None
    sender: Any

    def matches(self, name: str, sender: Any) -> bool:
        if self.name is not None and self.name != name:
            return False
        return self.sender is None or self.sender is sender


class NotificationCenter:
    """In-process broadcast of named notifications.

    Subscribers filter by notification name and/or sender; ``None`` matches
    anything.  Delivery is synchronous on the posting thread, in
    registration order.

    Example::

        center = NotificationCenter()
        center.add_observer(on_did_log, DID_LOG_NOTIFICATION, sender=log)
        log = Logger("net", notification_center=center)
    """

    def __init__(self) -> None:
        self._registrations: list[_Registration] = []
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()

    def add_observer(
        self,
        callback: NotificationCallback,
        name: str | None = None,
        sender: Any = None,
    ) -> int:
        """Register *callback*; returns a token for :meth:`remove_observer`."""
        with self._lock:
            token = next(self._tokens)
            self._registrations.append(_Registration(token, callback, name, sender))
        return token

    def remove_observer(self, token: int) -> bool:
        with self._lock:
            before = len(self._registrations)
            self._registrations = [r for r in self._registrations if r.token != token]
            return len(self._registrations) != before

    def post(self, name: str, sender: Any = None, user_info: Mapping[str, Any] | None = None) -> int:
        """Deliver a notification to every matching subscriber.

        Returns the number of subscribers that received it without raising.
        """
        notification = Notification(name, sender, MappingProxyType(dict(user_info or {})))
        with self._lock:
            targets = [r for r in self._registrations if r.matches(name, sender)]
        delivered = 0
        for registration in targets:
            try:
                registration.callback(notification)
                delivered += 1
            except Exception as exc:  # noqa: BLE001
                logger.error(
                    "plank.notification_failed name=%s token=%d exc=%r",
                    name,
                    registration.token,
                    exc,
                )
        return delivered

    @property
    def observer_count(self) -> int:
        with self._lock:
            return len(self._registrations)


class NotificationObserver:
    """Adapt a :class:`NotificationCenter` to :class:`Observer`."""

    def __init__(self, center: NotificationCenter) -> None:
        self.center = center

    def will_log(self, sender: Any, message: str, body: str) -> None:
        self.center.post(WILL_LOG_NOTIFICATION, sender, _user_info(message, body))

    def did_log(self, sender: Any, message: str, body: str) -> None:
        self.center.post(DID_LOG_NOTIFICATION, sender, _user_info(message, body))


def _user_info(message: str, body: str) -> dict[str, str]:
    return {LOG_MESSAGE_KEY: message, LOG_BODY_KEY: body}


__all__ = [
    "DID_LOG_NOTIFICATION",
    "LOG_BODY_KEY",
    "LOG_MESSAGE_KEY",
    "WILL_LOG_NOTIFICATION",
    "DelegateObserver",
    "LoggerDelegate",
    "Notification",
    "NotificationCallback",
    "NotificationCenter",
    "NotificationObserver",
    "Observer",
]
