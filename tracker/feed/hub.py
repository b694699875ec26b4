"""In-process event feed with cancellable subscriptions.

The telemetry stream and the location stream each get one FeedHub. Bridges
(the HTTP adapter, a database listener, a simulator) publish into it; the
session subscribes. A failing subscriber is logged and never propagates back
to the publisher.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Generic, TypeVar

import structlog

log = structlog.get_logger()

T = TypeVar("T")

Handler = Callable[[Any], None]
ErrorHandler = Callable[[str], None]


class Subscription:
    """Handle returned by FeedHub.subscribe. ``cancel()`` is idempotent."""

    def __init__(self, hub: FeedHub, sub_id: int) -> None:
        self._hub = hub
        self._id = sub_id
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._hub._remove(self._id)


class FeedHub(Generic[T]):
    """Fan-out of events (and error strings) to subscribers."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = threading.Lock()
        self._next_id = 1
        self._handlers: dict[int, tuple[Handler, ErrorHandler | None]] = {}

    def subscribe(self, on_event: Callable[[T], None],
                  on_error: ErrorHandler | None = None) -> Subscription:
        with self._lock:
            sub_id = self._next_id
            self._next_id += 1
            self._handlers[sub_id] = (on_event, on_error)
        log.debug("feed_subscribed", feed=self.name, subscription=sub_id)
        return Subscription(self, sub_id)

    def publish(self, event: T) -> int:
        """Deliver an event to every subscriber. Returns the delivery count."""
        delivered = 0
        for sub_id, (on_event, _on_error) in self._snapshot():
            try:
                on_event(event)
                delivered += 1
            except Exception:
                log.error("feed_handler_failed", feed=self.name,
                          subscription=sub_id, exc_info=True)
        return delivered

    def publish_error(self, message: str) -> int:
        """Deliver an error report to subscribers that registered for errors."""
        delivered = 0
        for sub_id, (_on_event, on_error) in self._snapshot():
            if on_error is None:
                continue
            try:
                on_error(message)
                delivered += 1
            except Exception:
                log.error("feed_error_handler_failed", feed=self.name,
                          subscription=sub_id, exc_info=True)
        return delivered

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._handlers)

    def _snapshot(self) -> list[tuple[int, tuple[Handler, ErrorHandler | None]]]:
        with self._lock:
            return list(self._handlers.items())

    def _remove(self, sub_id: int) -> None:
        with self._lock:
            self._handlers.pop(sub_id, None)
        log.debug("feed_unsubscribed", feed=self.name, subscription=sub_id)
