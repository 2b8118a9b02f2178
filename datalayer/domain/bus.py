"""Synchronous in-process data layer with history replay."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Callable

from datalayer.domain.errors import SubscriberCallbackError
from datalayer.domain.models import DeliveryPhase, SubscribeRequest, Subscription
from datalayer.repos.memory import EventLog, SubscriberRegistry
from datalayer.services.failures import FailureSink, log_failure

logger = logging.getLogger(__name__)

_Delivery = tuple[str, Callable[[Any], Any], int, Any, DeliveryPhase]


class DataLayer:
    """Named publish/subscribe bus that replays its history to late subscribers.

    A subscriber registered while the log holds *n* events receives events
    ``0..n-1`` in order during ``subscribe``, then every later event as it is
    published. Deliveries go through one FIFO queue drained by the outermost
    call, so a publish or subscribe made from inside a callback is delivered
    after the deliveries already pending. Callbacks run synchronously; one that
    raises is reported to the failure sink and never interrupts delivery to
    anyone else.
    """

    def __init__(self, name: str, failure_sink: FailureSink | None = None) -> None:
        if not name:
            raise ValueError("data layer name must be a non-empty string")
        self.name = name
        self.failure_sink: FailureSink = failure_sink or log_failure
        self._log = EventLog()
        self._subscribers = SubscriberRegistry(bus_name=name)
        # Guards the log, the registry and the delivery queue.
        self._lock = threading.RLock()
        self._pending: deque[_Delivery] = deque()
        self._draining = False

    def __repr__(self) -> str:
        return (
            f"DataLayer(name={self.name!r}, events={len(self._log)}, "
            f"subscribers={len(self._subscribers)})"
        )

    def __len__(self) -> int:
        return len(self._log)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def publish(self, event: Any) -> int:
        """Append *event* to the log and deliver it to current subscribers.

        Returns the event's index in the log. Called from inside a callback,
        the event is queued behind the deliveries already pending and this
        returns before it reaches anyone.
        """
        with self._lock:
            index, stored = self._log.append(event)
            recipients = self._subscribers.snapshot()
            logger.debug(
                "%s: published event #%d to %d subscriber(s)",
                self.name,
                index,
                len(recipients),
            )
            for subscriber_id, callback in recipients:
                self._pending.append(
                    (subscriber_id, callback, index, stored, DeliveryPhase.LIVE)
                )
            self._drain()
        return index

    def subscribe(
        self, subscriber_id: str, callback: Callable[[Any], Any]
    ) -> Subscription:
        """Register *callback* and replay the existing log to it.

        Raises DuplicateSubscriberError if *subscriber_id* is already taken,
        leaving the bus untouched. Called from inside a callback, the replay
        is queued and runs after this returns.
        """
        if not isinstance(subscriber_id, str) or not subscriber_id:
            raise ValueError("subscriber id must be a non-empty string")
        if not callable(callback):
            raise TypeError("subscriber callback must be callable")

        with self._lock:
            self._subscribers.add(subscriber_id, callback)
            # Replay is queued before anything published from its callbacks.
            replay = self._log.list_all()
            logger.debug(
                "%s: subscribed %r, replaying %d event(s)",
                self.name,
                subscriber_id,
                len(replay),
            )
            for index, event in enumerate(replay):
                self._pending.append(
                    (subscriber_id, callback, index, event, DeliveryPhase.REPLAY)
                )
            self._drain()

        return Subscription(
            bus_name=self.name, subscriber_id=subscriber_id, replayed=len(replay)
        )

    def push(self, record: Any) -> Subscription | int:
        """Legacy entry point: subscribe or publish depending on *record*'s shape.

        A mapping with a ``subscriber`` key and a callable ``callback`` is a
        subscription request; anything else is published as an event.
        """
        if SubscribeRequest.matches(record):
            request = SubscribeRequest.model_validate(dict(record))
            return self.subscribe(request.subscriber, request.callback)
        return self.publish(record)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def history(self) -> list[Any]:
        """Return every published event, oldest first."""
        with self._lock:
            return self._log.list_all()

    def subscriber_ids(self) -> list[str]:
        with self._lock:
            return self._subscribers.list_ids()

    def is_subscribed(self, subscriber_id: str) -> bool:
        with self._lock:
            return subscriber_id in self._subscribers

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def _drain(self) -> None:
        # Only the outermost call delivers; nested calls just enqueue.
        if self._draining:
            return
        self._draining = True
        try:
            while self._pending:
                self._deliver(*self._pending.popleft())
        finally:
            self._draining = False

    def _deliver(
        self,
        subscriber_id: str,
        callback: Callable[[Any], Any],
        index: int,
        event: Any,
        phase: DeliveryPhase,
    ) -> None:
        try:
            callback(event)
        except Exception as exc:
            self._report(
                SubscriberCallbackError(self.name, subscriber_id, index, phase, exc)
            )

    def _report(self, error: SubscriberCallbackError) -> None:
        try:
            self.failure_sink(error)
        except Exception:
            logger.exception(
                "%s: failure sink raised while reporting %r", self.name, error
            )
