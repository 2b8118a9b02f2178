"""Failure sinks for subscriber callbacks that raise during delivery."""

from __future__ import annotations

import logging
from typing import Callable

from datalayer.domain.errors import SubscriberCallbackError

logger = logging.getLogger(__name__)

FailureSink = Callable[[SubscriberCallbackError], None]


def log_failure(error: SubscriberCallbackError) -> None:
    """Default sink: log the failure with the original traceback."""
    logger.error(
        "Subscriber %r on %r failed during %s delivery of event #%d",
        error.subscriber_id,
        error.bus_name,
        error.phase,
        error.event_index,
        exc_info=(type(error.original), error.original, error.original.__traceback__),
    )


class FailureRecorder:
    """Sink that logs each failure and keeps it for later inspection."""

    def __init__(self, forward: FailureSink | None = log_failure) -> None:
        self.forward = forward
        self._errors: list[SubscriberCallbackError] = []

    def __call__(self, error: SubscriberCallbackError) -> None:
        self._errors.append(error)
        if self.forward is not None:
            self.forward(error)

    def list_all(self) -> list[SubscriberCallbackError]:
        return list(self._errors)

    def list_for_subscriber(self, subscriber_id: str) -> list[SubscriberCallbackError]:
        return [e for e in self._errors if e.subscriber_id == subscriber_id]

    def __len__(self) -> int:
        return len(self._errors)
