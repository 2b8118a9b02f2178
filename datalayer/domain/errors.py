"""Exceptions raised or reported by a data layer."""

from __future__ import annotations

from datalayer.domain.models import DeliveryPhase


class DataLayerError(Exception):
    """Base class for data layer errors."""


class DuplicateSubscriberError(DataLayerError):
    """Raised by ``subscribe`` when the subscriber id is already registered."""

    def __init__(self, subscriber_id: str, bus_name: str) -> None:
        self.subscriber_id = subscriber_id
        self.bus_name = bus_name
        super().__init__(
            f"Subscriber {subscriber_id!r} is already registered on {bus_name!r}"
        )


class SubscriberCallbackError(DataLayerError):
    """A subscriber callback raised while receiving an event.

    Never raised to the caller of ``publish`` or ``subscribe``; instances are
    handed to the bus's failure sink instead. The original exception is kept as
    ``original`` and ``__cause__``.
    """

    def __init__(
        self,
        bus_name: str,
        subscriber_id: str,
        event_index: int,
        phase: DeliveryPhase,
        original: BaseException,
    ) -> None:
        self.bus_name = bus_name
        self.subscriber_id = subscriber_id
        self.event_index = event_index
        self.phase = phase
        self.original = original
        self.__cause__ = original
        super().__init__(
            f"Subscriber {subscriber_id!r} on {bus_name!r} failed during {phase} "
            f"delivery of event #{event_index}: {original!r}"
        )
