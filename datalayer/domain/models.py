"""Value objects exchanged with data layer callers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field


class DeliveryPhase(StrEnum):
    REPLAY = "replay"
    LIVE = "live"


class Subscription(BaseModel):
    """Returned by a successful ``subscribe``."""

    model_config = ConfigDict(frozen=True)

    bus_name: str
    subscriber_id: str
    replayed: int = Field(ge=0)


class SubscribeRequest(BaseModel):
    """The ``{subscriber, callback}`` shape accepted by ``push``."""

    # No coercion: a non-string id fails here as a pydantic ValidationError,
    # which is a ValueError like the one ``DataLayer.subscribe`` raises.
    subscriber: str = Field(min_length=1)
    callback: Callable[[Any], Any]

    @classmethod
    def matches(cls, record: Any) -> bool:
        """True when *record* carries a subscriber id and a callable callback."""
        return (
            isinstance(record, Mapping)
            and "subscriber" in record
            and callable(record.get("callback"))
        )
