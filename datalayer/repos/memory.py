"""In-memory repositories backing a data layer: the event log and subscribers."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable

from datalayer.domain.errors import DuplicateSubscriberError


class EventLog:
    """Append-only list of published events.

    Entries are never reordered, replaced or removed. Mapping events are stored
    behind a read-only proxy so subscribers cannot rewrite history.
    """

    def __init__(self) -> None:
        self._entries: list[Any] = []

    def append(self, event: Any) -> tuple[int, Any]:
        """Store *event* and return its index with the stored record."""
        if isinstance(event, Mapping):
            event = MappingProxyType(dict(event))
        self._entries.append(event)
        return len(self._entries) - 1, event

    def list_all(self) -> list[Any]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class SubscriberRegistry:
    """Dict-backed store of subscriber callbacks, keyed by subscriber id."""

    def __init__(self, bus_name: str) -> None:
        self.bus_name = bus_name
        self._store: dict[str, Callable[[Any], Any]] = {}

    def add(self, subscriber_id: str, callback: Callable[[Any], Any]) -> None:
        """Register *callback* under *subscriber_id*.

        Raises DuplicateSubscriberError if the id is taken; the existing
        callback is kept.
        """
        if subscriber_id in self._store:
            raise DuplicateSubscriberError(subscriber_id, self.bus_name)
        self._store[subscriber_id] = callback

    def list_ids(self) -> list[str]:
        return list(self._store)

    def snapshot(self) -> list[tuple[str, Callable[[Any], Any]]]:
        """Return the current (id, callback) pairs, detached from later adds."""
        return list(self._store.items())

    def __contains__(self, subscriber_id: object) -> bool:
        return subscriber_id in self._store

    def __len__(self) -> int:
        return len(self._store)
