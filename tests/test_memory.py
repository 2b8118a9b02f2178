"""Tests for the in-memory event log and subscriber registry."""

from __future__ import annotations

import pytest

from datalayer.domain.errors import DuplicateSubscriberError
from datalayer.repos.memory import EventLog, SubscriberRegistry


def test_event_log_assigns_sequential_indexes():
    log = EventLog()

    assert log.append({"n": 0})[0] == 0
    assert log.append({"n": 1})[0] == 1
    assert len(log) == 2
    assert log.list_all()[1] == {"n": 1}


def test_event_log_list_is_a_snapshot():
    log = EventLog()
    for n in range(3):
        log.append({"n": n})

    head = log.list_all()
    log.append({"n": 3})

    assert head == [{"n": 0}, {"n": 1}, {"n": 2}]
    assert len(log.list_all()) == 4


def test_event_log_copies_mappings():
    log = EventLog()
    event = {"action": "login"}

    _, stored = log.append(event)
    event["action"] = "changed"

    assert stored == {"action": "login"}
    with pytest.raises(TypeError):
        stored["action"] = "x"


def test_subscriber_registry_rejects_duplicates():
    registry = SubscriberRegistry(bus_name="bus")
    first = lambda event: None  # noqa: E731
    registry.add("m", first)

    with pytest.raises(DuplicateSubscriberError):
        registry.add("m", lambda event: None)

    assert registry.snapshot() == [("m", first)]
    assert len(registry) == 1


def test_subscriber_registry_snapshot_ignores_later_adds():
    registry = SubscriberRegistry(bus_name="bus")
    registry.add("a", print)
    snapshot = registry.snapshot()

    registry.add("b", print)

    assert [sid for sid, _ in snapshot] == ["a"]
    assert registry.list_ids() == ["a", "b"]
    assert "b" in registry
    assert "missing" not in registry
