"""Tests for the event log — proves append-only behaviour and subscriber delivery."""

import pytest
from datetime import datetime, timezone

from ballot.observability.logging import configure_logging
from ballot.persistence.event_log import EventKind, EventLog, EventRecord


def _event(event_id: str, kind: EventKind = EventKind.VOTED) -> EventRecord:
    return EventRecord.create(
        event_id=event_id,
        event_kind=kind,
        actor_id="voter1",
        payload={"voter": "voter1", "proposal_id": 0},
        timestamp_utc=datetime(2026, 3, 1, tzinfo=timezone.utc),
    )


class TestEventRecord:
    def test_hash_is_deterministic(self) -> None:
        assert _event("evt-1").event_hash == _event("evt-1").event_hash
        assert _event("evt-1").event_hash.startswith("sha256:")

    def test_hash_covers_event_id(self) -> None:
        assert _event("evt-1").event_hash != _event("evt-2").event_hash

    def test_to_dict(self) -> None:
        data = _event("evt-1").to_dict()
        assert data["event_kind"] == "voted"
        assert data["timestamp_utc"] == "2026-03-01T00:00:00Z"
        assert data["payload"] == {"voter": "voter1", "proposal_id": 0}

    def test_payload_is_copied_on_create(self) -> None:
        payload = {"voter": "voter1", "proposal_id": 0}
        event = EventRecord.create(
            event_id="evt-1",
            event_kind=EventKind.VOTED,
            actor_id="voter1",
            payload=payload,
            timestamp_utc=datetime(2026, 3, 1, tzinfo=timezone.utc),
        )
        payload["proposal_id"] = 7
        assert event.payload["proposal_id"] == 0
        assert event.event_hash == _event("evt-1").event_hash

    def test_payload_is_read_only(self) -> None:
        event = _event("evt-1")
        with pytest.raises(TypeError):
            event.payload["proposal_id"] = 7

    def test_to_dict_payload_is_detached(self) -> None:
        event = _event("evt-1")
        event.to_dict()["payload"]["proposal_id"] = 7
        assert event.payload["proposal_id"] == 0


class TestEventLog:
    def test_append_and_filter(self) -> None:
        log = EventLog()
        log.append(_event("evt-1", EventKind.VOTER_REGISTERED))
        log.append(_event("evt-2", EventKind.VOTED))
        assert log.count == 2
        assert [e.event_id for e in log.events(EventKind.VOTED)] == ["evt-2"]
        assert log.last_event.event_id == "evt-2"

    def test_duplicate_id_rejected(self) -> None:
        log = EventLog()
        log.append(_event("evt-1"))
        with pytest.raises(ValueError, match="Duplicate"):
            log.append(_event("evt-1"))
        assert log.count == 1

    def test_events_returns_copy(self) -> None:
        log = EventLog()
        log.append(_event("evt-1"))
        log.events().clear()
        assert log.count == 1

    def test_next_event_id_is_sequential(self) -> None:
        log = EventLog()
        assert log.next_event_id() == "evt-000001"
        log.append(_event(log.next_event_id()))
        assert log.next_event_id() == "evt-000002"

    def test_subscribers_receive_each_event(self) -> None:
        log = EventLog()
        received: list[EventRecord] = []
        log.subscribe(received.append)
        first = _event("evt-1")
        second = _event("evt-2")
        log.append(first)
        log.append(second)
        assert received == [first, second]

    def test_failing_subscriber_is_isolated(self, capsys) -> None:
        configure_logging(level="INFO", fmt="json")
        log = EventLog()
        received: list[EventRecord] = []

        def _broken(event: EventRecord) -> None:
            raise RuntimeError("sink offline")

        log.subscribe(_broken)
        log.subscribe(received.append)
        event = _event("evt-1")
        log.append(event)
        assert log.count == 1
        assert received == [event]
        assert "event_subscriber_failed" in capsys.readouterr().err

    def test_empty_log(self) -> None:
        log = EventLog()
        assert log.count == 0
        assert log.last_event is None
