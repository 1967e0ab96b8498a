"""Append-only event log — the record of every campaign notification.

Each successful operation appends exactly one event. Events are
immutable once written. The log lives in memory for the lifetime of
one campaign; subscribers are called synchronously on append.
"""

from __future__ import annotations

import enum
import hashlib
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from ballot.observability.logging import get_logger

log = get_logger(__name__)


class EventKind(str, enum.Enum):
    """Classification of campaign events."""
    VOTER_REGISTERED = "voter_registered"
    PROPOSAL_REGISTERED = "proposal_registered"
    VOTED = "voted"
    WORKFLOW_STATUS_CHANGE = "workflow_status_change"


@dataclass(frozen=True)
class EventRecord:
    """A single immutable campaign event.

    event_hash is a SHA-256 over the canonical JSON of the other fields,
    computed once at creation. payload is a read-only view over a private
    copy, so nothing handed a record can rewrite it.
    """
    event_id: str
    event_kind: EventKind
    timestamp_utc: str
    actor_id: str
    payload: Mapping[str, Any]
    event_hash: str

    @staticmethod
    def create(
        event_id: str,
        event_kind: EventKind,
        actor_id: str,
        payload: dict[str, Any],
        timestamp_utc: Optional[datetime] = None,
    ) -> EventRecord:
        """Create a new event record with computed hash."""
        ts = timestamp_utc or datetime.now(timezone.utc)
        ts_str = ts.strftime("%Y-%m-%dT%H:%M:%SZ")
        payload = dict(payload)

        canonical = json.dumps(
            {
                "event_id": event_id,
                "event_kind": event_kind.value,
                "timestamp_utc": ts_str,
                "actor_id": actor_id,
                "payload": payload,
            },
            sort_keys=True,
            ensure_ascii=False,
        ).encode("utf-8")
        digest = hashlib.sha256(canonical).hexdigest()

        return EventRecord(
            event_id=event_id,
            event_kind=event_kind,
            timestamp_utc=ts_str,
            actor_id=actor_id,
            payload=MappingProxyType(payload),
            event_hash=f"sha256:{digest}",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_kind": self.event_kind.value,
            "timestamp_utc": self.timestamp_utc,
            "actor_id": self.actor_id,
            "payload": dict(self.payload),
            "event_hash": self.event_hash,
        }


EventSubscriber = Callable[[EventRecord], None]


class EventLog:
    """In-memory append-only event log.

    Events can only be appended, never modified or deleted.
    """

    def __init__(self) -> None:
        self._events: list[EventRecord] = []
        self._event_ids: set[str] = set()
        self._subscribers: list[EventSubscriber] = []

    def subscribe(self, callback: EventSubscriber) -> None:
        """Register a callback invoked with each appended event."""
        self._subscribers.append(callback)

    def append(self, event: EventRecord) -> None:
        """Append an event to the log.

        Raises ValueError if event_id is a duplicate (replay protection).
        """
        if event.event_id in self._event_ids:
            raise ValueError(f"Duplicate event ID: {event.event_id}")

        self._events.append(event)
        self._event_ids.add(event.event_id)

        # The event is already committed; a failing subscriber must not
        # turn an accepted operation into an error for its caller.
        for callback in self._subscribers:
            try:
                callback(event)
            except Exception:
                log.exception(
                    "event_subscriber_failed",
                    event_id=event.event_id,
                    event_kind=event.event_kind.value,
                )

    def next_event_id(self) -> str:
        return f"evt-{len(self._events) + 1:06d}"

    def events(self, kind: Optional[EventKind] = None) -> list[EventRecord]:
        """Return events, optionally filtered by kind."""
        if kind is None:
            return list(self._events)
        return [e for e in self._events if e.event_kind == kind]

    @property
    def count(self) -> int:
        return len(self._events)

    @property
    def last_event(self) -> Optional[EventRecord]:
        return self._events[-1] if self._events else None
