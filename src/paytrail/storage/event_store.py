"""
In-memory event store: the composition of EventLog and CorrelationIndex.

One EventStore is created by the application's composition root and passed to
every command and query handler. It lives for the life of the process; there
is no teardown and no persistence.

Design:
- Append-only: events never modified or deleted
- Ordered: a single global append order, shared by every correlation group
- Consistent: log and index share one lock, so reads see both or neither
"""
from __future__ import annotations

import threading

from paytrail.model.events import DomainEvent
from paytrail.storage.correlation_index import CorrelationIndex
from paytrail.storage.event_log import EventLog


class EventStore:
    """Append-only event store with a correlation-keyed index.

    Usage:
        store = EventStore()
        store.append_event(event)
        events = store.get_events(correlation_id)
    """

    def __init__(self):
        self._lock = threading.RLock()
        self.log = EventLog(lock=self._lock)
        self.index = CorrelationIndex(self.log)

    def append_event(self, event: DomainEvent) -> DomainEvent:
        """Append an event and index it atomically. Returns the event unchanged."""
        return self.log.append(event)

    def get_all_events(self) -> list[DomainEvent]:
        """All events in append order (a snapshot, not a live view)."""
        return self.log.all()

    def get_events(self, correlation_id: str) -> list[DomainEvent]:
        """Events of one correlation group in append order; empty if unknown."""
        return self.index.get(correlation_id)

    def get_events_since(self, sequence_number: int) -> list[DomainEvent]:
        return self.log.since(sequence_number)

    def get_correlation_ids(self) -> list[str]:
        """Distinct correlation ids in order of first appearance."""
        return self.index.correlation_ids_in_order()

    def list_known_correlation_ids(self) -> set[str]:
        return self.index.list_known_correlation_ids()

    def get_latest_sequence_number(self) -> int:
        """Latest sequence number, or 0 if the store is empty."""
        return len(self.log)


__all__ = ["EventStore"]
