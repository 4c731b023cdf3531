"""
Correlation index over the event log.

Groups events by correlation key (explicit correlation id, else the subject
payment file id) so a whole journey, including events about derived optimized
files, can be read back without scanning the full log. The index subscribes to
an EventLog and shares that log's lock; buckets are updated in the same
critical section as the append.
"""
from __future__ import annotations

from paytrail.model.events import DomainEvent, correlation_key
from paytrail.storage.event_log import EventLog


class CorrelationIndex:
    """Mapping from correlation key to the ordered events sharing it."""

    def __init__(self, log: EventLog):
        """Attach to a log, indexing any events it already holds."""
        self._log = log
        self._lock = log.lock
        self._buckets: dict[str, list[DomainEvent]] = {}
        log.subscribe(self.index_on, rollback=self.unindex)

    def index_on(self, event: DomainEvent) -> None:
        """Add one event to its correlation bucket, creating the bucket if needed."""
        key = correlation_key(event)
        with self._lock:
            self._buckets.setdefault(key, []).append(event)

    def unindex(self, event: DomainEvent) -> None:
        """Remove an event that was just indexed, dropping its bucket if emptied."""
        key = correlation_key(event)
        with self._lock:
            bucket = self._buckets.get(key)
            if bucket and bucket[-1] is event:
                bucket.pop()
                if not bucket:
                    del self._buckets[key]

    def get(self, correlation_id: str) -> list[DomainEvent]:
        """Events for a correlation id in append order; empty if unknown."""
        with self._lock:
            return list(self._buckets.get(correlation_id, ()))

    def list_known_correlation_ids(self) -> set[str]:
        """Every distinct correlation key carried by a stored event.

        Derived from the log itself rather than the bucket keys.
        """
        return {correlation_key(event) for event in self._log.all()}

    def correlation_ids_in_order(self) -> list[str]:
        """Distinct correlation keys ordered by first appearance in the log."""
        return list(dict.fromkeys(correlation_key(event) for event in self._log.all()))


__all__ = ["CorrelationIndex"]
