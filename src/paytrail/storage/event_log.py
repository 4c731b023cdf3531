"""
Append-only, in-memory event log.

The log holds every domain event ever recorded, in append order. It never
validates or rewrites stored events, and only removes one to undo an append
that a subscriber failed. Subscribers (such as the correlation
index) are notified inside the same critical section as the append, so a
reader holding the shared lock never observes a log entry without its
derived index entry, or the reverse.

State is process-local and volatile; nothing is written to disk.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from paytrail.model.events import DomainEvent, event_metadata

logger = logging.getLogger(__name__)

Subscriber = Callable[[DomainEvent], None]


class EventLog:
    """Thread-safe append-only sequence of domain events.

    Usage:
        log = EventLog()
        log.append(event)
        events = log.all()
    """

    def __init__(self, lock: Optional[threading.RLock] = None):
        """Initialize an empty log.

        Args:
            lock: Lock guarding the log and its subscribers. Share it with any
                structure that must stay consistent with the log.
        """
        self._lock = lock if lock is not None else threading.RLock()
        self._events: list[DomainEvent] = []
        self._subscribers: list[tuple[Subscriber, Optional[Subscriber]]] = []

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def subscribe(
        self,
        subscriber: Subscriber,
        replay: bool = True,
        rollback: Optional[Subscriber] = None,
    ) -> None:
        """Register a callback invoked synchronously for every append.

        Args:
            subscriber: Callable receiving each appended event
            replay: Feed already-stored events to the subscriber first, in
                append order, so late subscribers catch up
            rollback: Callable that undoes the subscriber's effect for one
                event; used when a later subscriber fails the same append
        """
        with self._lock:
            if replay:
                for event in self._events:
                    subscriber(event)
            self._subscribers.append((subscriber, rollback))

    def append(self, event: DomainEvent) -> DomainEvent:
        """Store an event at the end of the log and return it unchanged.

        The append is all-or-nothing: if a subscriber raises, the event is
        removed again, subscribers already notified are rolled back, and the
        error propagates to the caller.
        """
        with self._lock:
            self._events.append(event)
            notified: list[Optional[Subscriber]] = []
            try:
                for subscriber, rollback in self._subscribers:
                    subscriber(event)
                    notified.append(rollback)
            except Exception:
                self._events.pop()
                for rollback in reversed(notified):
                    if rollback is not None:
                        rollback(event)
                logger.warning("Append of %s rolled back after subscriber failure", event.event_type)
                raise
            sequence = len(self._events)

        metadata = event_metadata(event)
        logger.debug(
            "Appended %s #%d (event_id=%s, correlation=%s)",
            event.event_type,
            sequence,
            metadata.event_id,
            metadata.correlation_key,
        )
        return event

    def all(self) -> list[DomainEvent]:
        """Snapshot of every stored event in append order."""
        with self._lock:
            return list(self._events)

    def since(self, sequence_number: int) -> list[DomainEvent]:
        """Events appended after the given 1-based sequence number."""
        with self._lock:
            return self._events[max(sequence_number, 0):]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


__all__ = ["EventLog"]
