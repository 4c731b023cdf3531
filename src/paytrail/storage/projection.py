"""
State projection for payment file journeys.

Folds an ordered event sequence into a PaymentFileState, starting from the
empty state and applying each event left to right. The fold is total: no event
is rejected because of prior state, and events arriving out of their logical
workflow order simply leave the corresponding fields unset. Later events of
the same kind overwrite earlier ones.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional, assert_never

from paytrail.model.events import (
    BankChannelAssigned,
    DomainEvent,
    FraudCheckCompleted,
    OptimizedPaymentFileCreated,
    PaymentFileOptimized,
    PaymentFileReceived,
    PaymentFileSubmittedToBank,
    PaymentFileValidated,
)
from paytrail.model.state import PaymentFileState
from paytrail.storage.event_store import EventStore


def apply_event(state: PaymentFileState, event: DomainEvent) -> PaymentFileState:
    """Return a new state with one event's effect applied."""
    match event:
        case PaymentFileReceived():
            return state.model_copy(update={"payment_file": event.payment_file})
        case PaymentFileValidated():
            return state.model_copy(update={"is_valid": event.is_valid})
        case BankChannelAssigned():
            return state.model_copy(update={"bank_channel": event.channel})
        case FraudCheckCompleted():
            return state.model_copy(update={"fraud_check_result": event.result})
        case PaymentFileOptimized():
            return state.model_copy(update={"optimization_result": event.result})
        case OptimizedPaymentFileCreated():
            return state.model_copy(update={"optimized_payment_file": event.payment_file})
        case PaymentFileSubmittedToBank():
            return state.model_copy(update={"submitted_at": event.metadata.created_at})
        case _:
            assert_never(event)


def project(events: Iterable[DomainEvent]) -> PaymentFileState:
    """Fold events, in the given order, into a state snapshot."""
    state = PaymentFileState()
    for event in events:
        state = apply_event(state, event)
    return state


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class ProjectionBuilder:
    """Builds journey states on demand from an event store.

    Nothing is cached: every call replays the relevant events.
    """

    def __init__(self, event_store: EventStore):
        self._store = event_store

    def build(self, correlation_id: str, as_of: Optional[datetime] = None) -> PaymentFileState:
        """Project one correlation group.

        Args:
            correlation_id: Journey to project
            as_of: Only apply events created at or before this time. A naive
                datetime is taken to be UTC

        Returns:
            PaymentFileState (empty state for an unknown correlation id)
        """
        events = self._store.get_events(correlation_id)
        if as_of is not None:
            cutoff = _as_utc(as_of)
            events = [e for e in events if _as_utc(e.metadata.created_at) <= cutoff]
        return project(events)

    def build_all(self) -> dict[str, PaymentFileState]:
        """Project every known journey, keyed by correlation id in first-seen order."""
        return {
            correlation_id: self.build(correlation_id)
            for correlation_id in self._store.get_correlation_ids()
        }


__all__ = ["ProjectionBuilder", "apply_event", "project"]
