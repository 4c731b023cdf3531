"""
Timeline service - human-readable event history for a journey.

Produces one TimelineEntry per event, in the order given, for display by
the CLI (or any other shell). No formatting library is used here.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, assert_never

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

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class TimelineEntry:
    timestamp: datetime
    correlation_id: str
    event_type: str
    description: str

    @property
    def display_timestamp(self) -> str:
        return self.timestamp.strftime(TIMESTAMP_FORMAT)


def describe_event(event: DomainEvent) -> str:
    """One-line description of what an event records."""
    match event:
        case PaymentFileReceived():
            return "Payment file imported"
        case PaymentFileValidated():
            return f"Payment file validated: {str(event.is_valid).lower()}"
        case BankChannelAssigned():
            return f"Payment file bank channel assigned: {event.channel.value}"
        case FraudCheckCompleted():
            return f"Payment file fraud check completed: {event.result}"
        case PaymentFileOptimized():
            return f"Payment file optimized: {event.result.details}"
        case OptimizedPaymentFileCreated():
            return f"Optimized payment file created: {event.payment_file.id}"
        case PaymentFileSubmittedToBank():
            return "Payment file submitted to bank"
        case _:
            assert_never(event)


class TimelineService:
    """Builds timeline entries from event sequences."""

    def build(self, events: Iterable[DomainEvent]) -> list[TimelineEntry]:
        return [
            TimelineEntry(
                timestamp=event.metadata.created_at,
                correlation_id=event.metadata.correlation_key,
                event_type=event.event_type,
                description=describe_event(event),
            )
            for event in events
        ]


__all__ = ["TIMESTAMP_FORMAT", "TimelineEntry", "TimelineService", "describe_event"]
