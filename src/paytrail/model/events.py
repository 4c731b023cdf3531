"""
Event sourcing models for payment file journeys.

Each event records one completed step in a payment file's processing workflow.
Events are immutable and append-only; the current state of a payment file is
always derived from them (see paytrail.storage.projection).

All events carry an EventMetadata envelope:
- event_id: generated per event (UUID)
- created_at: UTC creation time
- payment_file_id: the file the event is about
- actor / source: who triggered it, and from which channel
- correlation_id: optional grouping key; absent means "group by payment_file_id"

DomainEvent is a closed union discriminated by ``event_type``. Consumers dispatch over it with
``match`` and finish with ``assert_never`` so a type checker reports any
consumer that misses a newly added variant.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, Union, assert_never

from pydantic import BaseModel, ConfigDict, Field

from paytrail.model.payment_file import (
    BankChannel,
    FraudCheckResult,
    OptimizationResult,
    PaymentFile,
    new_id,
    utc_now,
)


class EventMetadata(BaseModel):
    """Envelope shared by every domain event."""

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utc_now)
    payment_file_id: str
    actor: str
    source: str
    correlation_id: Optional[str] = None

    @property
    def correlation_key(self) -> str:
        """Grouping key: the explicit correlation id, else the subject file id."""
        if self.correlation_id is not None:
            return self.correlation_id
        return self.payment_file_id


class Event(BaseModel):
    """Base class for all payment file events."""

    model_config = ConfigDict(frozen=True)

    event_type: str
    metadata: EventMetadata


class PaymentFileReceived(Event):
    """A payment file was received (imported) into the system."""

    event_type: Literal["PaymentFileReceived"] = "PaymentFileReceived"
    payment_file: PaymentFile


class PaymentFileValidated(Event):
    event_type: Literal["PaymentFileValidated"] = "PaymentFileValidated"
    is_valid: bool


class BankChannelAssigned(Event):
    event_type: Literal["BankChannelAssigned"] = "BankChannelAssigned"
    channel: BankChannel


class FraudCheckCompleted(Event):
    event_type: Literal["FraudCheckCompleted"] = "FraudCheckCompleted"
    result: FraudCheckResult


class PaymentFileOptimized(Event):
    event_type: Literal["PaymentFileOptimized"] = "PaymentFileOptimized"
    result: OptimizationResult


class OptimizedPaymentFileCreated(Event):
    """A new, optimized payment file was produced from an existing one.

    The metadata subject is the NEW file; the link back to the original file
    is carried by the correlation id.
    """

    event_type: Literal["OptimizedPaymentFileCreated"] = "OptimizedPaymentFileCreated"
    payment_file: PaymentFile


class PaymentFileSubmittedToBank(Event):
    event_type: Literal["PaymentFileSubmittedToBank"] = "PaymentFileSubmittedToBank"


DomainEvent = Union[
    PaymentFileReceived,
    PaymentFileValidated,
    BankChannelAssigned,
    FraudCheckCompleted,
    PaymentFileOptimized,
    OptimizedPaymentFileCreated,
    PaymentFileSubmittedToBank,
]


def event_metadata(event: DomainEvent) -> EventMetadata:
    """Extract the metadata envelope from any domain event."""
    match event:
        case PaymentFileReceived(metadata=metadata):
            return metadata
        case PaymentFileValidated(metadata=metadata):
            return metadata
        case BankChannelAssigned(metadata=metadata):
            return metadata
        case FraudCheckCompleted(metadata=metadata):
            return metadata
        case PaymentFileOptimized(metadata=metadata):
            return metadata
        case OptimizedPaymentFileCreated(metadata=metadata):
            return metadata
        case PaymentFileSubmittedToBank(metadata=metadata):
            return metadata
        case _:
            assert_never(event)


def correlation_key(event: DomainEvent) -> str:
    """Key under which the event is grouped with its journey."""
    return event_metadata(event).correlation_key


__all__ = [
    "BankChannelAssigned",
    "DomainEvent",
    "Event",
    "EventMetadata",
    "FraudCheckCompleted",
    "OptimizedPaymentFileCreated",
    "PaymentFileOptimized",
    "PaymentFileReceived",
    "PaymentFileSubmittedToBank",
    "PaymentFileValidated",
    "correlation_key",
    "event_metadata",
]
