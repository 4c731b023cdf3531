"""
JSON encoding of domain events for the outer layers (CLI output, transport).

Events are serialized whole by pydantic and restored through EVENT_TYPE_MAP,
keyed by the ``event_type`` discriminator. Nothing here persists events.
"""
from __future__ import annotations

import json

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

# Map event types to classes for deserialization
EVENT_TYPE_MAP: dict[str, type[DomainEvent]] = {
    "PaymentFileReceived": PaymentFileReceived,
    "PaymentFileValidated": PaymentFileValidated,
    "BankChannelAssigned": BankChannelAssigned,
    "FraudCheckCompleted": FraudCheckCompleted,
    "PaymentFileOptimized": PaymentFileOptimized,
    "OptimizedPaymentFileCreated": OptimizedPaymentFileCreated,
    "PaymentFileSubmittedToBank": PaymentFileSubmittedToBank,
}


def encode_event(event: DomainEvent) -> str:
    """Serialize an event to a JSON string."""
    return event.model_dump_json()


def decode_event(event_data: str) -> DomainEvent:
    """Deserialize an event from JSON.

    Raises:
        ValueError: If the event_type is missing or unknown
    """
    data = json.loads(event_data)
    event_type = data.get("event_type")

    event_class = EVENT_TYPE_MAP.get(event_type)
    if not event_class:
        raise ValueError(f"Unknown event type: {event_type}")

    return event_class.model_validate_json(event_data)


def encode_events(events: list[DomainEvent]) -> str:
    """Serialize a list of events to an indented JSON array."""
    return json.dumps([event.model_dump(mode="json") for event in events], indent=2)


__all__ = ["EVENT_TYPE_MAP", "decode_event", "encode_event", "encode_events"]
