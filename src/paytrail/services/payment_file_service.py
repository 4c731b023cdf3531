"""
Payment file service - command handlers and queries over the event store.

Each command handler turns a DTO into exactly one domain event: it mints fresh
metadata (new event id, current UTC time, subject file id, actor, source and
correlation id), wraps the DTO payload in the matching event variant, appends
it to the shared EventStore and returns the stored event.

Handlers do not validate workflow order. Any command is accepted at any time,
including sequences that make little business sense (e.g. submitting to a
bank before a fraud check); the projection simply reflects what was recorded.

NO IMPORTS FROM:
- rich (console, table, prompt)
- typer

The EventStore is injected by the composition root.
"""
from __future__ import annotations

import logging
from typing import Optional

from paytrail.config import DEFAULT_FRAUD_FAILURE_REASON
from paytrail.model.commands import (
    AssignBankChannelDto,
    CommandDto,
    CompleteFraudCheckDto,
    CreateOptimizedPaymentFileDto,
    OptimizePaymentFileDto,
    ReceivePaymentFileDto,
    SubmitPaymentFileDto,
    ValidatePaymentFileDto,
)
from paytrail.model.events import (
    BankChannelAssigned,
    DomainEvent,
    EventMetadata,
    FraudCheckCompleted,
    OptimizedPaymentFileCreated,
    PaymentFileOptimized,
    PaymentFileReceived,
    PaymentFileSubmittedToBank,
    PaymentFileValidated,
)
from paytrail.model.payment_file import (
    BankChannel,
    FraudCheckFailed,
    FraudCheckPassed,
    FraudCheckResult,
    OptimizationResult,
    PaymentFile,
)
from paytrail.model.state import PaymentFileState
from paytrail.storage.event_store import EventStore
from paytrail.storage.projection import ProjectionBuilder

logger = logging.getLogger(__name__)


def parse_bank_channel(value: str) -> BankChannel:
    """Map a channel string to a BankChannel.

    Only the exact, case-sensitive string "SWIFT" selects SWIFT. Every other
    value, including "swift" and unknown names, falls back to EBICS.
    """
    if value == BankChannel.SWIFT.value:
        return BankChannel.SWIFT
    if value != BankChannel.EBICS.value:
        logger.info("Unrecognized bank channel %r, falling back to EBICS", value)
    return BankChannel.EBICS


def fraud_check_result(passed: bool, error: Optional[str]) -> FraudCheckResult:
    """Build a fraud check result, substituting the default failure reason."""
    if passed:
        return FraudCheckPassed()
    if error is None:
        logger.debug("Fraud check failed without a reason, using default")
        return FraudCheckFailed(reason=DEFAULT_FRAUD_FAILURE_REASON)
    return FraudCheckFailed(reason=error)


def _metadata(
    dto: CommandDto, payment_file_id: str, correlation_id: Optional[str] = None
) -> EventMetadata:
    return EventMetadata(
        payment_file_id=payment_file_id,
        actor=dto.actor,
        source=dto.source,
        correlation_id=dto.correlation_id if dto.correlation_id is not None else correlation_id,
    )


class PaymentFileService:
    """Command and query handlers for payment file journeys.

    Responsibilities:
    - Turn command DTOs into stored domain events
    - Expose correlation ids, event timelines and projected state

    Does NOT:
    - Validate workflow order
    - Serialize anything for transport
    """

    def __init__(self, event_store: EventStore):
        self._store = event_store
        self._projections = ProjectionBuilder(event_store)

    # -- Commands --

    def receive_payment_file(self, dto: ReceivePaymentFileDto) -> PaymentFileReceived:
        event = PaymentFileReceived(
            metadata=_metadata(dto, dto.payment_file.id),
            payment_file=dto.payment_file,
        )
        self._store.append_event(event)
        return event

    def validate_payment_file(self, dto: ValidatePaymentFileDto) -> PaymentFileValidated:
        event = PaymentFileValidated(
            metadata=_metadata(dto, dto.payment_file_id),
            is_valid=dto.is_valid,
        )
        self._store.append_event(event)
        return event

    def assign_bank_channel(self, dto: AssignBankChannelDto) -> BankChannelAssigned:
        event = BankChannelAssigned(
            metadata=_metadata(dto, dto.payment_file_id),
            channel=parse_bank_channel(dto.bank_channel),
        )
        self._store.append_event(event)
        return event

    def complete_fraud_check(self, dto: CompleteFraudCheckDto) -> FraudCheckCompleted:
        event = FraudCheckCompleted(
            metadata=_metadata(dto, dto.payment_file_id),
            result=fraud_check_result(dto.passed, dto.error),
        )
        self._store.append_event(event)
        return event

    def optimize_payment_file(self, dto: OptimizePaymentFileDto) -> PaymentFileOptimized:
        event = PaymentFileOptimized(
            metadata=_metadata(dto, dto.payment_file_id),
            result=OptimizationResult(optimized=dto.optimized, details=dto.details),
        )
        self._store.append_event(event)
        return event

    def create_optimized_payment_file(
        self, dto: CreateOptimizedPaymentFileDto
    ) -> OptimizedPaymentFileCreated:
        """Record a new optimized file derived from an existing one.

        The event is about the new file, but is correlated to the original
        file's journey unless the DTO names another correlation id.
        """
        new_file = PaymentFile(
            id=dto.new_payment_file_id,
            storage_link=dto.storage_link,
            received_at=dto.received_at,
            actor=dto.actor,
            source=dto.source,
        )
        event = OptimizedPaymentFileCreated(
            metadata=_metadata(
                dto, dto.new_payment_file_id, correlation_id=dto.original_payment_file_id
            ),
            payment_file=new_file,
        )
        self._store.append_event(event)
        return event

    def submit_payment_file(self, dto: SubmitPaymentFileDto) -> PaymentFileSubmittedToBank:
        event = PaymentFileSubmittedToBank(metadata=_metadata(dto, dto.payment_file_id))
        self._store.append_event(event)
        return event

    # -- Queries --

    def get_correlation_ids(self) -> list[str]:
        return self._store.get_correlation_ids()

    def get_events_by_correlation_id(self, correlation_id: str) -> list[DomainEvent]:
        return self._store.get_events(correlation_id)

    def get_all_events(self) -> list[DomainEvent]:
        return self._store.get_all_events()

    def get_state(self, correlation_id: str) -> PaymentFileState:
        """Current projected state of one journey (empty if unknown)."""
        return self._projections.build(correlation_id)


__all__ = ["PaymentFileService", "fraud_check_result", "parse_bank_channel"]
