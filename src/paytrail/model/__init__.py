from __future__ import annotations

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
    OptimizationResult,
    PaymentFile,
)
from paytrail.model.state import PaymentFileState

__all__ = [
    "BankChannel",
    "BankChannelAssigned",
    "DomainEvent",
    "EventMetadata",
    "FraudCheckCompleted",
    "FraudCheckFailed",
    "FraudCheckPassed",
    "OptimizationResult",
    "OptimizedPaymentFileCreated",
    "PaymentFile",
    "PaymentFileOptimized",
    "PaymentFileReceived",
    "PaymentFileState",
    "PaymentFileSubmittedToBank",
    "PaymentFileValidated",
]
