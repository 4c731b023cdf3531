"""
Command DTOs accepted from the transport layer.

Each DTO names the subject payment file, who issued the command (actor), the
originating subsystem (source) and an optional correlation id. Payload fields
are command specific. DTOs are plain value objects; turning them into events
is the job of paytrail.services.payment_file_service.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from paytrail.model.payment_file import PaymentFile, utc_now


class CommandDto(BaseModel):
    model_config = ConfigDict(frozen=True)

    actor: str
    source: str
    correlation_id: Optional[str] = None


class ReceivePaymentFileDto(CommandDto):
    payment_file: PaymentFile


class ValidatePaymentFileDto(CommandDto):
    payment_file_id: str
    is_valid: bool


class AssignBankChannelDto(CommandDto):
    payment_file_id: str
    bank_channel: str  # "SWIFT" or anything else (EBICS)


class CompleteFraudCheckDto(CommandDto):
    payment_file_id: str
    passed: bool
    error: Optional[str] = None


class OptimizePaymentFileDto(CommandDto):
    payment_file_id: str
    optimized: bool
    details: str


class CreateOptimizedPaymentFileDto(CommandDto):
    original_payment_file_id: str
    new_payment_file_id: str
    storage_link: str
    received_at: datetime = Field(default_factory=utc_now)


class SubmitPaymentFileDto(CommandDto):
    payment_file_id: str


__all__ = [
    "AssignBankChannelDto",
    "CommandDto",
    "CompleteFraudCheckDto",
    "CreateOptimizedPaymentFileDto",
    "OptimizePaymentFileDto",
    "ReceivePaymentFileDto",
    "SubmitPaymentFileDto",
    "ValidatePaymentFileDto",
]
