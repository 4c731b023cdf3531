"""Derived, point-in-time state of a payment file journey.

PaymentFileState is never stored or mutated in place; it is always the fold
of an ordered event sequence (see paytrail.storage.projection).
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from paytrail.model.payment_file import (
    BankChannel,
    FraudCheckResult,
    OptimizationResult,
    PaymentFile,
)


class PaymentFileState(BaseModel):
    model_config = ConfigDict(frozen=True)

    payment_file: Optional[PaymentFile] = None
    is_valid: Optional[bool] = None
    bank_channel: Optional[BankChannel] = None
    fraud_check_result: Optional[FraudCheckResult] = None
    optimization_result: Optional[OptimizationResult] = None
    optimized_payment_file: Optional[PaymentFile] = None
    submitted_at: Optional[datetime] = None


__all__ = ["PaymentFileState"]
