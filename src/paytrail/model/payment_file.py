"""
Payment file value types.

A PaymentFile is immutable once created. Producing an optimized variant mints
a new PaymentFile with its own id; the two are linked through event metadata
(correlation id), never by mutating the original.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def new_id() -> str:
    """Mint a new opaque identifier."""
    return str(uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PaymentFile(BaseModel):
    """A received payment file and where its content is stored."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    storage_link: str
    received_at: datetime = Field(default_factory=utc_now)
    actor: str
    source: str


class BankChannel(StrEnum):
    SWIFT = "SWIFT"
    EBICS = "EBICS"


class FraudCheckPassed(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["passed"] = "passed"

    def __str__(self) -> str:
        return "Passed"


class FraudCheckFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["failed"] = "failed"
    reason: str

    def __str__(self) -> str:
        return f"Failed ({self.reason})"


FraudCheckResult = Annotated[
    Union[FraudCheckPassed, FraudCheckFailed],
    Field(discriminator="status"),
]


class OptimizationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    optimized: bool
    details: str


__all__ = [
    "BankChannel",
    "FraudCheckFailed",
    "FraudCheckPassed",
    "FraudCheckResult",
    "OptimizationResult",
    "PaymentFile",
    "new_id",
    "utc_now",
]
