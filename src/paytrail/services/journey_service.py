"""
Journey service - drives the in-memory store from a scripted list of steps.

The event store is volatile, so the CLI replays a journey script on every run.
A script is YAML (JSON also parses) with a top-level ``steps`` list:

    steps:
      - command: receive
        alias: original
        storage_link: /uploads/payments-2024-05.xml
      - command: validate
        file: original
        is_valid: true
      - command: assign-channel
        file: original
        bank_channel: SWIFT

Every step names a ``command`` plus that command's DTO fields. ``file`` refers
to an earlier step's ``alias`` and ``correlate`` joins the step to that
file's journey. ``actor`` and ``source`` default to Settings.

NO IMPORTS FROM:
- rich (console, table, prompt)
- typer
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional

import yaml
from pydantic import BaseModel, ValidationError

from paytrail.config import UPLOAD_PREFIX, Settings
from paytrail.model.commands import (
    AssignBankChannelDto,
    CompleteFraudCheckDto,
    CreateOptimizedPaymentFileDto,
    OptimizePaymentFileDto,
    ReceivePaymentFileDto,
    SubmitPaymentFileDto,
    ValidatePaymentFileDto,
)
from paytrail.model.events import DomainEvent
from paytrail.model.payment_file import new_id
from paytrail.services.payment_file_service import PaymentFileService

logger = logging.getLogger(__name__)


class JourneyError(ValueError):
    """Raised when a journey script cannot be loaded or executed."""


def load_journey(path: Path) -> list[dict[str, Any]]:
    """Load the steps of a journey script.

    Raises:
        JourneyError: If the file is missing, unreadable, unparsable, or has no
            step list
    """
    if not path.exists():
        raise JourneyError(f"Journey script not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise JourneyError(f"Cannot read journey script {path}: {e}") from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise JourneyError(f"Journey script is not valid YAML/JSON: {e}") from e
    return parse_steps(data)


def parse_steps(data: Any) -> list[dict[str, Any]]:
    steps = data.get("steps") if isinstance(data, dict) else None
    if not isinstance(steps, list):
        raise JourneyError("Journey script must contain a 'steps' list")
    for number, step in enumerate(steps, start=1):
        if not isinstance(step, dict) or not isinstance(step.get("command"), str):
            raise JourneyError(f"Step {number} must be a mapping with a 'command' string")
    return steps


class JourneyService:
    """Executes journey steps against a PaymentFileService."""

    def __init__(self, service: PaymentFileService, settings: Optional[Settings] = None):
        self._service = service
        self._settings = settings or Settings()
        self._aliases: dict[str, str] = {}
        self._handlers: dict[str, Callable[[dict[str, Any]], DomainEvent]] = {
            "receive": self._receive,
            "validate": self._validate,
            "assign-channel": self._assign_channel,
            "fraud-check": self._fraud_check,
            "optimize": self._optimize,
            "create-optimized": self._create_optimized,
            "submit": self._submit,
        }

    @property
    def aliases(self) -> dict[str, str]:
        return dict(self._aliases)

    def run(self, steps: list[dict[str, Any]]) -> list[DomainEvent]:
        """Execute steps in order and return the stored events.

        Raises:
            JourneyError: On an unknown command, unknown alias, or bad fields
        """
        events: list[DomainEvent] = []
        for number, step in enumerate(steps, start=1):
            command = step.get("command")
            handler = self._handlers.get(command) if isinstance(command, str) else None
            if handler is None:
                raise JourneyError(
                    f"Step {number}: unknown command {command!r} "
                    f"(expected one of: {', '.join(self._handlers)})"
                )
            fields = {k: v for k, v in step.items() if k != "command"}
            try:
                events.append(handler(fields))
            except ValidationError as e:
                raise JourneyError(f"Step {number} ({command}): {e}") from e
            except JourneyError as e:
                raise JourneyError(f"Step {number} ({command}): {e}") from e
            logger.debug("Step %d (%s) stored %s", number, command, events[-1].event_type)
        return events

    # -- helpers --

    def _with_defaults(self, fields: dict[str, Any]) -> dict[str, Any]:
        data = dict(fields)
        data.setdefault("actor", self._settings.default_actor)
        data.setdefault("source", self._settings.default_source)
        return data

    def _resolve_file(self, fields: dict[str, Any], target: str = "payment_file_id") -> dict[str, Any]:
        data = self._with_defaults(fields)
        alias = data.pop("file", None)
        if alias is not None:
            data[target] = self._lookup(alias)
        correlate = data.pop("correlate", None)
        if correlate is not None:
            data["correlation_id"] = self._lookup(correlate)
        return data

    def _lookup(self, alias: Any) -> str:
        if not isinstance(alias, str):
            raise JourneyError(f"file alias must be a string, got {alias!r}")
        if alias not in self._aliases:
            raise JourneyError(f"unknown file alias {alias!r}")
        return self._aliases[alias]

    def _alias(self, data: dict[str, Any]) -> Optional[str]:
        alias = data.pop("alias", None)
        if alias is not None and not isinstance(alias, str):
            raise JourneyError(f"alias must be a string, got {alias!r}")
        return alias

    def _register(self, alias: Optional[str], payment_file_id: str) -> None:
        if alias:
            self._aliases[alias] = payment_file_id

    def _build(self, model: type[BaseModel], data: dict[str, Any]) -> Any:
        return model.model_validate(data)

    # -- step handlers --

    def _receive(self, fields: dict[str, Any]) -> DomainEvent:
        data = self._with_defaults(fields)
        alias = self._alias(data)
        file_id = data.pop("id", None) or new_id()
        payment_file = {
            "id": file_id,
            "storage_link": data.pop("storage_link", None) or f"{UPLOAD_PREFIX}{file_id}",
            "actor": data["actor"],
            "source": data["source"],
        }
        received_at = data.pop("received_at", None)
        if received_at is not None:
            payment_file["received_at"] = received_at
        data["payment_file"] = payment_file
        event = self._service.receive_payment_file(self._build(ReceivePaymentFileDto, data))
        self._register(alias, file_id)
        return event

    def _validate(self, fields: dict[str, Any]) -> DomainEvent:
        dto = self._build(ValidatePaymentFileDto, self._resolve_file(fields))
        return self._service.validate_payment_file(dto)

    def _assign_channel(self, fields: dict[str, Any]) -> DomainEvent:
        dto = self._build(AssignBankChannelDto, self._resolve_file(fields))
        return self._service.assign_bank_channel(dto)

    def _fraud_check(self, fields: dict[str, Any]) -> DomainEvent:
        dto = self._build(CompleteFraudCheckDto, self._resolve_file(fields))
        return self._service.complete_fraud_check(dto)

    def _optimize(self, fields: dict[str, Any]) -> DomainEvent:
        dto = self._build(OptimizePaymentFileDto, self._resolve_file(fields))
        return self._service.optimize_payment_file(dto)

    def _create_optimized(self, fields: dict[str, Any]) -> DomainEvent:
        data = self._resolve_file(fields, target="original_payment_file_id")
        alias = self._alias(data)
        new_file_id = data.get("new_payment_file_id") or new_id()
        data["new_payment_file_id"] = new_file_id
        if not data.get("storage_link"):
            data["storage_link"] = f"{UPLOAD_PREFIX}{new_file_id}"
        event = self._service.create_optimized_payment_file(
            self._build(CreateOptimizedPaymentFileDto, data)
        )
        self._register(alias, new_file_id)
        return event

    def _submit(self, fields: dict[str, Any]) -> DomainEvent:
        dto = self._build(SubmitPaymentFileDto, self._resolve_file(fields))
        return self._service.submit_payment_file(dto)


DEMO_JOURNEY: list[dict[str, Any]] = [
    {"command": "receive", "alias": "original", "actor": "Payments Desk", "source": "UI"},
    {"command": "validate", "file": "original", "is_valid": True},
    {"command": "assign-channel", "file": "original", "bank_channel": "SWIFT"},
    {"command": "fraud-check", "file": "original", "passed": True},
    {
        "command": "optimize",
        "file": "original",
        "optimized": True,
        "details": "Merged 12 single payments into 3 batches",
    },
    {"command": "create-optimized", "file": "original", "alias": "optimized"},
    {"command": "submit", "file": "optimized", "correlate": "original"},
]


__all__ = [
    "DEMO_JOURNEY",
    "JourneyError",
    "JourneyService",
    "load_journey",
    "parse_steps",
]
