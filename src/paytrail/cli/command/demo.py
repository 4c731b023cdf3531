"""CLI command to replay the built-in demo journey."""
from __future__ import annotations

from paytrail.config import Settings
from paytrail.services.journey_service import DEMO_JOURNEY

from .run import replay, show


def run(*, settings: Settings, as_json: bool = False) -> int:
    service = replay(DEMO_JOURNEY, settings)
    return show(service, as_json=as_json)


__all__ = ["run"]
