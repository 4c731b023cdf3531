"""
Central configuration for Paytrail.

Settings are resolved in priority order:
  1. Explicit value (CLI option)
  2. PAYTRAIL_* environment variable
  3. Built-in default
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_FRAUD_FAILURE_REASON = "Fraud check failed"
UPLOAD_PREFIX = "/uploads/"

DEFAULT_ACTOR = "System"
DEFAULT_SOURCE = "CLI"
DEFAULT_LOG_LEVEL = "WARNING"


def _pick(explicit: Optional[str], env_var: str, default: str) -> str:
    if explicit:
        return explicit
    env = os.environ.get(env_var)
    if env:
        return env
    return default


@dataclass
class Settings:
    """Defaults applied to commands that do not name their own actor/source."""

    default_actor: str = DEFAULT_ACTOR
    default_source: str = DEFAULT_SOURCE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def resolve(
        cls,
        actor: Optional[str] = None,
        source: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> Settings:
        """Resolve settings from explicit values, env vars, or defaults.

        Args:
            actor: Explicit actor (highest priority)
            source: Explicit source
            log_level: Explicit log level name

        Returns:
            Settings with every field populated
        """
        return cls(
            default_actor=_pick(actor, "PAYTRAIL_ACTOR", DEFAULT_ACTOR),
            default_source=_pick(source, "PAYTRAIL_SOURCE", DEFAULT_SOURCE),
            log_level=_pick(log_level, "PAYTRAIL_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )


__all__ = [
    "DEFAULT_FRAUD_FAILURE_REASON",
    "UPLOAD_PREFIX",
    "Settings",
]
