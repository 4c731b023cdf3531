"""Paytrail - event-sourced tracking of payment file journeys."""

__version__ = "0.1.0"
