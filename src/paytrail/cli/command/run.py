"""
CLI command to replay a journey script into a fresh in-memory event store.

The store only lives for this invocation: every run starts empty, applies the
script's steps in order, then reports what the event log and its projections
look like.

Usage:
    paytrail run SCRIPT [OPTIONS]

Options:
    --correlation-id ID   Only show one correlation group
    --json                Print the stored events as JSON
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from paytrail.config import Settings
from paytrail.services.journey_service import JourneyError, JourneyService, load_journey
from paytrail.services.payment_file_service import PaymentFileService
from paytrail.storage.event_store import EventStore

from .util import console, print_events_json, state_table, timeline_table


def replay(steps: list[dict[str, Any]], settings: Settings) -> PaymentFileService:
    """Build a store, wire the handlers to it and apply the steps."""
    service = PaymentFileService(EventStore())
    JourneyService(service, settings).run(steps)
    return service


def show(service: PaymentFileService, correlation_id: Optional[str] = None, as_json: bool = False) -> int:
    """Print timelines and states for every (or one) correlation group."""
    if correlation_id is not None:
        correlation_ids = [correlation_id]
    else:
        correlation_ids = service.get_correlation_ids()

    if as_json:
        if correlation_id is not None:
            print_events_json(service.get_events_by_correlation_id(correlation_id))
        else:
            print_events_json(service.get_all_events())
        return 0

    total = len(service.get_all_events())
    journeys = len(service.get_correlation_ids())
    console.print(f"[bold]Stored {total} events across {journeys} journey(s)[/bold]")

    for cid in correlation_ids:
        events = service.get_events_by_correlation_id(cid)
        console.print()
        if not events:
            console.print(f"[yellow]No events for correlation id[/] [bold]{cid}[/]")
            continue
        console.print(timeline_table(cid, events))
        console.print(state_table(cid, service.get_state(cid)))
    return 0


def run(
    *,
    script: Path,
    settings: Settings,
    correlation_id: Optional[str] = None,
    as_json: bool = False,
) -> int:
    """Replay a journey script and display the result.

    Returns an exit code (0 success; 1 when the script is missing or invalid).
    """
    try:
        steps = load_journey(script)
        service = replay(steps, settings)
    except JourneyError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    return show(service, correlation_id=correlation_id, as_json=as_json)


__all__ = ["replay", "run", "show"]
