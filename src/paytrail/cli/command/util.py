from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from paytrail.model.events import DomainEvent
from paytrail.model.payment_file import FraudCheckFailed
from paytrail.model.state import PaymentFileState
from paytrail.services.timeline_service import TimelineService
from paytrail.storage.codec import encode_events

console = Console()

UNSET = Text("—", style="dim")


def fmt_flag(value: Optional[bool]) -> Text:
    if value is None:
        return UNSET
    if value:
        return Text("yes", style="bold green")
    return Text("no", style="bold red")


def fmt_value(value: object) -> Text:
    if value is None:
        return UNSET
    return Text(str(value))


def timeline_table(correlation_id: str, events: list[DomainEvent]) -> Table:
    table = Table(title=f"Timeline {correlation_id}", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Time (UTC)", style="cyan", no_wrap=True)
    table.add_column("Event", style="blue")
    table.add_column("File", style="white", no_wrap=True)
    table.add_column("Actor", style="white")
    table.add_column("Description", style="white")

    entries = TimelineService().build(events)
    for n, (event, entry) in enumerate(zip(events, entries), start=1):
        table.add_row(
            str(n),
            entry.display_timestamp,
            entry.event_type,
            event.metadata.payment_file_id[:8],
            event.metadata.actor,
            entry.description,
        )
    return table


def state_table(correlation_id: str, state: PaymentFileState) -> Table:
    table = Table(title=f"State {correlation_id}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    fraud = state.fraud_check_result
    fraud_text = fmt_value(fraud)
    if isinstance(fraud, FraudCheckFailed):
        fraud_text.stylize("bold red")

    table.add_row("Payment file", fmt_value(state.payment_file.id if state.payment_file else None))
    table.add_row("Storage link", fmt_value(state.payment_file.storage_link if state.payment_file else None))
    table.add_row("Valid", fmt_flag(state.is_valid))
    table.add_row("Bank channel", fmt_value(state.bank_channel.value if state.bank_channel else None))
    table.add_row("Fraud check", fraud_text)
    table.add_row(
        "Optimization",
        fmt_value(state.optimization_result.details if state.optimization_result else None),
    )
    table.add_row(
        "Optimized file",
        fmt_value(state.optimized_payment_file.id if state.optimized_payment_file else None),
    )
    table.add_row(
        "Submitted at",
        fmt_value(state.submitted_at.strftime("%Y-%m-%d %H:%M:%S") if state.submitted_at else None),
    )
    return table


def print_events_json(events: list[DomainEvent]) -> None:
    console.print_json(encode_events(events))
