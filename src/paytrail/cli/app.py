from __future__ import annotations

"""
Paytrail CLI Wrapper (Typer + Rich)

Replays payment file journeys into an in-memory event store and shows the
resulting correlation groups, timelines and projected states. Nothing is
persisted between runs.

Defaults for actor/source come from:
  --actor/--source / PAYTRAIL_ACTOR, PAYTRAIL_SOURCE env vars / built-in defaults
"""

from pathlib import Path
from typing import Optional

import typer

from paytrail.config import Settings
from paytrail.logging_config import configure_logging

APP_HELP = "Paytrail CLI (event-sourced payment file journeys)"
HELP_CORRELATION = "Only show this correlation id"
HELP_JSON = "Print the stored events as JSON instead of tables"

app = typer.Typer(no_args_is_help=True, add_completion=False, help=APP_HELP)


@app.callback()
def main(
    ctx: typer.Context,
    actor: Optional[str] = typer.Option(
        None, "--actor", envvar="PAYTRAIL_ACTOR", help="Default actor for steps without one"
    ),
    source: Optional[str] = typer.Option(
        None, "--source", envvar="PAYTRAIL_SOURCE", help="Default source for steps without one"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Paytrail CLI — journeys are replayed in memory on every run."""
    settings = Settings.resolve(actor=actor, source=source, log_level="DEBUG" if verbose else None)
    configure_logging(settings.log_level)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


@app.command()
def run(
    ctx: typer.Context,
    script: Path = typer.Argument(..., help="Journey script (YAML or JSON) with a 'steps' list"),
    correlation_id: Optional[str] = typer.Option(None, "--correlation-id", "-c", help=HELP_CORRELATION),
    as_json: bool = typer.Option(False, "--json", help=HELP_JSON),
):
    """Replay a journey script and show timelines and projected state.

    Examples:
      paytrail run journeys/happy-path.yml
      paytrail run journeys/rejected.yml --correlation-id 3f2b...
      paytrail --actor "Ops Bot" run journeys/batch.json --json
    """
    from paytrail.cli.command import run as cmd_run

    code = cmd_run.run(
        script=script,
        settings=_settings(ctx),
        correlation_id=correlation_id,
        as_json=as_json,
    )
    raise typer.Exit(code=code)


@app.command()
def demo(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help=HELP_JSON),
):
    """Replay the built-in journey: receive, validate, SWIFT, fraud check,
    optimize, create the optimized file and submit it to the bank."""
    from paytrail.cli.command import demo as cmd_demo

    code = cmd_demo.run(settings=_settings(ctx), as_json=as_json)
    raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
