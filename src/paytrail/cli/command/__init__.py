from __future__ import annotations

# Command implementations for paytrail CLI.
# Each command module exposes a `run(...)` function that performs the action
# and prints to the console. Typer wrappers in paytrail.cli.app delegate here.

__all__ = [
    "demo",
    "run",
]
