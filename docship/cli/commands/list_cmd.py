"""List command - show available tasks and pipelines."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from docship.tasks.catalog import PIPELINES, TASKS

_console = Console()


def list_targets() -> None:
    """List tasks and pipelines."""
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("target")
    table.add_column("kind", style="dim")
    table.add_column("steps")

    for name in TASKS:
        table.add_row(name, "task", "")
    for name, steps in PIPELINES.items():
        table.add_row(name, "pipeline", " -> ".join(steps))

    _console.print(table)
