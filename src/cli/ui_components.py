"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables/panels are reused by `exec`, `deploy`, `site-install` and `doctor`.
"""

from __future__ import annotations

from typing import Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ExecutionResult


def build_results_table(results: Sequence[ExecutionResult]) -> Table:
    """One row per executed command line."""

    table = Table(title="Drupal Console")
    table.add_column("Command", style="cyan", overflow="fold")
    table.add_column("Status", no_wrap=True)
    table.add_column("Exit", justify="right", style="white")
    table.add_column("Time", justify="right", style="dim")
    for result in results:
        status = Text("OK", style="green") if result.succeeded else Text("FAIL", style="bold red")
        table.add_row(
            result.command or "",
            status,
            str(result.exit_code),
            f"{result.execution_time:.2f}s",
        )
    return table


def build_commands_panel(commands: Sequence[str]) -> Panel:
    """Panel listing composed lines without running them (dry run)."""

    body = Text()
    for index, command in enumerate(commands, start=1):
        body.append(f"{index}. ", style="dim")
        body.append(f"{command}\n")
    return Panel(body, title=Text("Dry run", style="bold yellow"), border_style="yellow")


def build_output_panel(result: ExecutionResult) -> Panel | None:
    """Captured output of a failed command, if there is any."""

    if not result.message.strip():
        return None
    style = "green" if result.succeeded else "red"
    return Panel(Text(result.message.strip()), title="Output", border_style=style)
