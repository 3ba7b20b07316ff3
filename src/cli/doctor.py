"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shlex
import shutil

import typer
from rich.console import Console
from rich.table import Table

from adapters.process_executor import SubprocessExecutor
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.services.drupal_console import UNKNOWN_VERSION, DrupalConsoleStack

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _settings(ctx: typer.Context) -> AppSettings:
    state = ctx.obj
    settings = getattr(state, "settings", None)
    return settings if isinstance(settings, AppSettings) else AppSettings()


def _check_executable(executable: str) -> tuple[bool, str]:
    """Resolve the first token of `executable` on PATH (or as a path)."""

    try:
        program = shlex.split(executable)[0]
    except (ValueError, IndexError):
        return False, f"Invalid executable: {executable!r}"
    resolved = shutil.which(program)
    if resolved is None:
        return False, f"'{program}' not found on PATH"
    return True, resolved


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = _settings(ctx)

    table = Table(title="dcstack Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_exec, detail_exec = _check_executable(settings.executable)
    table.add_row("Executable", "OK" if ok_exec else "FAIL", detail_exec)

    stack = DrupalConsoleStack(settings.executable, executor=SubprocessExecutor(settings))
    detected = stack.version() if ok_exec else UNKNOWN_VERSION
    ok_version = detected != UNKNOWN_VERSION
    table.add_row("Version", "OK" if ok_version else "FAIL", detected)

    # Config
    table.add_row("Root", "OK" if settings.root else "OPTIONAL", settings.root or "not set")
    table.add_row("URI", "OK" if settings.uri else "OPTIONAL", settings.uri or "not set")
    table.add_row("Stop on fail", "OK", str(settings.stop_on_fail))
    timeout = settings.command_timeout_seconds
    table.add_row("Timeout", "OK", f"{timeout}s" if timeout else "none")
    table.add_row("User config", "OK", str(get_user_env_file()))

    _console.print(table)

    if not ok_exec:
        _console.print(
            "\n[yellow]Note:[/yellow] install Drupal Console or run "
            "`dcstack doctor set-executable <path>`."
        )
        raise typer.Exit(code=1)


@app.command(name="set-executable")
def set_executable(
    path: str = typer.Argument(..., help="Path or name of the Drupal Console executable."),
) -> None:
    """Store the executable in the user config .env."""

    if not path.strip():
        raise typer.BadParameter("path is required")

    env_path = write_user_env_vars({"DCSTACK_EXECUTABLE": path.strip()})
    _console.print(f"[green]Saved executable to:[/green] {env_path}")
