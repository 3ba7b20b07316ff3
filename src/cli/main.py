"""Typer CLI: `dcstack`.

Thin layer over `DrupalConsoleStack`: global flags become persistent
options, command flags become next-command options, and the stack runs with
the configured stop-on-fail policy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.task_printer import RichTaskPrinter
from cli.doctor import app as doctor_app
from cli.ui_components import build_commands_panel, build_output_panel, build_results_table
from core.config import AppSettings
from core.errors import TaskError
from core.log import setup_logging
from core.services.drupal_console import DrupalConsoleStack

app = typer.Typer(no_args_is_help=True, help="Run Drupal Console commands as a stack.")
app.add_typer(doctor_app, name="doctor")

_console = Console()


@dataclass
class CliState:
    settings: AppSettings
    verbose: Optional[int] = None
    no_debug: bool = False


def _state(ctx: typer.Context) -> CliState:
    state = ctx.obj
    if not isinstance(state, CliState):
        state = CliState(settings=AppSettings())
        ctx.obj = state
    return state


def _build_stack(ctx: typer.Context) -> DrupalConsoleStack:
    state = _state(ctx)
    stack = DrupalConsoleStack.from_settings(state.settings, printer=RichTaskPrinter())
    if state.no_debug:
        stack.no_debug()
    if state.verbose is not None:
        stack.verbosity(state.verbose)
    return stack


def _finish(stack: DrupalConsoleStack, *, dry_run: bool) -> None:
    """Run (or only show) the queued commands and map failure to an exit code."""

    if dry_run:
        _console.print(build_commands_panel(stack.commands))
        return

    try:
        result = stack.run()
    except TaskError as exc:
        _console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=2) from exc

    _console.print(build_results_table(stack.results))
    if not result.succeeded:
        panel = build_output_panel(result)
        if panel is not None:
            _console.print(panel)
        raise typer.Exit(code=result.exit_code or 1)


@app.callback()
def main(
    ctx: typer.Context,
    executable: Optional[str] = typer.Option(None, "--executable", "-x", help="Drupal Console executable."),
    root: Optional[str] = typer.Option(None, "--root", help="Drupal root directory."),
    uri: Optional[str] = typer.Option(None, "--uri", help="Site URI (multi-site)."),
    env: Optional[str] = typer.Option(None, "--env", help="Console environment, e.g. prod."),
    verbose: Optional[int] = typer.Option(None, "--verbose", "-v", min=1, max=3, help="Verbosity 1-3."),
    no_debug: bool = typer.Option(False, "--no-debug", help="Switch off debug mode."),
    keep_going: bool = typer.Option(False, "--keep-going", help="Do not abort the stack on a failure."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print task progress."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Diagnostic log level."),
) -> None:
    """Global options apply to every command of the stack."""

    overrides: dict[str, object] = {
        "executable": executable,
        "root": root,
        "uri": uri,
        "environment": env,
        "log_level": log_level,
    }
    if keep_going:
        overrides["stop_on_fail"] = False
    if quiet:
        overrides["printed"] = False
    overrides = {k: v for k, v in overrides.items() if v is not None}

    settings = AppSettings().model_copy(update=overrides)
    setup_logging(settings.log_level)
    ctx.obj = CliState(settings=settings, verbose=verbose, no_debug=no_debug)


@app.command("exec")
def exec_(
    ctx: typer.Context,
    commands: List[str] = typer.Argument(..., help="Console commands, e.g. 'cache:rebuild all'."),
    no_yes: bool = typer.Option(False, "--no-yes", help="Do not append --yes."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Only print the composed lines."),
) -> None:
    """Run arbitrary console commands in sequence."""

    stack = _build_stack(ctx)
    assume_yes = _state(ctx).settings.assume_yes and not no_yes
    for command in commands:
        stack.submit(command, assume_yes=assume_yes)
    _finish(stack, dry_run=dry_run)


@app.command()
def deploy(
    ctx: typer.Context,
    maintenance: bool = typer.Option(True, "--maintenance/--no-maintenance", help="Wrap in maintenance mode."),
    skip_config: bool = typer.Option(False, "--skip-config", help="Do not import configuration."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Only print the composed lines."),
) -> None:
    """Typical deployment: updates, config import and cache rebuild."""

    stack = _build_stack(ctx)
    if maintenance:
        stack.maintenance_on()
    stack.update_db()
    if not skip_config:
        stack.config_import()
    stack.cache_rebuild()
    if maintenance:
        stack.maintenance_off()
    _finish(stack, dry_run=dry_run)


@app.command("site-install")
def site_install(
    ctx: typer.Context,
    profile: str = typer.Argument("standard", help="Installation profile."),
    site_name: Optional[str] = typer.Option(None, "--site-name"),
    site_mail: Optional[str] = typer.Option(None, "--site-mail"),
    langcode: Optional[str] = typer.Option(None, "--langcode"),
    db_type: Optional[str] = typer.Option(None, "--db-type"),
    db_file: Optional[str] = typer.Option(None, "--db-file"),
    db_host: Optional[str] = typer.Option(None, "--db-host"),
    db_name: Optional[str] = typer.Option(None, "--db-name"),
    db_user: Optional[str] = typer.Option(None, "--db-user"),
    db_pass: Optional[str] = typer.Option(None, "--db-pass"),
    db_prefix: Optional[str] = typer.Option(None, "--db-prefix"),
    db_port: Optional[int] = typer.Option(None, "--db-port"),
    account_mail: Optional[str] = typer.Option(None, "--account-mail"),
    account_name: Optional[str] = typer.Option(None, "--account-name"),
    account_pass: Optional[str] = typer.Option(None, "--account-pass"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Only print the composed line."),
) -> None:
    """Install a site with the given profile."""

    stack = _build_stack(ctx)
    setters = (
        (stack.site_name, site_name),
        (stack.site_mail, site_mail),
        (stack.langcode, langcode),
        (stack.db_type, db_type),
        (stack.db_file, db_file),
        (stack.db_host, db_host),
        (stack.db_name, db_name),
        (stack.db_user, db_user),
        (stack.db_pass, db_pass),
        (stack.db_prefix, db_prefix),
        (stack.db_port, db_port),
        (stack.account_mail, account_mail),
        (stack.account_name, account_name),
        (stack.account_pass, account_pass),
    )
    for setter, value in setters:
        if value is not None:
            setter(value)
    stack.site_install(profile)
    _finish(stack, dry_run=dry_run)


@app.command()
def version(ctx: typer.Context) -> None:
    """Print the detected Drupal Console version."""

    stack = _build_stack(ctx)
    _console.print(stack.version())


def run() -> None:
    app()


if __name__ == "__main__":
    run()
