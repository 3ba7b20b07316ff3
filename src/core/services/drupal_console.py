"""Drupal Console command stack.

Runs Drupal Console commands in a stack. Global options (root, uri, env,
verbosity, no-debug) apply to every command; per-command options (site name,
db credentials, ...) apply to the next submitted command only. `--yes` is
appended by default, since prompts make no sense in a task runner.

Example::

    (
        DrupalConsoleStack()
        .root("/var/www/html/some-site")
        .uri("sub.example.com")
        .stop_on_fail()
        .maintenance_on()
        .update_db()
        .config_import()
        .maintenance_off()
        .run()
    )

Composed line layout, always in this order:

    <executable> <verb> <global options> <next-command options> [--yes]
"""

from __future__ import annotations

import re
from typing import Iterable

from loguru import logger

from core.arguments import ArgumentAccumulator, escape, format_option
from core.config import AppSettings
from core.domain.models import Verbosity
from core.interfaces.executor import CommandExecutor, TaskPrinter
from core.services.task import CommandStack

_VERSION_PATTERN = re.compile(r"\d+(?:\.\d+)*")

UNKNOWN_VERSION = "unknown"
CONFIRMATION_FLAG = "--yes"


class DrupalConsoleStack(CommandStack):
    """Fluent builder around the `drupal` executable.

    Every setter and verb returns the stack itself.
    """

    VERBOSITY_LEVEL_NORMAL = Verbosity.NORMAL
    VERBOSITY_LEVEL_VERBOSE = Verbosity.VERBOSE
    VERBOSITY_LEVEL_DEBUG = Verbosity.DEBUG

    def __init__(
        self,
        path_to_drupal_console: str = "drupal",
        *,
        executor: CommandExecutor | None = None,
        printer: TaskPrinter | None = None,
    ) -> None:
        super().__init__(path_to_drupal_console, executor=executor, printer=printer)
        self._global_options = ArgumentAccumulator()
        # Insertion-ordered; re-staging a flag replaces its value in place.
        self._options_for_next_cmd: dict[str, object | None] = {}
        self._version: str | None = None

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        executor: CommandExecutor | None = None,
        printer: TaskPrinter | None = None,
    ) -> DrupalConsoleStack:
        """Build a stack seeded with the configured executable and globals."""

        settings = settings or AppSettings()
        if executor is None:
            from adapters.process_executor import SubprocessExecutor

            executor = SubprocessExecutor(settings)
        stack = cls(settings.executable, executor=executor, printer=printer)
        stack.printed(settings.printed)
        stack.stop_on_fail(settings.stop_on_fail)
        if settings.root:
            stack.root(settings.root)
        if settings.uri:
            stack.uri(settings.uri)
        if settings.environment:
            stack.environment(settings.environment)
        return stack

    # Option buffers

    @property
    def staged_options(self) -> list[tuple[str, object | None]]:
        return list(self._options_for_next_cmd.items())

    def option(self, name: str, value: object | None = None) -> DrupalConsoleStack:
        """Add an option applied to every following command."""

        self._global_options.option(name, value)
        return self

    def raw_arg(self, text: str) -> DrupalConsoleStack:
        """Add already-formed text, verbatim, to every following command."""

        self._global_options.raw_arg(text)
        return self

    def option_for_next_command(self, name: str, value: object | None = None) -> DrupalConsoleStack:
        """Stage an option for the next submitted command only."""

        self._options_for_next_cmd[name] = value
        return self

    # Global options

    def root(self, drupal_root_directory: str) -> DrupalConsoleStack:
        self.print_task_info(
            "Drupal root: <info>{root}</info>",
            {"root": drupal_root_directory},
        )
        return self.option("root", drupal_root_directory)

    def uri(self, uri: str) -> DrupalConsoleStack:
        """URI of the site (multi-site environments or alternate ports)."""

        self.print_task_info("URI: <info>{uri}</info>", {"uri": uri})
        return self.option("uri", uri)

    def environment(self, environment: str = "prod") -> DrupalConsoleStack:
        self.print_task_info(
            "Environment: <info>{environment}</info>",
            {"environment": environment},
        )
        return self.option("env", environment)

    def no_debug(self) -> DrupalConsoleStack:
        self.print_task_info("Debug: <info>off</info>")
        return self.option("no-debug")

    def verbosity(self, level: Verbosity | int | str = Verbosity.NORMAL) -> DrupalConsoleStack:
        """One of the `Verbosity` levels; any other value passes through as is."""

        value = int(level) if isinstance(level, int) else level
        self.print_task_info("Verbosity: <info>{verbosity}</info>", {"verbosity": value})
        return self.option("verbose", value)

    # Next-command options

    def site_name(self, site_name: str) -> DrupalConsoleStack:
        return self.option_for_next_command("site-name", site_name)

    def site_mail(self, site_mail: str) -> DrupalConsoleStack:
        return self.option_for_next_command("site-mail", site_mail)

    def file(self, file: str) -> DrupalConsoleStack:
        """File to use, e.g. for database dump/restore."""

        return self.option_for_next_command("file", file)

    def directory(self, directory: str) -> DrupalConsoleStack:
        """Directory to use, e.g. for config import/export."""

        return self.option_for_next_command("directory", directory)

    def tar(self) -> DrupalConsoleStack:
        return self.option_for_next_command("tar")

    def langcode(self, langcode: str) -> DrupalConsoleStack:
        return self.option_for_next_command("langcode", langcode)

    def db_type(self, db_type: str) -> DrupalConsoleStack:
        return self.option_for_next_command("db-type", db_type)

    def db_file(self, db_file: str) -> DrupalConsoleStack:
        return self.option_for_next_command("db-file", db_file)

    def db_host(self, db_host: str) -> DrupalConsoleStack:
        return self.option_for_next_command("db-host", db_host)

    def db_name(self, db_name: str) -> DrupalConsoleStack:
        return self.option_for_next_command("db-name", db_name)

    def db_user(self, db_user: str) -> DrupalConsoleStack:
        return self.option_for_next_command("db-user", db_user)

    def db_pass(self, db_pass: str) -> DrupalConsoleStack:
        return self.option_for_next_command("db-pass", db_pass)

    def db_prefix(self, db_prefix: str) -> DrupalConsoleStack:
        return self.option_for_next_command("db-prefix", db_prefix)

    def db_port(self, db_port: str | int) -> DrupalConsoleStack:
        return self.option_for_next_command("db-port", db_port)

    def account_mail(self, account_mail: str) -> DrupalConsoleStack:
        """E-mail address for the account with uid 1."""

        return self.option_for_next_command("account-mail", account_mail)

    def account_name(self, account_name: str) -> DrupalConsoleStack:
        return self.option_for_next_command("account-name", account_name)

    def account_pass(self, account_pass: str) -> DrupalConsoleStack:
        return self.option_for_next_command("account-pass", account_pass)

    # Version

    def version(self) -> str:
        """Return the Drupal Console version, detected once per stack.

        Runs `<executable> --version` directly (no accumulated options) with
        printing suppressed. Falls back to "unknown" on any failure.
        """

        if self._version is not None:
            return self._version
        if not self.executable.strip():
            self._version = UNKNOWN_VERSION
            return self._version

        was_printed = self._printed
        self._printed = False
        try:
            self._version = UNKNOWN_VERSION
            try:
                result = self.execute_command(f"{self.executable} --version")
            except Exception as exc:
                logger.warning("Version detection failed for {}: {}", self.executable, exc)
                return self._version
            match = _VERSION_PATTERN.search(result.message or "")
            if result.succeeded and match:
                self._version = match.group(0)
            else:
                logger.warning("Could not detect the version of {}", self.executable)
        finally:
            self._printed = was_printed

        return self._version

    # Verbs

    def cache_rebuild(self, cache_name: str = "all") -> DrupalConsoleStack:
        self.print_task_info("Cache rebuild")
        return self.submit(f"cache:rebuild {escape(cache_name)}")

    def update_db(self, module: str = "all", update_n: str | int = "") -> DrupalConsoleStack:
        """Execute a specific update N function in a module, or all of them."""

        self.print_task_info("Perform database updates")
        command = f"update:execute {escape(module)}"
        if update_n:
            command += f" {escape(update_n)}"
        return self.submit(command)

    def maintenance(self, mode: bool = True) -> DrupalConsoleStack:
        maintenance_mode = "on" if mode else "off"
        self.print_task_info(
            "Set maintenance mode: <info>{mode}</info>",
            {"mode": maintenance_mode},
        )
        return self.submit(f"site:maintenance {escape(maintenance_mode)}")

    def maintenance_on(self) -> DrupalConsoleStack:
        return self.maintenance(True)

    def maintenance_off(self) -> DrupalConsoleStack:
        return self.maintenance(False)

    def execute_cron(self, module: str) -> DrupalConsoleStack:
        self.print_task_info("Execute cron")
        return self.submit(f"cron:execute {escape(module)}")

    def site_install(self, installation_profile: str = "") -> DrupalConsoleStack:
        command = "site:install"
        if installation_profile:
            command += f" {escape(installation_profile)}"
        return self.submit(command)

    def config_export(self) -> DrupalConsoleStack:
        self.print_task_info("Export configuration")
        return self.submit("config:export")

    def config_import(self) -> DrupalConsoleStack:
        self.print_task_info("Import configuration")
        return self.submit("config:import")

    def db_dump(self, database: str) -> DrupalConsoleStack:
        self.print_task_info("Dump database: <info>{database}</info>", {"database": database})
        return self.submit(f"database:dump {escape(database)}")

    def db_restore(self, database: str) -> DrupalConsoleStack:
        self.print_task_info("Restore database: <info>{database}</info>", {"database": database})
        return self.submit(f"database:restore {escape(database)}")

    def db_drop(self, database: str) -> DrupalConsoleStack:
        self.print_task_info("Drop database: <info>{database}</info>", {"database": database})
        return self.submit(f"database:drop {escape(database)}")

    def execute_migrate(self, migration_ids: Iterable[str | int]) -> DrupalConsoleStack:
        ids = ",".join(str(migration_id) for migration_id in migration_ids)
        self.print_task_info("Execute migrations: <info>{ids}</info>", {"ids": ids})
        return self.submit(f"migrate:execute {escape(ids)}")

    def list_commands(self) -> DrupalConsoleStack:
        return self.submit("list")

    def site_status(self) -> DrupalConsoleStack:
        return self.submit("site:status")

    # Submission

    def submit(self, command: str, assume_yes: bool = True) -> DrupalConsoleStack:
        """Compose `command` with all options and queue it."""

        return self.exec(self.inject_arguments(command, assume_yes))

    def inject_arguments(self, command: str, assume_yes: bool = True) -> str:
        """Append global options, then staged options, then `--yes`.

        The staged options are cleared here, whatever happens to the command.
        """

        staged = "".join(
            f" {format_option(name, value)}" for name, value in self._options_for_next_cmd.items()
        )
        self._options_for_next_cmd = {}

        line = command
        if self._global_options:
            line += self._global_options.arguments
        if staged:
            line += staged
        if assume_yes:
            line += f" {CONFIRMATION_FLAG}"
        return line
