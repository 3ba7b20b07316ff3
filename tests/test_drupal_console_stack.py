from __future__ import annotations

import shlex

from adapters.process_executor import RecordingExecutor
from core.domain.models import ExecutionResult, Verbosity
from core.services.drupal_console import DrupalConsoleStack


def test_yes_is_assumed(stack: DrupalConsoleStack) -> None:
    assert stack.submit("command").get_command() == "drupal command --yes"


def test_absence_of_yes(stack: DrupalConsoleStack) -> None:
    assert stack.submit("command", assume_yes=False).get_command() == "drupal command"


def test_options_are_added_to_each_command(stack: DrupalConsoleStack) -> None:
    command = (
        stack.root("/var/www/html/app")
        .submit("command-1")
        .submit("command-2")
        .get_command()
    )

    assert command.count("--root=/var/www/html/app") == 2
    assert stack.commands == [
        "drupal command-1 --root=/var/www/html/app --yes",
        "drupal command-2 --root=/var/www/html/app --yes",
    ]


def test_global_options_keep_their_order(stack: DrupalConsoleStack) -> None:
    stack.root("/srv/site").uri("sub.example.com").environment().no_debug().verbosity(Verbosity.DEBUG)

    assert stack.site_status().commands == [
        "drupal site:status --root=/srv/site --uri=sub.example.com --env=prod --no-debug --verbose=3 --yes"
    ]


def test_site_install_command(stack: DrupalConsoleStack) -> None:
    command = (
        stack.site_name("Site Name")
        .site_mail("site-mail@example.com")
        .langcode("de")
        .account_mail("mail@example.com")
        .account_name("admin")
        .account_pass("pw")
        .db_prefix("drupal_")
        .db_type("sqlite")
        .db_file("sites/default/.ht.sqlite")
        .site_install("minimal")
        .get_command()
    )

    assert command == (
        "drupal site:install minimal"
        " --site-name='Site Name'"
        " --site-mail=site-mail@example.com"
        " --langcode=de"
        " --account-mail=mail@example.com"
        " --account-name=admin"
        " --account-pass=pw"
        " --db-prefix=drupal_"
        " --db-type=sqlite"
        " --db-file=sites/default/.ht.sqlite"
        " --yes"
    )


def test_staged_options_come_after_global_options(stack: DrupalConsoleStack) -> None:
    stack.db_host("localhost").root("/srv/site").db_name("testdb").site_install("standard")

    assert stack.commands == [
        "drupal site:install standard --root=/srv/site --db-host=localhost --db-name=testdb --yes"
    ]


def test_staged_options_apply_to_the_next_command_only(stack: DrupalConsoleStack) -> None:
    stack.directory("/tmp/config").tar().config_export().config_import()

    assert stack.commands == [
        "drupal config:export --directory=/tmp/config --tar --yes",
        "drupal config:import --yes",
    ]
    assert stack.staged_options == []


def test_restaging_a_flag_replaces_its_value(stack: DrupalConsoleStack) -> None:
    stack.site_name("First").db_type("mysql").site_name("Second").site_install()

    assert stack.commands == ["drupal site:install --site-name=Second --db-type=mysql --yes"]


def test_staged_options_are_cleared_even_when_the_command_fails() -> None:
    executor = RecordingExecutor([ExecutionResult(succeeded=False, message="boom", exit_code=1)])
    stack = DrupalConsoleStack(executor=executor, printer=_NullPrinter())

    result = stack.db_user("root").db_pass("secret").site_install("standard").run()
    assert not result.succeeded

    stack.site_status()
    assert stack.commands[-1] == "drupal site:status --yes"


def test_values_round_trip_through_shell_parsing(stack: DrupalConsoleStack) -> None:
    tricky = "pa ss'w;ord $(rm -rf /)"
    stack.root("/var/www/my site").account_pass(tricky).site_install("standard")

    tokens = shlex.split(stack.get_command())

    assert "--root=/var/www/my site" in tokens
    assert f"--account-pass={tricky}" in tokens
    assert tokens[-1] == "--yes"


def test_verbs(stack: DrupalConsoleStack) -> None:
    (
        stack.cache_rebuild()
        .cache_rebuild("render")
        .update_db()
        .update_db("system", 8001)
        .maintenance_on()
        .maintenance(False)
        .execute_cron("node")
        .db_dump("default")
        .db_restore("default")
        .db_drop("default")
        .list_commands()
        .site_status()
    )

    assert stack.commands == [
        "drupal cache:rebuild all --yes",
        "drupal cache:rebuild render --yes",
        "drupal update:execute all --yes",
        "drupal update:execute system 8001 --yes",
        "drupal site:maintenance on --yes",
        "drupal site:maintenance off --yes",
        "drupal cron:execute node --yes",
        "drupal database:dump default --yes",
        "drupal database:restore default --yes",
        "drupal database:drop default --yes",
        "drupal list --yes",
        "drupal site:status --yes",
    ]


def test_verb_arguments_are_escaped(stack: DrupalConsoleStack) -> None:
    stack.db_dump("my db; drop")

    assert stack.commands == ["drupal database:dump 'my db; drop' --yes"]


def test_execute_migrate_joins_ids(executor: RecordingExecutor, printer) -> None:
    stack = DrupalConsoleStack("", executor=executor, printer=printer)

    assert stack.execute_migrate([1, 2, 3]).get_command() == "migrate:execute 1,2,3 --yes"


def test_executable_is_not_duplicated(stack: DrupalConsoleStack) -> None:
    stack.exec("drupal list")

    assert stack.commands == ["drupal list"]


def test_global_setters_print_progress(stack: DrupalConsoleStack, printer) -> None:
    stack.root("/srv/site").uri("example.com")

    assert printer.lines == [
        ("DrupalConsoleStack", "Drupal root: <info>{root}</info>", {"root": "/srv/site"}),
        ("DrupalConsoleStack", "URI: <info>{uri}</info>", {"uri": "example.com"}),
    ]


def test_printer_failure_does_not_affect_composition(executor: RecordingExecutor) -> None:
    stack = DrupalConsoleStack(executor=executor, printer=_BrokenPrinter())

    stack.root("/srv/site").cache_rebuild()

    assert stack.commands == ["drupal cache:rebuild all --root=/srv/site --yes"]


def test_version_is_detected_once(printer) -> None:
    executor = RecordingExecutor(
        [ExecutionResult(succeeded=True, message="Drupal Console Launcher 1.9.7\nDrupal Console 1.9.4")]
    )
    stack = DrupalConsoleStack(executor=executor, printer=printer).root("/srv/site")

    assert stack.version() == "1.9.7"
    assert stack.version() == "1.9.7"
    assert executor.executed == ["drupal --version"]
    assert stack.commands == []


def test_version_is_unknown_when_the_tool_fails(printer) -> None:
    executor = RecordingExecutor(
        [ExecutionResult(succeeded=False, message="sh: 1: drupal: not found 127", exit_code=127)]
    )
    stack = DrupalConsoleStack(executor=executor, printer=printer)

    assert stack.version() == "unknown"
    assert stack.version() == "unknown"
    assert len(executor.executed) == 1


def test_version_is_unknown_without_a_numeric_token(printer) -> None:
    executor = RecordingExecutor([ExecutionResult(succeeded=True, message="Drupal Console")])
    stack = DrupalConsoleStack(executor=executor, printer=printer)

    assert stack.version() == "unknown"


def test_version_suppresses_printing_and_restores_it(printer) -> None:
    seen: list[bool] = []

    class ProbeExecutor:
        def execute(self, command_line: str) -> ExecutionResult:
            seen.append(stack.is_printed)
            raise RuntimeError("cannot spawn")

    stack = DrupalConsoleStack(executor=ProbeExecutor(), printer=printer)

    assert stack.version() == "unknown"
    assert seen == [False]
    assert stack.is_printed is True
    assert stack.version() == "unknown"
    assert seen == [False]


class _NullPrinter:
    def print_task_info(self, task_name: str, template: str, context: dict[str, object]) -> None:
        pass


class _BrokenPrinter:
    def print_task_info(self, task_name: str, template: str, context: dict[str, object]) -> None:
        raise OSError("console closed")


def test_verbosity_passes_non_integer_values_through(stack: DrupalConsoleStack, printer) -> None:
    stack.verbosity("debug").site_status()

    assert stack.commands == ["drupal site:status --verbose=debug --yes"]
    assert printer.lines[-1][2] == {"verbosity": "debug"}


def test_raw_arg_is_added_verbatim_to_every_command(stack: DrupalConsoleStack) -> None:
    stack.raw_arg("-r /x").cache_rebuild().site_status()

    assert stack.commands == [
        "drupal cache:rebuild all -r /x --yes",
        "drupal site:status -r /x --yes",
    ]


def test_version_without_executable_spawns_nothing(executor: RecordingExecutor, printer) -> None:
    stack = DrupalConsoleStack("", executor=executor, printer=printer)

    assert stack.version() == "unknown"
    assert executor.executed == []
