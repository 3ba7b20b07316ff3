from __future__ import annotations

from adapters.process_executor import RecordingExecutor
from core.config import AppSettings, write_user_env_vars
from core.services.drupal_console import DrupalConsoleStack


def test_settings_read_prefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("DCSTACK_EXECUTABLE", "/usr/local/bin/drupal")
    monkeypatch.setenv("DCSTACK_STOP_ON_FAIL", "false")
    monkeypatch.setenv("DCSTACK_COMMAND_TIMEOUT_SECONDS", "30")

    settings = AppSettings(_env_file=None)

    assert settings.executable == "/usr/local/bin/drupal"
    assert settings.stop_on_fail is False
    assert settings.command_timeout_seconds == 30.0
    assert settings.assume_yes is True


def test_write_user_env_vars_merges_existing_values(tmp_path) -> None:
    env_path = tmp_path / "user" / ".env"
    write_user_env_vars({"DCSTACK_ROOT": "/srv/a", "DCSTACK_URI": "a.test"}, env_path)
    write_user_env_vars({"DCSTACK_ROOT": "/srv/b", "DCSTACK_ENVIRONMENT": None}, env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()

    assert lines[0].startswith("#")
    assert lines[1:] == ["DCSTACK_ROOT=/srv/b", "DCSTACK_URI=a.test"]


def test_stack_from_settings_applies_global_options(printer) -> None:
    settings = AppSettings(
        _env_file=None,
        executable="vendor/bin/drupal",
        root="/srv/site",
        uri="example.com",
        environment="dev",
        stop_on_fail=False,
        printed=False,
    )
    stack = DrupalConsoleStack.from_settings(settings, executor=RecordingExecutor(), printer=printer)

    stack.cache_rebuild()

    assert stack.commands == [
        "vendor/bin/drupal cache:rebuild all --root=/srv/site --uri=example.com --env=dev --yes"
    ]
    assert stack.stops_on_fail is False
    assert printer.lines == []
