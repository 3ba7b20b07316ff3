from __future__ import annotations

import pytest

from adapters.process_executor import RecordingExecutor
from core.services.drupal_console import DrupalConsoleStack


class ListPrinter:
    """Collects progress lines instead of printing them."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, str, dict[str, object]]] = []

    def print_task_info(self, task_name: str, template: str, context: dict[str, object]) -> None:
        self.lines.append((task_name, template, dict(context)))


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def printer() -> ListPrinter:
    return ListPrinter()


@pytest.fixture
def stack(executor: RecordingExecutor, printer: ListPrinter) -> DrupalConsoleStack:
    return DrupalConsoleStack(executor=executor, printer=printer)
