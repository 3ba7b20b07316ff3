"""Command executor contracts.

Why Protocol:
- Defines a structural contract (duck typing) without rigid inheritance.
- The subprocess adapter and the recording test double are interchangeable,
  so the command stack can be tested without a real console binary.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ExecutionResult


@runtime_checkable
class CommandExecutor(Protocol):
    """Minimal contract for running a composed command line.

    Design rules:
    - `execute` blocks until the process ends; timeouts belong to the executor.
    - Process failures are returned as `ExecutionResult(succeeded=False)`,
      never raised.
    """

    def execute(self, command_line: str) -> ExecutionResult:
        """Run `command_line` through the shell and return its result."""

        ...


@runtime_checkable
class TaskPrinter(Protocol):
    """Sink for task progress lines (`[TaskName] message`)."""

    def print_task_info(self, task_name: str, template: str, context: dict[str, object]) -> None:
        ...
