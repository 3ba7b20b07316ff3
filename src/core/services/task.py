"""Task layer: progress printing and stacked command execution.

This is the small task-runner the console stack builds on. It owns:
- the "print progress" side effect (best effort, can be switched off);
- the queue of composed command lines and how they are executed;
- the stop-on-fail policy across a chain of commands.

The console-specific composition (options, verbs, `--yes`) lives in
`core.services.drupal_console`.
"""

from __future__ import annotations

import time
from typing import Sequence

from loguru import logger

from core.domain.models import ExecutionResult
from core.errors import TaskError
from core.interfaces.executor import CommandExecutor, TaskPrinter


class BaseTask:
    """Common behaviour: a name and an optional progress printer."""

    def __init__(self, *, printer: TaskPrinter | None = None) -> None:
        if printer is None:
            from adapters.task_printer import RichTaskPrinter

            printer = RichTaskPrinter()
        self._printer = printer
        self._printed = True

    @property
    def task_name(self) -> str:
        return self.__class__.__name__

    @property
    def is_printed(self) -> bool:
        return self._printed

    def printed(self, printed: bool = True):
        """Enable or disable progress output for this task."""

        self._printed = printed
        return self

    def print_task_info(self, template: str, context: dict[str, object] | None = None) -> None:
        """Print a progress line; failures here never affect a command outcome."""

        if not self._printed:
            return
        try:
            self._printer.print_task_info(self.task_name, template, context or {})
        except Exception as exc:
            logger.warning("Task printer failed for {!r}: {}", template, exc)


class CommandStack(BaseTask):
    """Queue of command lines executed with a shared executable.

    `exec()` only queues; nothing runs until `run()`.
    """

    def __init__(
        self,
        executable: str = "",
        *,
        executor: CommandExecutor | None = None,
        printer: TaskPrinter | None = None,
    ) -> None:
        super().__init__(printer=printer)
        if executor is None:
            from adapters.process_executor import SubprocessExecutor

            executor = SubprocessExecutor()
        self.executable = executable
        self._executor = executor
        self._exec: list[str] = []
        self._stop_on_fail = False
        self.results: list[ExecutionResult] = []
        self.last_result: ExecutionResult | None = None

    @property
    def stops_on_fail(self) -> bool:
        return self._stop_on_fail

    @property
    def commands(self) -> list[str]:
        return list(self._exec)

    def stop_on_fail(self, stop: bool = True):
        """Abort the remaining commands as soon as one of them fails."""

        self._stop_on_fail = stop
        return self

    def _strip_executable(self, command: str) -> str:
        prefix = f"{self.executable} "
        if self.executable and command.startswith(prefix):
            return command[len(prefix):]
        return command

    def exec(self, command: str | Sequence[str]):
        """Queue `command`, prefixed with the stack's executable."""

        if not isinstance(command, str):
            command = " ".join(part for part in command if part)
        line = f"{self.executable} {self._strip_executable(command)}".strip()
        logger.debug("Queued command: {}", line)
        self._exec.append(line)
        return self

    def get_command(self) -> str:
        """All queued command lines joined with `&&`."""

        return " && ".join(self._exec)

    def execute_command(self, command_line: str) -> ExecutionResult:
        logger.debug("Executing: {}", command_line)
        started = time.monotonic()
        result = self._executor.execute(command_line)
        if result.command is None:
            result = result.model_copy(update={"command": command_line})
        if not result.execution_time:
            result = result.model_copy(update={"execution_time": time.monotonic() - started})
        logger.debug("Exit code {} for: {}", result.exit_code, command_line)
        return result

    def run(self) -> ExecutionResult:
        """Execute the queued commands.

        Without stop-on-fail (or with a single command) the joined line runs as
        one shell invocation. With stop-on-fail, commands run one at a time so
        the returned result names the exact command that failed.
        """

        if not self._exec:
            raise TaskError(self, "You must add at least one command")

        self.results = []
        if not self._stop_on_fail or len(self._exec) == 1:
            command = self.get_command()
            self.print_task_info("{command}", {"command": command})
            result = self.execute_command(command)
            self.results.append(result)
            self.last_result = result
            return result

        accumulated: ExecutionResult | None = None
        for command in self._exec:
            self.print_task_info("Executing {command}", {"command": command})
            result = self.execute_command(command)
            self.results.append(result)
            accumulated = result.accumulate(accumulated)
            if not result.succeeded:
                logger.info("Stopping stack after failure of: {}", command)
                break

        self.last_result = accumulated
        return accumulated
