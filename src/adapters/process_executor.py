"""Process execution adapters.

Why a separate adapter:
- Standardizes how a composed line reaches the shell (timeouts, merged output).
- Makes testing easy: `RecordingExecutor` replaces the real process spawn.
"""

from __future__ import annotations

import subprocess
import time
from typing import Iterable

from loguru import logger

from core.config import AppSettings
from core.domain.models import ExecutionResult

TIMEOUT_EXIT_CODE = 124
NOT_RUNNABLE_EXIT_CODE = 127


class SubprocessExecutor:
    """Runs command lines through the system shell and captures their output."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._timeout = settings.command_timeout_seconds if settings else None

    def execute(self, command_line: str) -> ExecutionResult:
        started = time.monotonic()
        try:
            completed = subprocess.run(
                command_line,
                shell=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as exc:
            output = exc.output or ""
            if isinstance(output, bytes):
                output = output.decode("utf-8", errors="replace")
            logger.warning("Command timed out after {}s: {}", self._timeout, command_line)
            notice = f"Command timed out after {self._timeout} seconds."
            return ExecutionResult(
                succeeded=False,
                message=f"{output.strip()}\n{notice}" if output.strip() else notice,
                exit_code=TIMEOUT_EXIT_CODE,
                command=command_line,
                execution_time=time.monotonic() - started,
            )
        except OSError as exc:
            logger.warning("Could not start command {}: {}", command_line, exc)
            return ExecutionResult(
                succeeded=False,
                message=str(exc),
                exit_code=NOT_RUNNABLE_EXIT_CODE,
                command=command_line,
                execution_time=time.monotonic() - started,
            )

        return ExecutionResult(
            succeeded=completed.returncode == 0,
            message=(completed.stdout or "").rstrip("\n"),
            exit_code=completed.returncode,
            command=command_line,
            execution_time=time.monotonic() - started,
        )


class RecordingExecutor:
    """Executor double: records every line and replays scripted results.

    Results are consumed in order; once exhausted, `default` is returned.
    """

    def __init__(
        self,
        results: Iterable[ExecutionResult] = (),
        *,
        default: ExecutionResult | None = None,
    ) -> None:
        self.executed: list[str] = []
        self._results = list(results)
        self._default = default or ExecutionResult(succeeded=True, message="", exit_code=0)

    def execute(self, command_line: str) -> ExecutionResult:
        self.executed.append(command_line)
        result = self._results.pop(0) if self._results else self._default
        return result.model_copy(update={"command": command_line})
