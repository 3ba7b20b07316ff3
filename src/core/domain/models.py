"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-contained documentation (Field) without coupling
  the core to process/IO libraries.
- Results render directly in the CLI tables (`cli.ui_components`).

Note:
- These models describe *what* an execution produced, not *how* it ran.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, Field


class Verbosity(IntEnum):
    """Console verbosity levels: 1 normal, 2 more verbose, 3 debug."""

    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


class ExecutionResult(BaseModel):
    """Outcome of one executed command line.

    Produced by a `CommandExecutor`; the command stack only passes it through.
    """

    succeeded: bool = Field(
        ...,
        description="True when the process exited with status 0.",
    )
    message: str = Field(
        default="",
        description="Combined stdout/stderr of the process.",
    )
    exit_code: int = Field(
        default=0,
        description="Process exit status (124 timeout, 127 not runnable).",
    )
    command: str | None = Field(
        default=None,
        description="The command line that was executed.",
    )
    execution_time: float = Field(
        default=0.0,
        ge=0.0,
        description="Wall-clock duration in seconds.",
    )

    def accumulate(self, previous: ExecutionResult | None) -> ExecutionResult:
        """Return a copy carrying the message and time of `previous` as well.

        Used when a stack runs its commands one by one, so the final result
        still shows everything that was printed before it.
        """

        if previous is None:
            return self
        parts = [part for part in (previous.message, self.message) if part]
        return self.model_copy(
            update={
                "message": "\n".join(parts),
                "execution_time": previous.execution_time + self.execution_time,
            }
        )
