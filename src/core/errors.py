"""Errors raised by the task layer.

Composition and escaping never raise; failed executions are reported as
`ExecutionResult` values. Only misuse of a task ends up here.
"""

from __future__ import annotations


class TaskError(RuntimeError):
    """A task was asked to do something it cannot do (e.g. run an empty stack)."""

    def __init__(self, task: object, message: str) -> None:
        self.task_name = task.__class__.__name__
        super().__init__(f"[{self.task_name}] {message}")
