"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) that concrete adapters implement.
- Inverts dependencies: the core depends on abstractions, not on subprocess.
"""

from core.interfaces.executor import CommandExecutor, TaskPrinter

__all__ = ["CommandExecutor", "TaskPrinter"]
