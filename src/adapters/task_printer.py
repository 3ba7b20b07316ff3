"""Task progress printer (Rich).

Renders `[TaskName] message` lines. Templates use `{placeholder}` values and
`<info>...</info>` highlights; values are escaped so paths or passwords with
square brackets are not read as Rich markup.
"""

from __future__ import annotations

import re

from rich.console import Console
from rich.markup import escape

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def render_template(template: str, context: dict[str, object]) -> str:
    """Fill placeholders and turn `<info>` tags into Rich markup."""

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in context:
            return match.group(0)
        return escape(str(context[key]))

    text = _PLACEHOLDER.sub(_replace, template)
    return text.replace("<info>", "[green]").replace("</info>", "[/green]")


class RichTaskPrinter:
    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True, highlight=False)

    def print_task_info(self, task_name: str, template: str, context: dict[str, object]) -> None:
        body = render_template(template, context)
        self._console.print(f"[bold cyan]\\[{escape(task_name)}][/bold cyan] {body}")
