"""Argument accumulator.

Holds already-escaped fragments (`--name`, `--name=<value>`, positional
tokens) in insertion order. A fragment's text never changes once appended.
"""

from __future__ import annotations

import shlex


def escape(value: object) -> str:
    """Shell-escape a single value so it can sit unmodified in a command line."""

    return shlex.quote(str(value))


def format_option(name: str, value: object | None = None) -> str:
    """Build one `--name[=<escaped value>]` fragment (without leading space).

    `name` is assumed to be a valid flag token and is not escaped.
    """

    if not name.startswith("-"):
        name = f"--{name}"
    if value is None:
        return name
    return f"{name}={escape(value)}"


class ArgumentAccumulator:
    """Mutable buffer of escaped fragments, rendered with a leading space each."""

    def __init__(self) -> None:
        self._arguments = ""

    @property
    def arguments(self) -> str:
        return self._arguments

    def raw_arg(self, text: str) -> ArgumentAccumulator:
        """Append already-formed argument text as is."""

        if text:
            self._arguments += f" {text}"
        return self

    def arg(self, value: object) -> ArgumentAccumulator:
        return self.raw_arg(escape(value))

    def args(self, *values: object) -> ArgumentAccumulator:
        for value in values:
            self.arg(value)
        return self

    def option(self, name: str, value: object | None = None) -> ArgumentAccumulator:
        """Append `--name` or `--name=<escaped value>`. No deduplication."""

        return self.raw_arg(format_option(name, value))

    def __bool__(self) -> bool:
        return bool(self._arguments.strip())

    def __str__(self) -> str:
        return self._arguments
