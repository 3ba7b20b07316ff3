from __future__ import annotations

import io

from rich.console import Console

from adapters.task_printer import RichTaskPrinter, render_template


def test_render_template_fills_placeholders_and_info_tags() -> None:
    text = render_template("Drupal root: <info>{root}</info>", {"root": "/srv/site"})

    assert text == "Drupal root: [green]/srv/site[/green]"


def test_render_template_escapes_markup_in_values() -> None:
    text = render_template("{command}", {"command": "echo [bold]x"})

    assert text == "echo \\[bold]x"


def test_unknown_placeholders_are_left_alone() -> None:
    assert render_template("Cache {name}", {}) == "Cache {name}"


def test_printer_prefixes_task_name() -> None:
    buffer = io.StringIO()
    printer = RichTaskPrinter(Console(file=buffer, width=200, color_system=None))

    printer.print_task_info("DrupalConsoleStack", "URI: <info>{uri}</info>", {"uri": "example.com"})

    assert buffer.getvalue().strip() == "[DrupalConsoleStack] URI: example.com"
