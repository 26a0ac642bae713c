"""Rich Console factory, theme, and status reporter for autocommit output.

Creates Console instances that render to a StringIO buffer; the rendered
text is written with ``click.echo``, which strips ANSI codes whenever the
target stream is not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

import click
from rich.console import Console
from rich.text import Text
from rich.theme import Theme

AUTOCOMMIT_THEME = Theme(
    {
        "ac.info": "bold blue",
        "ac.success": "bold green",
        "ac.warning": "bold yellow",
        "ac.error": "bold red",
        "ac.message": "green",
        "ac.rule": "dim",
    }
)

_LABELS: dict[str, str] = {
    "info": "INFO",
    "success": "SUCCESS",
    "warning": "WARNING",
    "error": "ERROR",
}

RULE = "-" * 40


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=AUTOCOMMIT_THEME,
        no_color=no_color,
        force_terminal=not no_color,
        color_system=None if no_color else "standard",
        highlight=False,
        soft_wrap=True,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def render_status(level: str, message: str, *, no_color: bool = False) -> str:
    """Render ``[LEVEL] message`` with the level label colored."""
    console = create_console(no_color=no_color)
    label = Text(f"[{_LABELS[level]}]", style=f"ac.{level}")
    console.print(label, Text(message), end="")
    return get_output(console)


def render_message(message: str, *, no_color: bool = False) -> str:
    """Render a commit message quoted and highlighted."""
    console = create_console(no_color=no_color)
    console.print(Text(f'"{message}"', style="ac.message"), end="")
    return get_output(console)


class Reporter:
    """Categorized console messages: info, success, warning, error.

    Errors go to stderr; everything else to stdout.
    """

    def __init__(self, *, no_color: bool = False) -> None:
        self._no_color = no_color

    def info(self, message: str) -> None:
        click.echo(render_status("info", message, no_color=self._no_color))

    def success(self, message: str) -> None:
        click.echo(render_status("success", message, no_color=self._no_color))

    def warning(self, message: str) -> None:
        click.echo(render_status("warning", message, no_color=self._no_color))

    def error(self, message: str) -> None:
        click.echo(render_status("error", message, no_color=self._no_color), err=True)

    def message(self, message: str) -> None:
        click.echo(render_message(message, no_color=self._no_color))

    def plain(self, text: str) -> None:
        click.echo(text)

    def rule(self) -> None:
        click.echo(RULE)
