"""Terminal output for the rbh-gc command.

The summary line goes to stdout. Warnings, errors and log records go to
stderr so they never mix with output meant for scripts.
"""

import sys
from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

THEME = Theme(
    {
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
    }
)


def _color_system(stream: TextIO) -> str | None:
    """Use truecolor when ``stream`` is a terminal, no color otherwise."""
    return "truecolor" if stream.isatty() else None


console = Console(theme=THEME, color_system=_color_system(sys.stdout))
err_console = Console(theme=THEME, stderr=True, color_system=_color_system(sys.stderr))


def print_warning(message: str) -> None:
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print ``Error: <message>`` on stderr.

    The message is escaped, since paths and reasons may contain
    brackets Rich would take for markup.
    """
    err_console.print(f"[error]Error:[/] {escape(message)}", highlight=False)


def print_success(message: str) -> None:
    console.print(f"[success]{escape(message)}[/]")
