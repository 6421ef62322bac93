"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich. Messages are
plain text: file names may contain square brackets, so they are escaped
before being handed to Rich markup.
"""

import sys

from rich.console import Console
from rich.markup import escape

from leave.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import).
# soft_wrap keeps one diagnostic per line regardless of terminal width.
console = Console(
    theme=get_theme(),
    color_system=_detect_color_system(),
    highlight=False,
    soft_wrap=True,
)
err_console = Console(
    theme=get_theme(),
    stderr=True,
    color_system=_detect_color_system(),
    highlight=False,
    soft_wrap=True,
)


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
