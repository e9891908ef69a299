"""Rich console utilities for output formatting."""

from __future__ import annotations

import platform

from rich.console import Console
from rich.markup import escape


def create_console(stderr: bool = True) -> Console:
    """Create a configured Rich console.

    Messages from the shim go to stderr so that stdout stays reserved for the
    delegate command.
    """
    # Windows-specific console settings
    if platform.system() == "Windows":
        return Console(stderr=stderr, legacy_windows=True, emoji=False, highlight=False)
    return Console(stderr=stderr, emoji=False, highlight=False)


def print_notice(console: Console, message: str) -> None:
    """Print a plain message, with no markup interpretation."""
    console.print(escape(message), soft_wrap=True)


def print_warning(console: Console, message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]{escape(message)}[/yellow]", soft_wrap=True)


def print_error(console: Console, message: str) -> None:
    """Print an error message."""
    console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)
