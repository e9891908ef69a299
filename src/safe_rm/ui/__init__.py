"""UI components for console output."""

from __future__ import annotations

from .console import create_console, print_error, print_notice, print_warning

__all__ = ["create_console", "print_error", "print_notice", "print_warning"]
