"""Safety mechanisms to prevent accidental deletion of important files."""

from __future__ import annotations

from .normalize import normalize_path, strip_trailing_separators
from .protected import DEFAULT_PROTECTED_PATHS, ProtectedPathRegistry

__all__ = [
    "DEFAULT_PROTECTED_PATHS",
    "ProtectedPathRegistry",
    "normalize_path",
    "strip_trailing_separators",
]
