"""Canonicalization of command-line path arguments."""

from __future__ import annotations

import os
import stat


def strip_trailing_separators(path: str) -> str:
    """Remove trailing separators without reducing the path to an empty string."""
    stripped = path.rstrip("/")
    if not stripped and path:
        return "/"
    return stripped


def _is_symlink(path: str) -> bool:
    try:
        return stat.S_ISLNK(os.lstat(path).st_mode)
    except (OSError, ValueError):
        return False


def normalize_path(raw: str) -> str:
    """
    Canonicalize a path argument for comparison against the protected set.

    A symbolic link is kept as given so that a protected link path cannot be
    hidden behind its target. Anything else is resolved to its real absolute
    path when possible; paths that cannot be resolved (missing, broken) are
    kept unchanged. Trailing separators are stripped in both cases.

    Never raises.

    Args:
        raw: Argument as passed on the command line

    Returns:
        The normalized path string
    """
    # realpath("") resolves to the cwd
    if not raw:
        return raw

    value = raw

    if not _is_symlink(raw):
        try:
            value = os.path.realpath(raw, strict=True)
        except (OSError, ValueError):
            pass

    return strip_trailing_separators(value)
