"""Protected path definitions to prevent accidental deletion."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)

# Paths protected when no configuration file lists any
DEFAULT_PROTECTED_PATHS: tuple[str, ...] = (
    # System directories
    "/bin",
    "/boot",
    "/dev",
    "/etc",
    "/home",
    "/initrd",
    "/lib",
    "/lib32",
    "/lib64",
    "/proc",
    "/root",
    "/sbin",
    "/sys",
    "/usr",
    "/usr/bin",
    "/usr/include",
    "/usr/lib",
    "/usr/local",
    "/usr/local/bin",
    "/usr/local/include",
    "/usr/local/sbin",
    "/usr/local/share",
    "/usr/sbin",
    "/usr/share",
    "/usr/src",
    "/var",

    # Critical system files (matching is exact, /etc does not cover these)
    "/etc/passwd",
    "/etc/shadow",
    "/etc/group",
    "/etc/gshadow",
    "/etc/sudoers",
    "/etc/fstab",
    "/etc/hosts",
)


class ProtectedPathRegistry:
    """Set of protected path strings compared by exact equality.

    Paths must already be in canonical form; the registry does no
    normalization of its own. Iteration follows insertion order.
    """

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._paths: dict[str, None] = {}
        self.uses_defaults = False
        for path in paths:
            self.insert(path)

    def insert(self, path: str) -> None:
        """Add a path. Inserting a path twice is a no-op."""
        self._paths.setdefault(path, None)

    def contains(self, path: str) -> bool:
        return path in self._paths

    def is_empty(self) -> bool:
        return not self._paths

    def ensure_defaults(self) -> bool:
        """
        Populate the registry with the built-in defaults if nothing was loaded.

        Defaults are never merged with configured paths: either the
        configuration contributed at least one path and is used alone, or
        the defaults are.

        Returns:
            True if the defaults were applied
        """
        if not self.is_empty():
            return False

        logger.debug("No protected paths configured, using %d defaults", len(DEFAULT_PROTECTED_PATHS))
        for path in DEFAULT_PROTECTED_PATHS:
            self.insert(path)
        self.uses_defaults = True
        return True

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"ProtectedPathRegistry({len(self)} paths, uses_defaults={self.uses_defaults})"
