"""Configuration management for safe-rm.

Protected paths come from up to three plain-text files, read in priority
order (system-wide, legacy per-user, XDG per-user). Each line is a glob
pattern expanded against the live filesystem at startup; every match is
protected. All files contribute; none overrides another.

Runtime knobs for the shim itself come from the environment, since the shim
recognizes no command-line flags of its own.
"""

from __future__ import annotations

import glob
import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Optional

from rich.console import Console

from safe_rm.safety.normalize import strip_trailing_separators
from safe_rm.safety.protected import ProtectedPathRegistry
from safe_rm.ui.console import create_console, print_warning

logger = logging.getLogger(__name__)

GLOBAL_CONFIG_FILE = "/etc/safe-rm.conf"
DEFAULT_TARGET = "/bin/rm"

# Characters trimmed from the end of every configuration line
LINE_TRIM_CHARS = "\n\r\t "

TRUE_VALUES = ("1", "true", "yes", "on")

EXIT_INVALID_PATTERN = 3


class InvalidPatternError(ValueError):
    """A configuration line could not be expanded as a glob pattern."""

    exit_code = EXIT_INVALID_PATTERN

    def __init__(self, pattern: str, source: str, reason: str = "") -> None:
        self.pattern = pattern
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot glob() for line {pattern}")


@dataclass(frozen=True)
class ConfigSources:
    """Configuration file locations, in priority order."""

    system: str
    legacy: str
    user: str

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "ConfigSources":
        """Create from environment variables with home fallback."""
        if environ is None:
            environ = os.environ
        home = environ.get("HOME", "")
        xdg_config_home = environ.get("XDG_CONFIG_HOME") or f"{home}/.config"
        return cls(
            system=GLOBAL_CONFIG_FILE,
            legacy=f"{home}/.safe-rm",
            user=f"{xdg_config_home}/safe-rm",
        )

    def paths(self) -> tuple[str, str, str]:
        return self.system, self.legacy, self.user

    def labels(self) -> tuple[tuple[str, str], ...]:
        """(label, path) pairs for display."""
        return (
            ("System", self.system),
            ("Legacy", self.legacy),
            ("User (XDG)", self.user),
        )

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths())


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in TRUE_VALUES


@dataclass
class Settings:
    """Runtime settings of the shim."""

    target: str = DEFAULT_TARGET
    dry_run: bool = False
    debug: bool = False

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        if environ is None:
            environ = os.environ
        return cls(
            target=environ.get("SAFE_RM_TARGET") or DEFAULT_TARGET,
            dry_run=_env_flag(environ, "SAFE_RM_DRY_RUN"),
            debug=_env_flag(environ, "SAFE_RM_DEBUG"),
        )


def expand_pattern(pattern: str, source: str = "") -> list[str]:
    """
    Expand a configuration line as a glob pattern.

    Args:
        pattern: Trimmed configuration line
        source: Configuration file the line came from, for error reporting

    Returns:
        Matching paths; empty when nothing matches

    Raises:
        InvalidPatternError: If the pattern cannot be expanded
    """
    if "\x00" in pattern:
        raise InvalidPatternError(pattern, source, "embedded null byte")

    try:
        return glob.glob(pattern)
    except (OSError, ValueError) as e:
        raise InvalidPatternError(pattern, source, str(e)) from e


class ConfigAggregator:
    """Loads protected paths from configuration files into a registry."""

    def __init__(self, registry: ProtectedPathRegistry, console: Optional[Console] = None):
        self.registry = registry
        self.console = console or create_console()

    def load(self, sources: Iterable[str]) -> None:
        """
        Read every source in order and insert all glob matches.

        Missing files are skipped silently. Files that exist but cannot be
        opened are reported and skipped.

        Raises:
            InvalidPatternError: On the first line that cannot be expanded
        """
        for source in sources:
            self.load_file(source)

    def load_file(self, path: str) -> None:
        try:
            infile = open(path, encoding="utf-8", errors="surrogateescape")
        except FileNotFoundError:
            logger.debug("Config file %s not found", path)
            return
        except OSError as e:
            print_warning(
                self.console,
                f"Could not open configuration file {path}: {e.strerror or e}",
            )
            return

        with infile:
            for line in infile:
                pattern = line.rstrip(LINE_TRIM_CHARS)
                if not pattern:
                    continue

                matches = expand_pattern(pattern, path)
                logger.debug("%s: %r matched %d paths", path, pattern, len(matches))
                for match in matches:
                    self.registry.insert(strip_trailing_separators(match))


def load_registry(
    sources: Iterable[str],
    console: Optional[Console] = None,
) -> ProtectedPathRegistry:
    """
    Build the protected path registry from configuration sources.

    Falls back to the built-in defaults if no source contributed a path.

    Raises:
        InvalidPatternError: If any source holds a pattern that cannot be expanded
    """
    registry = ProtectedPathRegistry()
    ConfigAggregator(registry, console=console).load(sources)
    registry.ensure_defaults()
    return registry
