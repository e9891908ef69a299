"""Hand-off to the real rm binary."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import NoReturn, Optional

from safe_rm.config import DEFAULT_TARGET

logger = logging.getLogger(__name__)

ECHO_BINARY = "/bin/echo"

EXIT_SELF_RECURSION = 1
EXIT_EXEC_FAILED = 2


class DelegationError(Exception):
    """Error that prevents handing off to the delegate binary."""

    exit_code = 1


class SelfRecursionError(DelegationError):
    """The delegate binary resolves to the wrapper itself."""

    exit_code = EXIT_SELF_RECURSION


class DelegateExecError(DelegationError):
    """The delegate binary could not be executed."""

    exit_code = EXIT_EXEC_FAILED


@dataclass(frozen=True)
class DelegationDecision:
    """Binary to execute and the full argument vector to pass it."""

    binary: str
    argv: tuple[str, ...]


def resolve_binary(name: str) -> Optional[str]:
    """
    Resolve a command name to the canonical path of the file it runs.

    Names without a separator are looked up on PATH.

    Returns:
        The real path, or None if it cannot be resolved
    """
    path = name if os.sep in name else shutil.which(name)
    if path is None:
        return None
    try:
        return os.path.realpath(path, strict=True)
    except (OSError, ValueError):
        return None


class DelegationGuard:
    """Checks the delegate and replaces the current process with it."""

    def __init__(
        self,
        target: str = DEFAULT_TARGET,
        self_path: Optional[str] = None,
        echo: bool = False,
        execv: Optional[Callable[[str, Sequence[str]], object]] = None,
    ):
        self.target = target
        self.self_path = self_path if self_path is not None else sys.argv[0]
        self.echo = echo
        self._execv = execv

    def check_recursion(self) -> Optional[str]:
        """
        Refuse to run if the delegate is the wrapper itself.

        In echo mode this still checks the would-be delegate, not echo.

        Returns:
            The real path of the delegate, or None if it cannot be resolved

        Raises:
            SelfRecursionError: If both resolve to the same real path
        """
        target_real = resolve_binary(self.target)
        self_real = resolve_binary(self.self_path)
        logger.debug(
            "Delegate %s -> %s, self %s -> %s", self.target, target_real, self.self_path, self_real
        )

        if target_real is not None and target_real == self_real:
            raise SelfRecursionError(
                f'safe-rm cannot find the real "{os.path.basename(self.target)}" binary'
            )
        return target_real

    def decide(self, allowed: Sequence[str], resolved: Optional[str] = None) -> DelegationDecision:
        """Build the binary and argument vector for the hand-off.

        In echo mode, or when every argument was blocked, the command line
        that would have run is printed by echo instead, so the delegate is
        never invoked without file operands.

        Args:
            allowed: Arguments that passed the filter
            resolved: Real path of the delegate; falls back to the target as given
        """
        target = resolved or self.target
        if self.echo or not allowed:
            return DelegationDecision(ECHO_BINARY, (ECHO_BINARY, target, *allowed))
        return DelegationDecision(target, (target, *allowed))

    def delegate(self, allowed: Sequence[str]) -> NoReturn:
        """
        Replace the current process with the delegate.

        On success this never returns; the exit status of the process becomes
        the delegate's.

        Raises:
            SelfRecursionError: If the delegate resolves to the wrapper
            DelegateExecError: If the delegate cannot be executed
        """
        resolved = self.check_recursion()
        decision = self.decide(allowed, resolved)
        logger.debug("Executing %s with %d arguments", decision.binary, len(decision.argv) - 1)

        try:
            execv = self._execv or os.execv
            execv(decision.binary, list(decision.argv))
        except OSError as e:
            raise DelegateExecError(
                f'safe-rm: Cannot execute the real "{os.path.basename(self.target)}" binary: '
                f"{e.strerror or e}"
            ) from e

        # Only reachable when execv is replaced, e.g. in tests
        raise DelegateExecError(f"safe-rm: {decision.binary} returned without replacing the process")
