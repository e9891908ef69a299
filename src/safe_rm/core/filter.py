"""Classification of command-line arguments against the protected set."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from safe_rm.safety.normalize import normalize_path
from safe_rm.safety.protected import ProtectedPathRegistry

logger = logging.getLogger(__name__)


class Classification(Enum):
    """Outcome for a single argument."""

    ALLOWED = "allowed"
    BLOCKED = "blocked"


@dataclass
class FilterResult:
    """Arguments to forward and arguments that were refused."""

    allowed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def blocked_count(self) -> int:
        return len(self.skipped)


class ArgumentFilter:
    """Splits arguments into forwarded and skipped paths.

    Every argument is treated as a path, including flag-like ones such as
    ``-rf``; those normally fail to resolve and are forwarded unchanged.
    """

    def __init__(
        self,
        registry: ProtectedPathRegistry,
        normalizer: Callable[[str], str] = normalize_path,
    ):
        self.registry = registry
        self.normalizer = normalizer

    def classify(self, arg: str) -> tuple[Classification, str]:
        """
        Classify one argument.

        Returns:
            Tuple of (classification, normalized path)
        """
        normalized = self.normalizer(arg)
        if self.registry.contains(normalized):
            return Classification.BLOCKED, normalized
        return Classification.ALLOWED, normalized

    def filter(self, args: Iterable[str]) -> FilterResult:
        """
        Classify each argument in order.

        Blocked arguments are reported by their original spelling; allowed
        arguments are forwarded in normalized form. Relative order is kept
        in both lists.
        """
        result = FilterResult()

        for arg in args:
            classification, normalized = self.classify(arg)
            if classification is Classification.BLOCKED:
                logger.debug("Blocked %r (normalized %r)", arg, normalized)
                result.skipped.append(arg)
            else:
                result.allowed.append(normalized)

        return result
