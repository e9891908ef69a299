"""Core filtering and delegation functionality."""

from __future__ import annotations

from .delegate import DelegationDecision, DelegationGuard
from .filter import ArgumentFilter, Classification, FilterResult

__all__ = ["ArgumentFilter", "Classification", "FilterResult", "DelegationGuard", "DelegationDecision"]
