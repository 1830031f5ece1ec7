"""Exceptions raised for programmer errors in the game logic layer."""

from __future__ import annotations


class UnknownCrisisError(LookupError):
    """Raised when a crisis id does not match any pending crisis."""


class UnknownDecisionError(LookupError):
    """Raised when a decision id does not match any queued decision."""


class UnknownOptionError(LookupError):
    """Raised when an option id is not offered by the crisis or decision."""


class SnapshotRestoreError(RuntimeError):
    """Raised when a snapshot cannot be turned back into a studio."""


__all__ = [
    "SnapshotRestoreError",
    "UnknownCrisisError",
    "UnknownDecisionError",
    "UnknownOptionError",
]
