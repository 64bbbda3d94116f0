"""
Engine errors.

All game-logic failures are local and recoverable. Only IllegalAction is
surfaced to callers of apply(); OutOfStock is consulted internally and
InvariantViolation signals an engine bug.
"""

from __future__ import annotations
from typing import Any


class EngineError(Exception):
    """Base class for rules engine errors."""


class OutOfStock(EngineError):
    """Raised when the bank holds no instance of the requested piece type."""

    def __init__(self, piece_type: Any):
        self.piece_type = piece_type
        super().__init__(f"No {piece_type} left in the bank")


class IllegalAction(EngineError):
    """Raised when an action is not legal in the current state."""

    def __init__(self, action: Any, reason: str = "action is not legal"):
        self.action = action
        self.reason = reason
        super().__init__(f"Illegal action {action}: {reason}")


class InvariantViolation(EngineError):
    """Raised when a state breaks piece accounting. Always an engine bug."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"State invariant check failed with {len(errors)} error(s): " + "; ".join(errors))
