"""
Turn budget - how many actions of which kind the player to move may still take.

A turn starts with one action of any kind. Sacrificing a ship spends one
unit from the front of the queue and appends a grant of N actions restricted
to the kind matching the ship's color, N being the ship's size rank. Grants
are drawn front to back; the turn is over once the queue is empty.
"""

from __future__ import annotations
from dataclasses import dataclass

from .action import ActionType


@dataclass(frozen=True)
class ActionGrant:
    """remaining actions of kind (any kind when kind is None)."""
    kind: ActionType | None
    remaining: int

    def allows(self, action_type: ActionType) -> bool:
        return self.kind is None or self.kind == action_type

    def __str__(self) -> str:
        kind = self.kind.value if self.kind else "any"
        return f"{self.remaining}x {kind}"


@dataclass(frozen=True)
class TurnBudget:
    grants: tuple[ActionGrant, ...] = ()

    @classmethod
    def fresh(cls) -> TurnBudget:
        return cls(grants=(ActionGrant(kind=None, remaining=1),))

    @property
    def front(self) -> ActionGrant | None:
        return self.grants[0] if self.grants else None

    @property
    def is_exhausted(self) -> bool:
        return not self.grants

    @property
    def is_restricted(self) -> bool:
        """True while drawing from a sacrifice grant."""
        front = self.front
        return front is not None and front.kind is not None

    def allows(self, action_type: ActionType) -> bool:
        front = self.front
        return front is not None and front.allows(action_type)

    def total_remaining(self) -> int:
        return sum(g.remaining for g in self.grants)

    def consume(self) -> TurnBudget:
        """Spend one action from the front grant."""
        front = self.front
        if front is None:
            raise ValueError("No actions remaining this turn")
        if front.remaining > 1:
            head = (ActionGrant(kind=front.kind, remaining=front.remaining - 1),)
        else:
            head = ()
        return TurnBudget(grants=head + self.grants[1:])

    def grant(self, kind: ActionType, count: int) -> TurnBudget:
        if count <= 0:
            return self
        return TurnBudget(grants=self.grants + (ActionGrant(kind=kind, remaining=count),))

    def forfeit(self) -> TurnBudget:
        """Drop the front grant entirely."""
        return TurnBudget(grants=self.grants[1:])

    def __str__(self) -> str:
        return ", ".join(str(g) for g in self.grants) or "exhausted"
