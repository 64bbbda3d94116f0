"""
Action System - Actions, payloads, and results.

Actions form a tagged union keyed by ActionType:
- MOVE        src, dest, piece_type
- BUILD       location, piece_type
- TRADE       location, piece_type, new_type
- CAPTURE     location, piece_type
- SACRIFICE   location, piece_type
- CATASTROPHE location, color

Every action names the player taking it. Actions are hashable values so
callers can collect them in sets.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .pieces import Color, PieceType
from .systems import Destination, Player, SystemId


class ActionType(Enum):
    """Kinds of actions in the game."""
    MOVE = "move"
    BUILD = "build"
    TRADE = "trade"
    CAPTURE = "capture"
    SACRIFICE = "sacrifice"
    CATASTROPHE = "catastrophe"


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields; unused fields stay None.
    """
    player: Player
    piece_type: PieceType | None = None

    # Move
    src: SystemId | None = None
    dest: Destination | None = None

    # Build / Trade / Capture / Sacrifice / Catastrophe
    location: SystemId | None = None

    # Trade
    new_type: PieceType | None = None

    # Catastrophe
    color: Color | None = None


@dataclass(frozen=True)
class Action:
    """A complete action to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload

    @property
    def player(self) -> Player:
        return self.payload.player

    @classmethod
    def move(cls, player: Player, src: SystemId, dest: Destination, piece_type: PieceType) -> Action:
        return cls(
            action_type=ActionType.MOVE,
            payload=ActionPayload(player=player, src=src, dest=dest, piece_type=piece_type),
        )

    @classmethod
    def build(cls, player: Player, location: SystemId, piece_type: PieceType) -> Action:
        return cls(
            action_type=ActionType.BUILD,
            payload=ActionPayload(player=player, location=location, piece_type=piece_type),
        )

    @classmethod
    def trade(
        cls, player: Player, location: SystemId, piece_type: PieceType, new_type: PieceType
    ) -> Action:
        return cls(
            action_type=ActionType.TRADE,
            payload=ActionPayload(
                player=player, location=location, piece_type=piece_type, new_type=new_type
            ),
        )

    @classmethod
    def capture(cls, player: Player, location: SystemId, piece_type: PieceType) -> Action:
        return cls(
            action_type=ActionType.CAPTURE,
            payload=ActionPayload(player=player, location=location, piece_type=piece_type),
        )

    @classmethod
    def sacrifice(cls, player: Player, location: SystemId, piece_type: PieceType) -> Action:
        return cls(
            action_type=ActionType.SACRIFICE,
            payload=ActionPayload(player=player, location=location, piece_type=piece_type),
        )

    @classmethod
    def catastrophe(cls, player: Player, location: SystemId, color: Color) -> Action:
        return cls(
            action_type=ActionType.CATASTROPHE,
            payload=ActionPayload(player=player, location=location, color=color),
        )

    def describe(self) -> str:
        """Human-readable one-liner."""
        p = self.payload
        who = p.player.value
        if self.action_type == ActionType.MOVE:
            return f"{who} moves {p.piece_type} from {p.src} to {p.dest}"
        if self.action_type == ActionType.TRADE:
            return f"{who} trades {p.piece_type} for {p.new_type} at {p.location}"
        if self.action_type == ActionType.CATASTROPHE:
            return f"{who} triggers a {p.color.value} catastrophe at {p.location}"
        return f"{who} {self.action_type.value}s {p.piece_type} at {p.location}"


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    - Human-readable changes
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: Any, changes: list[str] | None = None) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, state_changes=changes or [])
