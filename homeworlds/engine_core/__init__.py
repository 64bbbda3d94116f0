"""
Engine Core - Deterministic game state and transitions.

The engine:
1. Models pieces, the bank and the star systems
2. Manages GameState and the per-turn action budget
3. Generates legal actions
4. Applies actions via the reducer
"""

from .errors import EngineError, OutOfStock, IllegalAction, InvariantViolation
from .pieces import Size, Color, PieceType, Piece, PieceBank, ALL_PIECE_TYPES
from .systems import (
    Player,
    HomeworldId,
    ColonyId,
    NewColony,
    OwnedPiece,
    Homeworld,
    Colony,
    ColonyArena,
)
from .rules import reachable, can_found, unlocks, overpopulated_colors, COLOR_ACTIONS
from .budget import ActionGrant, TurnBudget
from .state import GameState, GamePhase, check_invariants
from .outcome import winner, is_game_over, is_stalled
from .action import Action, ActionType, ActionPayload, ActionResult
from .action_generator import ActionGenerator, legal_actions, is_legal
from .reducer import Reducer, apply_action, apply

__all__ = [
    "EngineError",
    "OutOfStock",
    "IllegalAction",
    "InvariantViolation",
    "Size",
    "Color",
    "PieceType",
    "Piece",
    "PieceBank",
    "ALL_PIECE_TYPES",
    "Player",
    "HomeworldId",
    "ColonyId",
    "NewColony",
    "OwnedPiece",
    "Homeworld",
    "Colony",
    "ColonyArena",
    "reachable",
    "can_found",
    "unlocks",
    "overpopulated_colors",
    "COLOR_ACTIONS",
    "ActionGrant",
    "TurnBudget",
    "GameState",
    "GamePhase",
    "check_invariants",
    "winner",
    "is_game_over",
    "is_stalled",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ActionGenerator",
    "legal_actions",
    "is_legal",
    "Reducer",
    "apply_action",
    "apply",
]
