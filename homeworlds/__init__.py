"""
Homeworlds - Rules engine for a two-player game of star systems and ships.

A deterministic, side-effect-free engine that provides:
- The starting position
- Legal action generation for either player
- State transitions
- Winner detection

Drivers (CLIs, UIs, search code) sit on top of these pure functions.
"""

__version__ = "0.1.0"

from .engine_core import (
    Action,
    ActionType,
    GameState,
    IllegalAction,
    Player,
    apply,
    legal_actions,
    winner,
)
from .game import initial_state, create_position

__all__ = [
    "Action",
    "ActionType",
    "GameState",
    "IllegalAction",
    "Player",
    "apply",
    "legal_actions",
    "winner",
    "initial_state",
    "create_position",
]
