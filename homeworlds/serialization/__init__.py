"""Lossless dict/JSON codec for actions and game states."""

from .schemas import GameStateModel, ActionModel, action_adapter
from .codec import (
    action_to_model,
    action_from_model,
    action_to_dict,
    action_from_dict,
    state_to_model,
    state_from_model,
    dump_state_json,
    load_state_json,
)

__all__ = [
    "GameStateModel",
    "ActionModel",
    "action_adapter",
    "action_to_model",
    "action_from_model",
    "action_to_dict",
    "action_from_dict",
    "state_to_model",
    "state_from_model",
    "dump_state_json",
    "load_state_json",
]
