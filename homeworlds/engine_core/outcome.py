"""Game over detection."""

from __future__ import annotations
from typing import TYPE_CHECKING

from .systems import Player

if TYPE_CHECKING:
    from .state import GameState


def starless_players(state: GameState) -> list[Player]:
    """Players whose homeworld has lost every star. Empty during the opening."""
    if state.is_opening:
        return []
    return [player for player in Player if not state.homeworld(player).has_stars]


def is_stalled(state: GameState) -> bool:
    """
    True once neither player can ever act again.

    A player with a ship can always sacrifice it on a fresh turn, and a
    catastrophe needs four pieces of a color in one system, which a board
    of lone stars cannot hold. So after the opening, a board without ships
    is dead for both sides.
    """
    if state.is_opening:
        return False
    return not any(system.ships for system in state.systems())


def is_game_over(state: GameState) -> bool:
    return bool(starless_players(state)) or is_stalled(state)


def winner(state: GameState) -> Player | None:
    """
    The winning player, if the game is decided.

    A player loses once their homeworld has no stars after the opening.
    If both homeworlds are gone, or the board is stalled with both
    homeworlds standing, the game is a draw and there is no winner.
    """
    losers = starless_players(state)
    if len(losers) == 1:
        return losers[0].opponent
    return None
