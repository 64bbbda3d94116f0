"""
Game Setup - Creates initial and arbitrary positions.

This module handles:
- The starting position: two homeworlds of two stars each, no ships
- Building any other position from a full bank, for puzzles and tests

Every piece placed on the board is drawn from a full bank, so the
36-piece accounting holds by construction.
"""

from __future__ import annotations
from typing import Iterable, Sequence

from ..engine_core.budget import TurnBudget
from ..engine_core.pieces import (
    LARGE_RED,
    LARGE_YELLOW,
    MEDIUM_BLUE,
    SMALL_BLUE,
    PieceBank,
    PieceType,
)
from ..engine_core.state import GameState, check_invariants
from ..engine_core.systems import ColonyArena, Homeworld, OwnedPiece, Player


DEFAULT_STARS: dict[Player, tuple[PieceType, ...]] = {
    Player.FIRST: (SMALL_BLUE, LARGE_YELLOW),
    Player.SECOND: (MEDIUM_BLUE, LARGE_RED),
}

ShipPlacement = tuple[PieceType, Player]


def initial_state(
    first_stars: Sequence[PieceType] | None = None,
    second_stars: Sequence[PieceType] | None = None,
) -> GameState:
    """
    Set up a new game.

    Args:
        first_stars: The first player's two homeworld stars
        second_stars: The second player's two homeworld stars

    Returns:
        GameState at the start of the opening, first player to move
    """
    first_stars = tuple(first_stars or DEFAULT_STARS[Player.FIRST])
    second_stars = tuple(second_stars or DEFAULT_STARS[Player.SECOND])
    for stars in (first_stars, second_stars):
        if len(stars) != 2:
            raise ValueError("A homeworld starts with exactly two stars")

    return create_position(
        homeworld_stars={Player.FIRST: first_stars, Player.SECOND: second_stars},
    )


def create_position(
    homeworld_stars: dict[Player, Sequence[PieceType]],
    homeworld_ships: dict[Player, Iterable[ShipPlacement]] | None = None,
    colonies: Iterable[tuple[PieceType, Iterable[ShipPlacement]]] = (),
    to_move: Player = Player.FIRST,
    turn_number: int = 0,
) -> GameState:
    """
    Build a position by drawing every piece from a full bank.

    Args:
        homeworld_stars: Up to two star types per player
        homeworld_ships: (type, owner) ships at each player's homeworld
        colonies: (star type, ships) per colony, numbered in order from 0
        to_move: Player to move
        turn_number: Completed turns (below 2 means the opening)

    Raises:
        OutOfStock: if the position needs more than three of a type
        ValueError: for a homeworld with more than two stars or a colony
            without ships
    """
    homeworld_ships = homeworld_ships or {}
    bank = PieceBank.full()

    homeworlds = {}
    for player in Player:
        star_types = tuple(homeworld_stars.get(player, ()))
        if len(star_types) > 2:
            raise ValueError(f"Homeworld of {player.value} has more than two stars")
        stars = []
        for star_type in star_types:
            star, bank = bank.pop(star_type)
            stars.append(star)
        ships, bank = _draw_ships(bank, homeworld_ships.get(player, ()))
        homeworlds[player] = Homeworld(owner=player, stars=tuple(stars), ships=ships)

    arena = ColonyArena()
    for star_type, placements in colonies:
        star, bank = bank.pop(star_type)
        ships, bank = _draw_ships(bank, placements)
        if not ships:
            raise ValueError("A colony needs at least one ship")
        _, arena = arena.allocate(star, ships)

    state = GameState(
        bank=bank,
        homeworlds=homeworlds,
        colonies=arena,
        to_move=to_move,
        turn_number=turn_number,
        budget=TurnBudget.fresh(),
    )
    check_invariants(state)
    return state


def _draw_ships(bank: PieceBank, placements: Iterable[ShipPlacement]) -> tuple[tuple[OwnedPiece, ...], PieceBank]:
    ships = []
    for piece_type, owner in placements:
        piece, bank = bank.pop(piece_type)
        ships.append(OwnedPiece(piece, owner))
    return tuple(ships), bank
