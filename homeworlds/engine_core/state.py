"""
Game State - The complete position at a point in time.

Design principles:
- Immutable-friendly: all mutations return new state
- Value semantics: states compare by content and never share mutable data
- Piece accounting: bank + pieces in play is always the full 36-piece set
"""

from __future__ import annotations
from collections import Counter
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum

from .budget import TurnBudget
from .errors import InvariantViolation
from .pieces import ALL_PIECE_TYPES, COPIES_PER_TYPE, Piece, PieceBank
from .systems import (
    Colony,
    ColonyArena,
    ColonyId,
    Homeworld,
    HomeworldId,
    Player,
    System,
    SystemId,
)


OPENING_TURNS = 2


class GamePhase(Enum):
    """High-level game phases."""
    OPENING = "opening"
    PLAYING = "playing"
    GAME_OVER = "game_over"


def _default_homeworlds() -> dict[Player, Homeworld]:
    return {player: Homeworld(owner=player) for player in Player}


@dataclass
class GameState:
    """
    Complete game state.

    turn_number counts completed turns; the first OPENING_TURNS turns are the
    opening, where each player places their first ship.
    """
    bank: PieceBank = field(default_factory=PieceBank.full)
    homeworlds: dict[Player, Homeworld] = field(default_factory=_default_homeworlds)
    colonies: ColonyArena = field(default_factory=ColonyArena)
    to_move: Player = Player.FIRST
    turn_number: int = 0
    budget: TurnBudget = field(default_factory=TurnBudget.fresh)

    @property
    def next_colony_id(self) -> int:
        return self.colonies.next_id

    @property
    def is_opening(self) -> bool:
        return self.turn_number < OPENING_TURNS

    @property
    def phase(self) -> GamePhase:
        from .outcome import is_game_over

        if self.is_opening:
            return GamePhase.OPENING
        if is_game_over(self):
            return GamePhase.GAME_OVER
        return GamePhase.PLAYING

    def homeworld(self, player: Player) -> Homeworld:
        return self.homeworlds[player]

    def systems(self) -> list[System]:
        """Both homeworlds (first player's first), then live colonies by id."""
        return [self.homeworlds[Player.FIRST], self.homeworlds[Player.SECOND], *self.colonies.live()]

    def get_system(self, system_id: SystemId) -> System | None:
        if isinstance(system_id, HomeworldId):
            return self.homeworlds.get(system_id.player)
        if isinstance(system_id, ColonyId):
            return self.colonies.get(system_id.colony_id)
        return None

    def pieces_in_play(self) -> list[Piece]:
        return [piece for system in self.systems() for piece in system.pieces()]

    def with_bank(self, bank: PieceBank) -> GameState:
        return self._copy_with(bank=bank)

    def with_system(self, system: System) -> GameState:
        """Return new state with a homeworld or live colony replaced."""
        if isinstance(system, Homeworld):
            new_homeworlds = self.homeworlds.copy()
            new_homeworlds[system.owner] = system
            return self._copy_with(homeworlds=new_homeworlds)
        if isinstance(system, Colony):
            return self._copy_with(colonies=self.colonies.replace(system))
        raise TypeError(f"Not a system: {system!r}")

    def without_colony(self, colony_id: int) -> GameState:
        return self._copy_with(colonies=self.colonies.remove(colony_id))

    def with_budget(self, budget: TurnBudget) -> GameState:
        return self._copy_with(budget=budget)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            bank=kwargs.get("bank", self.bank),
            homeworlds=kwargs.get("homeworlds", self.homeworlds),
            colonies=kwargs.get("colonies", self.colonies),
            to_move=kwargs.get("to_move", self.to_move),
            turn_number=kwargs.get("turn_number", self.turn_number),
            budget=kwargs.get("budget", self.budget),
        )

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)


def invariant_errors(state: GameState) -> list[str]:
    """Piece accounting problems in a state; empty when the state is sound."""
    errors: list[str] = []

    banked = state.bank.all_pieces()
    in_play = state.pieces_in_play()
    everything = banked + in_play

    expected = len(ALL_PIECE_TYPES) * COPIES_PER_TYPE
    if len(everything) != expected:
        errors.append(f"{len(everything)} pieces accounted for, expected {expected}")

    for piece, seen in Counter(everything).items():
        if seen > 1:
            errors.append(f"{piece} appears {seen} times")

    per_type = Counter(piece.piece_type for piece in everything)
    for piece_type, seen in per_type.items():
        if seen > COPIES_PER_TYPE:
            errors.append(f"{seen} live instances of {piece_type}")

    for colony in state.colonies.live():
        if colony.star is None:
            errors.append(f"colony {colony.colony_id} has no star")
        if not colony.ships:
            errors.append(f"colony {colony.colony_id} has no ships")

    for player, homeworld in state.homeworlds.items():
        if homeworld.owner != player:
            errors.append(f"homeworld of {player.value} is owned by {homeworld.owner.value}")
        if len(homeworld.stars) > 2:
            errors.append(f"homeworld of {player.value} has {len(homeworld.stars)} stars")

    return errors


def check_invariants(state: GameState) -> None:
    """Raise InvariantViolation if piece accounting is broken."""
    errors = invariant_errors(state)
    if errors:
        raise InvariantViolation(errors)
