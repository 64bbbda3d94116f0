"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state, the input is never touched
- Validates before applying, against the current state
- Returns ActionResult with success/failure
- Settles the turn: forfeits unusable grants and passes the turn once the
  budget is spent and no catastrophe is waiting
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..config import settings
from .action import Action, ActionResult, ActionType
from .action_generator import ActionGenerator, is_legal
from .budget import TurnBudget
from .errors import IllegalAction, OutOfStock
from .outcome import is_game_over, winner
from .rules import COLOR_ACTIONS
from .state import GameState, check_invariants
from .systems import Colony, Homeworld, NewColony, OwnedPiece, Player, SystemId

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """
    check_invariants: bool = field(default_factory=lambda: settings.check_invariants)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            logger.info("Rejected %s: %s", action.describe(), validation_error)
            return ActionResult.failure(validation_error, error_code="ILLEGAL_ACTION")

        handler = self._get_handler(action.action_type)
        try:
            result = handler(state, action)
        except OutOfStock as e:
            logger.info("Rejected %s: %s", action.describe(), e)
            return ActionResult.failure(str(e), error_code="OUT_OF_STOCK")
        except IllegalAction as e:
            logger.info("Rejected %s: %s", action.describe(), e.reason)
            return ActionResult.failure(e.reason, error_code="ILLEGAL_ACTION")

        new_state = result.new_state
        if action.action_type not in {ActionType.SACRIFICE, ActionType.CATASTROPHE}:
            new_state = new_state.with_budget(new_state.budget.consume())

        changes = list(result.state_changes)
        new_state = self._settle(new_state, changes)

        if self.check_invariants:
            check_invariants(new_state)

        logger.debug("Applied %s", action.describe())
        return ActionResult.success_with_state(new_state, changes=changes)

    def _validate_action(self, state: GameState, action: Action) -> str | None:
        """
        Validate that an action is legal in the current state.

        Returns error message if invalid, None if valid.
        """
        if is_game_over(state):
            return "Game is over - no actions allowed"

        if action.player != state.to_move and action.action_type != ActionType.CATASTROPHE:
            return f"Not {action.player.value}'s turn"

        if not is_legal(state, action):
            return f"{action.describe()} is not legal in the current state"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.MOVE: self._handle_move,
            ActionType.BUILD: self._handle_build,
            ActionType.TRADE: self._handle_trade,
            ActionType.CAPTURE: self._handle_capture,
            ActionType.SACRIFICE: self._handle_sacrifice,
            ActionType.CATASTROPHE: self._handle_catastrophe,
        }
        return handlers[action_type]

    def _handle_move(self, state: GameState, action: Action) -> ActionResult:
        """Move a ship to an existing system or found a new colony."""
        p = action.payload
        ship, new_state = _take_ship(state, action, p.src, p.player)

        if isinstance(p.dest, NewColony):
            star, bank = new_state.bank.pop(p.dest.star_type)
            colony, colonies = new_state.colonies.allocate(star, (ship,))
            new_state = new_state._copy_with(bank=bank, colonies=colonies)
            destination = f"new colony {colony.colony_id} around {star.piece_type}"
        else:
            dest = new_state.get_system(p.dest)
            new_state = new_state.with_system(dest.with_ship(ship))
            destination = str(p.dest)

        new_state, cleanup = _tidy(new_state, p.src)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{p.player.value} moved {p.piece_type} from {p.src} to {destination}"] + cleanup,
        )

    def _handle_build(self, state: GameState, action: Action) -> ActionResult:
        """Build a new ship from the bank."""
        p = action.payload
        piece, bank = state.bank.pop(p.piece_type)
        system = state.get_system(p.location)
        new_state = state.with_bank(bank).with_system(system.with_ship(OwnedPiece(piece, p.player)))
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{p.player.value} built {p.piece_type} at {p.location}"],
        )

    def _handle_trade(self, state: GameState, action: Action) -> ActionResult:
        """Swap a ship for a banked piece of the same size."""
        p = action.payload
        new_piece, bank = state.bank.pop(p.new_type)
        ship, new_state = _take_ship(state.with_bank(bank), action, p.location, p.player)
        new_state = new_state.with_bank(new_state.bank.put_back(ship.piece))
        system = new_state.get_system(p.location)
        new_state = new_state.with_system(system.with_ship(OwnedPiece(new_piece, p.player)))
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{p.player.value} traded {p.piece_type} for {p.new_type} at {p.location}"],
        )

    def _handle_capture(self, state: GameState, action: Action) -> ActionResult:
        """Take over an enemy ship in place. The bank is untouched."""
        p = action.payload
        victim, new_state = _take_ship(state, action, p.location, p.player.opponent)
        system = new_state.get_system(p.location)
        new_state = new_state.with_system(system.with_ship(OwnedPiece(victim.piece, p.player)))
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{p.player.value} captured {p.piece_type} at {p.location}"],
        )

    def _handle_sacrifice(self, state: GameState, action: Action) -> ActionResult:
        """
        Return a ship to the bank in exchange for restricted actions.

        Spends one unit of the current grant and queues rank-many actions
        of the kind matching the ship's color.
        """
        p = action.payload
        ship, new_state = _take_ship(state, action, p.location, p.player)
        new_state = new_state.with_bank(new_state.bank.put_back(ship.piece))
        new_state, cleanup = _tidy(new_state, p.location)

        kind = COLOR_ACTIONS[ship.color]
        count = ship.size.rank
        new_state = new_state.with_budget(new_state.budget.consume().grant(kind, count))
        return ActionResult.success_with_state(
            new_state,
            changes=[
                f"{p.player.value} sacrificed {p.piece_type} at {p.location} "
                f"for {count} {kind.value} action(s)"
            ] + cleanup,
        )

    def _handle_catastrophe(self, state: GameState, action: Action) -> ActionResult:
        """Return every piece of the color at the location to the bank."""
        p = action.payload
        system = state.get_system(p.location)
        doomed = [piece for piece in system.pieces() if piece.color == p.color]
        survivors = [ship for ship in system.ships if ship.color != p.color]

        new_state = state.with_bank(state.bank.put_back_all(doomed))
        new_state = new_state.with_system(system.without_stars_of(p.color).with_ships(survivors))
        new_state, cleanup = _tidy(new_state, p.location)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{p.color.value} catastrophe at {p.location} destroyed {len(doomed)} piece(s)"] + cleanup,
        )

    def _settle(self, state: GameState, changes: list[str]) -> GameState:
        """
        Advance the turn machine until the player to move has something to do.

        A front grant with no action of its own kind is forfeited. An
        exhausted budget passes the turn unless a catastrophe is available.
        Passing stops after two consecutive turns.
        """
        passes = 0
        while not is_game_over(state):
            generator = ActionGenerator(state=state)
            if not state.budget.is_exhausted:
                if generator.grant_actions():
                    break
                logger.debug("%s forfeits %s", state.to_move.value, state.budget.front)
                changes.append(f"{state.to_move.value} forfeits {state.budget.front}")
                state = state.with_budget(state.budget.forfeit())
                continue

            if generator.catastrophe_actions(state.to_move):
                break

            state = _end_turn(state)
            changes.append(f"turn {state.turn_number}: {state.to_move.value} to move")
            logger.debug("Turn %d passes to %s", state.turn_number, state.to_move.value)
            passes += 1
            if passes >= 2:
                break

        if is_game_over(state):
            decided = winner(state)
            changes.append(f"game over, winner: {decided.value if decided else 'none'}")
            logger.debug("Game over, winner %s", decided)
        return state


def _take_ship(
    state: GameState, action: Action, system_id: SystemId, player: Player
) -> tuple[OwnedPiece, GameState]:
    """Remove one ship of the action's piece type owned by player. Returns (ship, new state)."""
    piece_type = action.payload.piece_type
    system = state.get_system(system_id)
    ship = system.find_ship(player, piece_type) if system is not None else None
    if ship is None:
        raise IllegalAction(action, f"{player.value} has no {piece_type} at {system_id}")
    return ship, state.with_system(system.without_ship(ship))


def _tidy(state: GameState, system_id: SystemId) -> tuple[GameState, list[str]]:
    """
    Clean up a system after pieces left it.

    A colony without a star or without ships disappears and its remaining
    pieces return to the bank. A starless homeworld sends its ships home
    to the bank as well.
    """
    system = state.get_system(system_id)
    if isinstance(system, Colony):
        if system.star is not None and system.ships:
            return state, []
        new_state = state.with_bank(state.bank.put_back_all(system.pieces()))
        return new_state.without_colony(system.colony_id), [f"{system_id} is abandoned"]
    if isinstance(system, Homeworld):
        if system.has_stars or not system.ships:
            return state, []
        new_state = state.with_bank(state.bank.put_back_all(ship.piece for ship in system.ships))
        return new_state.with_system(system.with_ships(())), [f"{system_id} has collapsed"]
    return state, []


def _end_turn(state: GameState) -> GameState:
    return state._copy_with(
        to_move=state.to_move.opponent,
        turn_number=state.turn_number + 1,
        budget=TurnBudget.fresh(),
    )


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    return Reducer().apply(state, action)


def apply(state: GameState, action: Action) -> GameState:
    """Apply an action and return the successor state. Raises IllegalAction."""
    result = apply_action(state, action)
    if not result.success:
        raise IllegalAction(action, result.error)
    return result.new_state
