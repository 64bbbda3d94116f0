"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Drivers and search code to enumerate possible actions
2. The reducer to re-check an action before applying it

Design: Generates Action objects, not just action types.
This ensures all generated actions are fully specified. One action is
emitted per ship, so two identical ships yield duplicate actions; callers
that care compare results as sets.
"""

from __future__ import annotations
from dataclasses import dataclass

from .action import Action, ActionType
from .outcome import is_game_over
from .pieces import Color
from .rules import (
    can_found,
    largest_ship_rank,
    overpopulated_colors,
    reachable,
    unlocks,
)
from .state import GameState
from .systems import NewColony, Player, System

BUDGETED_TYPES = (
    ActionType.MOVE,
    ActionType.BUILD,
    ActionType.TRADE,
    ActionType.CAPTURE,
    ActionType.SACRIFICE,
)


@dataclass
class ActionGenerator:
    """
    Generates legal actions for a player.

    Catastrophes are free and available to either player; every other
    action kind is gated by the turn budget of the player to move.
    """
    state: GameState

    def generate(self, player: Player | None = None) -> list[Action]:
        """
        Generate all legal actions for player (default: the player to move).

        Returns a list of fully-specified Action objects.
        """
        state = self.state
        player = player or state.to_move

        if is_game_over(state):
            return []

        actions = self.catastrophe_actions(player)
        if player != state.to_move:
            return actions

        return self.budgeted_actions() + actions

    def budgeted_actions(self) -> list[Action]:
        """Actions that spend the turn budget of the player to move."""
        state = self.state
        player = state.to_move

        if state.budget.is_exhausted:
            return []

        if state.is_opening:
            return self._generate_opening_actions(player)

        generators = {
            ActionType.MOVE: self._generate_move_actions,
            ActionType.BUILD: self._generate_build_actions,
            ActionType.TRADE: self._generate_trade_actions,
            ActionType.CAPTURE: self._generate_capture_actions,
            ActionType.SACRIFICE: self._generate_sacrifice_actions,
        }
        actions = []
        for action_type in BUDGETED_TYPES:
            if self._budget_allows(action_type):
                actions.extend(generators[action_type](player))
        return actions

    def grant_actions(self) -> list[Action]:
        """
        Budgeted actions that put the front grant to its own use.

        Under a sacrifice grant, sacrificing another ship does not count.
        """
        actions = self.budgeted_actions()
        if self.state.budget.is_restricted:
            return [a for a in actions if a.action_type != ActionType.SACRIFICE]
        return actions

    def catastrophe_actions(self, player: Player) -> list[Action]:
        actions = []
        for system in self.state.systems():
            for color in overpopulated_colors(system):
                actions.append(Action.catastrophe(player, system.system_id, color))
        return actions

    def _budget_allows(self, action_type: ActionType) -> bool:
        # Sacrifices may be chained from inside a sacrifice grant
        if action_type == ActionType.SACRIFICE:
            return True
        return self.state.budget.allows(action_type)

    def _may_use(self, system: System, player: Player, color: Color, action_type: ActionType) -> bool:
        """Color gate, waived while drawing on a grant of that very kind."""
        budget = self.state.budget
        if budget.is_restricted and budget.front.kind == action_type:
            return bool(system.ships_of(player))
        return unlocks(system, player, color)

    def _generate_opening_actions(self, player: Player) -> list[Action]:
        """Each player's first turn places one ship of any banked type at home."""
        home = self.state.homeworld(player)
        return [
            Action.build(player, home.system_id, piece_type)
            for piece_type in self.state.bank.stocked_types()
        ]

    def _generate_move_actions(self, player: Player) -> list[Action]:
        state = self.state
        systems = state.systems()
        actions = []

        for src in systems:
            ships = src.ships_of(player)
            if not ships or not self._may_use(src, player, Color.YELLOW, ActionType.MOVE):
                continue

            destinations = [dest.system_id for dest in systems if dest is not src and reachable(src, dest)]
            new_colonies = [t for t in state.bank.stocked_types() if can_found(src, t)]

            for ship in ships:
                for dest_id in destinations:
                    actions.append(Action.move(player, src.system_id, dest_id, ship.piece_type))
                for star_type in new_colonies:
                    actions.append(
                        Action.move(player, src.system_id, NewColony(star_type), ship.piece_type)
                    )

        return actions

    def _generate_build_actions(self, player: Player) -> list[Action]:
        state = self.state
        actions = []

        for system in state.systems():
            limit = largest_ship_rank(system, player)
            if limit == 0 or not self._may_use(system, player, Color.GREEN, ActionType.BUILD):
                continue
            for piece_type in state.bank.stocked_types():
                if piece_type.size.rank <= limit:
                    actions.append(Action.build(player, system.system_id, piece_type))

        return actions

    def _generate_trade_actions(self, player: Player) -> list[Action]:
        state = self.state
        actions = []

        for system in state.systems():
            ships = system.ships_of(player)
            if not ships or not self._may_use(system, player, Color.BLUE, ActionType.TRADE):
                continue
            for ship in ships:
                for new_type in state.bank.stocked_types():
                    if new_type.size == ship.size and new_type.color != ship.color:
                        actions.append(
                            Action.trade(player, system.system_id, ship.piece_type, new_type)
                        )

        return actions

    def _generate_capture_actions(self, player: Player) -> list[Action]:
        actions = []

        for system in self.state.systems():
            limit = largest_ship_rank(system, player)
            if limit == 0 or not self._may_use(system, player, Color.RED, ActionType.CAPTURE):
                continue
            for target in system.ships_of(player.opponent):
                if target.size.rank <= limit:
                    actions.append(Action.capture(player, system.system_id, target.piece_type))

        return actions

    def _generate_sacrifice_actions(self, player: Player) -> list[Action]:
        actions = []
        for system in self.state.systems():
            for ship in system.ships_of(player):
                actions.append(Action.sacrifice(player, system.system_id, ship.piece_type))
        return actions


def legal_actions(state: GameState, player: Player | None = None) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    return ActionGenerator(state=state).generate(player)


def is_legal(state: GameState, action: Action) -> bool:
    """Check if a specific action is legal for the player named in it."""
    return action in legal_actions(state, action.player)
