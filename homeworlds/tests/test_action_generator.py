"""
Tests for legal action generation.

Generated lists may contain duplicates (one per identical ship), so
assertions compare sets.
"""

from ..engine_core.action import Action, ActionType
from ..engine_core.budget import ActionGrant, TurnBudget
from ..engine_core.pieces import (
    ALL_PIECE_TYPES,
    Color,
    LARGE_GREEN,
    LARGE_YELLOW,
    MEDIUM_GREEN,
    MEDIUM_YELLOW,
    SMALL_BLUE,
    SMALL_GREEN,
    SMALL_RED,
    SMALL_YELLOW,
    Size,
)
from ..engine_core.action_generator import is_legal, legal_actions
from ..engine_core.systems import ColonyId, NewColony
from ..game.setup import create_position
from .conftest import FIRST, HOME_1, HOME_2, SECOND


def _of_type(actions, action_type):
    return [a for a in actions if a.action_type == action_type]


def _move_triples(actions):
    return {
        (a.payload.src, a.payload.dest, a.payload.piece_type)
        for a in _of_type(actions, ActionType.MOVE)
    }


class TestOpening:
    """Tests for the opening ship placement."""

    def test_first_player_may_build_any_type_at_home(self, fresh_state):
        actions = legal_actions(fresh_state)

        assert {a.action_type for a in actions} == {ActionType.BUILD}
        assert {a.payload.location for a in actions} == {HOME_1}
        assert {a.payload.piece_type for a in actions} == set(ALL_PIECE_TYPES)

    def test_waiting_player_has_nothing(self, fresh_state):
        assert legal_actions(fresh_state, SECOND) == []


class TestMoveGeneration:
    """Tests for move actions."""

    def test_move_scenario(self, move_scenario):
        """One move to the enemy homeworld plus one new colony per medium/large type."""
        actions = legal_actions(move_scenario)

        expected = {(HOME_1, HOME_2, LARGE_GREEN)}
        for piece_type in ALL_PIECE_TYPES:
            if piece_type.size != Size.SMALL and move_scenario.bank.contains(piece_type):
                expected.add((HOME_1, NewColony(piece_type), LARGE_GREEN))

        assert len(expected) == 9
        assert _move_triples(actions) == expected

    def test_no_move_without_yellow(self, small_builder):
        assert _of_type(legal_actions(small_builder), ActionType.MOVE) == []

    def test_new_colony_needs_stock(self):
        """All three medium yellows in play: no colony can be founded on one."""
        state = create_position(
            homeworld_stars={FIRST: (SMALL_RED, SMALL_YELLOW), SECOND: (SMALL_BLUE, LARGE_GREEN)},
            homeworld_ships={FIRST: [(LARGE_GREEN, FIRST)], SECOND: [(SMALL_GREEN, SECOND)]},
            colonies=[(MEDIUM_YELLOW, [(MEDIUM_YELLOW, SECOND), (MEDIUM_YELLOW, SECOND)])],
            turn_number=2,
        )
        destinations = {dest for _, dest, _ in _move_triples(legal_actions(state))}

        assert NewColony(MEDIUM_YELLOW) not in destinations
        assert ColonyId(0) in destinations

    def test_move_grant_waives_yellow(self, small_builder):
        state = small_builder.with_budget(TurnBudget(grants=(ActionGrant(ActionType.MOVE, 2),)))
        actions = legal_actions(state)

        kinds = {a.action_type for a in actions}
        assert kinds == {ActionType.MOVE, ActionType.SACRIFICE}
        assert _move_triples(actions)


class TestBuildGeneration:

    def test_build_limited_by_largest_ship(self, small_builder):
        builds = _of_type(legal_actions(small_builder), ActionType.BUILD)

        assert {a.payload.location for a in builds} == {HOME_1}
        assert {a.payload.piece_type for a in builds} == {
            t for t in ALL_PIECE_TYPES if t.size == Size.SMALL
        }

    def test_large_ship_may_build_anything_stocked(self, move_scenario):
        builds = _of_type(legal_actions(move_scenario), ActionType.BUILD)
        assert {a.payload.piece_type for a in builds} == set(move_scenario.bank.stocked_types())


class TestTradeGeneration:

    def test_trade_for_same_size_other_colors(self, small_builder):
        trades = _of_type(legal_actions(small_builder), ActionType.TRADE)

        assert {a.payload.piece_type for a in trades} == {SMALL_GREEN}
        assert {a.payload.new_type.color for a in trades} == {Color.RED, Color.BLUE, Color.YELLOW}
        assert all(a.payload.new_type.size == Size.SMALL for a in trades)

    def test_no_trade_without_blue(self, move_scenario):
        assert _of_type(legal_actions(move_scenario), ActionType.TRADE) == []


class TestCaptureGeneration:

    def test_capture_only_ships_no_larger_than_own(self, capture_scenario):
        captures = _of_type(legal_actions(capture_scenario), ActionType.CAPTURE)
        assert set(captures) == {Action.capture(FIRST, HOME_1, SMALL_YELLOW)}

    def test_red_star_serves_both_players(self, capture_scenario):
        state = capture_scenario._copy_with(to_move=SECOND)
        captures = _of_type(legal_actions(state), ActionType.CAPTURE)
        assert set(captures) == {Action.capture(SECOND, HOME_1, MEDIUM_GREEN)}

    def test_no_capture_without_red(self):
        state = create_position(
            homeworld_stars={FIRST: (SMALL_BLUE, LARGE_YELLOW), SECOND: (SMALL_YELLOW, MEDIUM_GREEN)},
            homeworld_ships={
                FIRST: [(LARGE_GREEN, FIRST), (SMALL_GREEN, SECOND)],
                SECOND: [(MEDIUM_YELLOW, SECOND)],
            },
            turn_number=2,
        )
        assert _of_type(legal_actions(state), ActionType.CAPTURE) == []


class TestSacrificeGeneration:

    def test_every_own_ship_may_be_sacrificed(self, capture_scenario):
        sacrifices = _of_type(legal_actions(capture_scenario), ActionType.SACRIFICE)
        assert {(a.payload.location, a.payload.piece_type) for a in sacrifices} == {
            (HOME_1, MEDIUM_GREEN),
        }


class TestCatastropheGeneration:

    def test_either_player_may_trigger(self):
        state = create_position(
            homeworld_stars={FIRST: (SMALL_YELLOW, SMALL_BLUE), SECOND: (LARGE_YELLOW, SMALL_RED)},
            homeworld_ships={FIRST: [(LARGE_GREEN, FIRST)], SECOND: [(LARGE_GREEN, SECOND)]},
            colonies=[(MEDIUM_GREEN, [
                (SMALL_GREEN, FIRST), (SMALL_GREEN, SECOND), (LARGE_GREEN, SECOND),
            ])],
            turn_number=2,
        )
        colony = ColonyId(0)

        assert Action.catastrophe(FIRST, colony, Color.GREEN) in legal_actions(state)
        assert legal_actions(state, SECOND) == [Action.catastrophe(SECOND, colony, Color.GREEN)]


class TestGeneratorProperties:

    def test_idempotent(self, opened_state):
        assert legal_actions(opened_state) == legal_actions(opened_state)

    def test_is_legal_matches_generation(self, move_scenario):
        assert is_legal(move_scenario, Action.move(FIRST, HOME_1, HOME_2, LARGE_GREEN))
        assert not is_legal(move_scenario, Action.move(FIRST, HOME_1, NewColony(SMALL_BLUE), LARGE_GREEN))
        assert not is_legal(move_scenario, Action.move(SECOND, HOME_2, HOME_1, LARGE_GREEN))

    def test_game_over_has_no_actions(self):
        state = create_position(
            homeworld_stars={FIRST: (SMALL_YELLOW, SMALL_BLUE), SECOND: ()},
            homeworld_ships={FIRST: [(LARGE_GREEN, FIRST)]},
            turn_number=4,
        )
        assert legal_actions(state) == []
