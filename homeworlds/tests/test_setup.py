"""
Tests for game setup and winner detection.
"""

import pytest

from ..engine_core.errors import OutOfStock
from ..engine_core.outcome import is_game_over, is_stalled, starless_players, winner
from ..engine_core.pieces import LARGE_GREEN, LARGE_RED, LARGE_YELLOW, MEDIUM_BLUE, SMALL_BLUE
from ..engine_core.state import GamePhase
from ..game.setup import DEFAULT_STARS, create_position, initial_state
from .conftest import FIRST, SECOND


class TestInitialState:

    def test_default_homeworlds(self, fresh_state):
        assert [s.piece_type for s in fresh_state.homeworld(FIRST).stars] == [SMALL_BLUE, LARGE_YELLOW]
        assert [s.piece_type for s in fresh_state.homeworld(SECOND).stars] == [MEDIUM_BLUE, LARGE_RED]
        assert fresh_state.bank.total() == 32
        assert fresh_state.to_move == FIRST
        assert fresh_state.turn_number == 0
        assert fresh_state.phase == GamePhase.OPENING
        assert fresh_state.next_colony_id == 0

    def test_custom_stars(self):
        state = initial_state(first_stars=DEFAULT_STARS[SECOND], second_stars=DEFAULT_STARS[FIRST])
        assert [s.piece_type for s in state.homeworld(FIRST).stars] == [MEDIUM_BLUE, LARGE_RED]

    def test_single_star_is_rejected(self):
        with pytest.raises(ValueError):
            initial_state(first_stars=(SMALL_BLUE,))


class TestCreatePosition:

    def test_fourth_copy_is_out_of_stock(self):
        with pytest.raises(OutOfStock):
            create_position(
                homeworld_stars={FIRST: (LARGE_GREEN, LARGE_GREEN), SECOND: (LARGE_GREEN,)},
                homeworld_ships={FIRST: [(LARGE_GREEN, FIRST)]},
            )

    def test_three_stars_rejected(self):
        with pytest.raises(ValueError):
            create_position(homeworld_stars={FIRST: (SMALL_BLUE, MEDIUM_BLUE, LARGE_RED)})

    def test_colony_needs_a_ship(self):
        with pytest.raises(ValueError):
            create_position(homeworld_stars={FIRST: (SMALL_BLUE,)}, colonies=[(LARGE_RED, [])])


class TestOutcome:

    def test_no_winner_during_opening(self):
        state = create_position(homeworld_stars={FIRST: (SMALL_BLUE, LARGE_YELLOW)})
        assert starless_players(state) == []
        assert not is_game_over(state)
        assert winner(state) is None

    def test_starless_player_loses(self):
        state = create_position(
            homeworld_stars={FIRST: (SMALL_BLUE, LARGE_YELLOW)},
            homeworld_ships={FIRST: [(LARGE_GREEN, FIRST)]},
            turn_number=5,
        )
        assert winner(state) == FIRST
        assert state.phase == GamePhase.GAME_OVER

    def test_both_starless_is_a_draw(self):
        state = create_position(homeworld_stars={}, turn_number=5)
        assert is_game_over(state)
        assert winner(state) is None

    def test_shipless_board_after_opening_is_a_draw(self):
        state = create_position(
            homeworld_stars={FIRST: (SMALL_BLUE, LARGE_YELLOW), SECOND: (MEDIUM_BLUE, LARGE_RED)},
            turn_number=4,
        )
        assert is_stalled(state)
        assert is_game_over(state)
        assert state.phase == GamePhase.GAME_OVER
        assert winner(state) is None

    def test_shipless_opening_is_not_stalled(self, fresh_state):
        assert not is_stalled(fresh_state)
        assert not is_game_over(fresh_state)
