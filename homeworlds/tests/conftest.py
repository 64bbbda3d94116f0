"""
Pytest fixtures for Homeworlds tests.
"""

import pytest

from ..engine_core.action import Action
from ..engine_core.pieces import (
    LARGE_BLUE,
    LARGE_GREEN,
    LARGE_RED,
    LARGE_YELLOW,
    MEDIUM_BLUE,
    MEDIUM_GREEN,
    MEDIUM_RED,
    SMALL_BLUE,
    SMALL_GREEN,
    SMALL_RED,
    SMALL_YELLOW,
)
from ..engine_core.reducer import apply
from ..engine_core.state import GameState
from ..engine_core.systems import HomeworldId, Player
from ..game.setup import create_position, initial_state


FIRST = Player.FIRST
SECOND = Player.SECOND
HOME_1 = HomeworldId(FIRST)
HOME_2 = HomeworldId(SECOND)


@pytest.fixture
def fresh_state() -> GameState:
    """Starting position: default stars, no ships, first player to move."""
    return initial_state()


@pytest.fixture
def opened_state(fresh_state: GameState) -> GameState:
    """Both players have placed a large green ship at home."""
    state = apply(fresh_state, Action.build(FIRST, HOME_1, LARGE_GREEN))
    return apply(state, Action.build(SECOND, HOME_2, LARGE_GREEN))


@pytest.fixture
def move_scenario() -> GameState:
    """
    First homeworld {small red, small yellow} with a large green ship;
    second homeworld {medium blue, large red} with a large green ship.
    """
    return create_position(
        homeworld_stars={FIRST: (SMALL_RED, SMALL_YELLOW), SECOND: (MEDIUM_BLUE, LARGE_RED)},
        homeworld_ships={FIRST: [(LARGE_GREEN, FIRST)], SECOND: [(LARGE_GREEN, SECOND)]},
        turn_number=2,
    )


@pytest.fixture
def small_builder() -> GameState:
    """
    First player owns only a small green ship at a home of {medium red, large blue}.
    Green comes from the ship, blue and red from the stars, no yellow anywhere.
    """
    return create_position(
        homeworld_stars={FIRST: (MEDIUM_RED, LARGE_BLUE), SECOND: (SMALL_YELLOW, MEDIUM_GREEN)},
        homeworld_ships={FIRST: [(SMALL_GREEN, FIRST)], SECOND: [(LARGE_GREEN, SECOND)]},
        turn_number=2,
    )


@pytest.fixture
def capture_scenario() -> GameState:
    """Two enemy ships (small and large yellow) sit at the first homeworld."""
    return create_position(
        homeworld_stars={FIRST: (MEDIUM_RED, LARGE_BLUE), SECOND: (SMALL_BLUE, LARGE_GREEN)},
        homeworld_ships={
            FIRST: [(MEDIUM_GREEN, FIRST), (SMALL_YELLOW, SECOND), (LARGE_YELLOW, SECOND)],
            SECOND: [(MEDIUM_BLUE, SECOND)],
        },
        turn_number=2,
    )


@pytest.fixture
def sacrifice_scenario() -> GameState:
    """First player has a large yellow to sacrifice and a small red to move."""
    return create_position(
        homeworld_stars={FIRST: (SMALL_GREEN, MEDIUM_BLUE), SECOND: (LARGE_RED, LARGE_GREEN)},
        homeworld_ships={
            FIRST: [(LARGE_YELLOW, FIRST), (SMALL_RED, FIRST)],
            SECOND: [(MEDIUM_GREEN, SECOND)],
        },
        turn_number=2,
    )


@pytest.fixture
def green_colony() -> GameState:
    """Colony 0 around a medium green star holds three green pieces in total."""
    return create_position(
        homeworld_stars={FIRST: (SMALL_YELLOW, LARGE_BLUE), SECOND: (SMALL_BLUE, LARGE_RED)},
        homeworld_ships={FIRST: [(MEDIUM_BLUE, FIRST)], SECOND: [(MEDIUM_RED, SECOND)]},
        colonies=[(MEDIUM_GREEN, [(SMALL_GREEN, FIRST), (LARGE_GREEN, SECOND)])],
        turn_number=2,
    )
