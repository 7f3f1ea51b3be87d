"""
Qwixx - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import random

import pytest

from qwixx.config.settings import get_settings
from qwixx.engine.base import DiceColor
from qwixx.engine.game import QwixxGame


def make_roll(w1: int, w2: int, red: int, yellow: int, green: int, blue: int) -> dict[DiceColor, int]:
    """Build a full roll in sheet order."""
    return {
        DiceColor.WHITE_1: w1,
        DiceColor.WHITE_2: w2,
        DiceColor.RED: red,
        DiceColor.YELLOW: yellow,
        DiceColor.GREEN: green,
        DiceColor.BLUE: blue,
    }


# =============================================================================
# DICE FIXTURES
# =============================================================================

@pytest.fixture
def roll_of():
    """Factory building a roll from six values (W1, W2, R, Y, G, B)."""
    return make_roll


@pytest.fixture
def mixed_roll() -> dict[DiceColor, int]:
    """W1=3, W2=4, R=5, Y=2, G=6, B=1 (white sum 7)."""
    return make_roll(3, 4, 5, 2, 6, 1)


@pytest.fixture
def all_ones_roll() -> dict[DiceColor, int]:
    return make_roll(1, 1, 1, 1, 1, 1)


# =============================================================================
# GAME FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached; start and finish every test with a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def two_player_game() -> QwixxGame:
    """Two human players, seeded dice."""
    return QwixxGame.create_game(["Alice", "Bob"], rng=random.Random(1234))


@pytest.fixture
def active_phase_game(two_player_game, mixed_roll) -> QwixxGame:
    """Two players in the active player phase after both passed on the mixed roll."""
    game = two_player_game
    game.roll_dice(mixed_roll)
    game.pass_shared_dice_move("player_0")
    game.pass_shared_dice_move("player_1")
    return game
