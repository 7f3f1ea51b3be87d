"""
Qwixx - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
These cover caller contract violations; gameplay legality is reported by
the engine as a boolean instead.
"""

from typing import Mapping, Sequence

from qwixx.engine.base import DiceColor

MIN_PLAYERS = 1
MAX_PLAYERS = 5


def validate_player_roster(names: Sequence[str], ai_count: int = 0) -> tuple[str, ...]:
    """
    Validate the roster used to create a game.

    Args:
        names: Ordered human player names (first one hosts)
        ai_count: Number of AI seats appended after the humans

    Returns:
        The names as a tuple

    Raises:
        ValueError: If the roster is empty or exceeds the seat limit
    """
    if not names:
        raise ValueError(f"At least {MIN_PLAYERS} player required.")

    if not isinstance(ai_count, int) or ai_count < 0:
        raise ValueError(f"AI count must be a non-negative integer, got {ai_count!r}.")

    total = len(names) + ai_count
    if total > MAX_PLAYERS:
        raise ValueError(f"Maximum {MAX_PLAYERS} players allowed, got {total}.")

    for i, name in enumerate(names):
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Player name at index {i} must be a non-empty string.")

    return tuple(names)


def validate_dice_roll(roll: Mapping[DiceColor, int]) -> dict[DiceColor, int]:
    """
    Validate a full six-dice roll.

    Args:
        roll: Mapping of every die color to its face value

    Returns:
        The roll as a plain dict

    Raises:
        ValueError: If a die is missing or a value is outside 1-6
    """
    missing = [color.name for color in DiceColor if color not in roll]
    if missing:
        raise ValueError(f"Roll is missing dice: {', '.join(missing)}.")

    for color, value in roll.items():
        if not isinstance(color, DiceColor):
            raise ValueError(f"Unknown die {color!r}.")
        if not isinstance(value, int) or not (1 <= value <= 6):
            raise ValueError(f"Die {color.name} is {value}, must be between 1 and 6.")

    return {color: roll[color] for color in DiceColor}
