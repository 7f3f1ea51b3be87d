"""
Qwixx - Dice Roller and Combination Generator

Rolls the six dice and lists the (sum, dice, rows) combinations a roll
offers. Everything except rolling is a pure function of the dice values.

Combination Rules:
    - Any player: white 1 + white 2, markable on every row
    - Active player only: either white die + a colored die, markable on
      the row of that color
"""

import random
from typing import Mapping

from qwixx.engine.base import ALL_ROWS, WHITE_DICE, DiceColor, DiceCombination
from qwixx.engine.validators import validate_dice_roll


class DiceRoller:
    """
    Stateless dice roller and combination generator.

    All methods are class methods; the random source is passed in so a
    game can replay a seeded sequence of rolls.
    """

    DIE_FACES = 6

    @classmethod
    def roll_all(cls, rng: random.Random | None = None) -> dict[DiceColor, int]:
        """
        Roll all six dice.

        Args:
            rng: Random source (module-level random when omitted)

        Returns:
            Mapping of every die color to a value in 1-6
        """
        source = rng if rng is not None else random
        return {color: source.randint(1, cls.DIE_FACES) for color in DiceColor}

    @classmethod
    def active_player_combinations(
        cls,
        roll: Mapping[DiceColor, int]
    ) -> list[DiceCombination]:
        """
        List every combination open to the active player.

        The white pair comes first, then white 1 with each colored die,
        then white 2 with each colored die. Entries with the same value and
        row set are collapsed into the first one.

        Args:
            roll: A complete six-dice roll

        Returns:
            Unique combinations in enumeration order
        """
        candidates = cls.non_active_player_combinations(roll)
        for white in WHITE_DICE:
            for row in ALL_ROWS:
                candidates.append(
                    DiceCombination(
                        value=roll[white] + roll[row.die],
                        dice_used=(white, row.die),
                        rows=(row,),
                    )
                )

        unique: list[DiceCombination] = []
        seen: set[tuple[int, tuple[str, ...]]] = set()
        for combination in candidates:
            if combination.key in seen:
                continue
            seen.add(combination.key)
            unique.append(combination)
        return unique

    @classmethod
    def non_active_player_combinations(
        cls,
        roll: Mapping[DiceColor, int]
    ) -> list[DiceCombination]:
        """Single combination: both white dice, every row."""
        return [
            DiceCombination(
                value=roll[DiceColor.WHITE_1] + roll[DiceColor.WHITE_2],
                dice_used=WHITE_DICE,
                rows=ALL_ROWS,
            )
        ]

    @classmethod
    def white_sum(cls, roll: Mapping[DiceColor, int]) -> int:
        return roll[DiceColor.WHITE_1] + roll[DiceColor.WHITE_2]

    @classmethod
    def validate(cls, roll: Mapping[DiceColor, int]) -> bool:
        """True when all six dice are present with values in 1-6."""
        try:
            validate_dice_roll(roll)
        except ValueError:
            return False
        return True

    @classmethod
    def format_roll(cls, roll: Mapping[DiceColor, int]) -> str:
        """Compact one-line form, e.g. ``W1:3 W2:4 R:5 Y:2 G:6 B:1``."""
        labels = {
            DiceColor.WHITE_1: "W1",
            DiceColor.WHITE_2: "W2",
            DiceColor.RED: "R",
            DiceColor.YELLOW: "Y",
            DiceColor.GREEN: "G",
            DiceColor.BLUE: "B",
        }
        return " ".join(f"{labels[color]}:{roll.get(color)}" for color in DiceColor)
