"""
Qwixx - Game Engine Base Classes

This module defines the enums and value types shared by the engine.
Value types are frozen dataclasses; a new value is built for every change.
"""

from dataclasses import dataclass, field
from enum import Enum


class DiceColor(Enum):
    """The six dice rolled each turn."""
    WHITE_1 = "white_1"
    WHITE_2 = "white_2"
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"

    @property
    def is_white(self) -> bool:
        return self in (DiceColor.WHITE_1, DiceColor.WHITE_2)


class RowColor(Enum):
    """Rows on a scoresheet, in sheet order."""
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"

    @property
    def die(self) -> DiceColor:
        """The colored die matching this row."""
        return DiceColor[self.name]


class GameLifecycle(Enum):
    """Lifecycle of a game. Transitions only move forward."""
    WAITING_FOR_PLAYERS = "waiting_for_players"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class TurnState(Enum):
    """Phases of a single turn."""
    WAITING_FOR_DICE_ROLL = "waiting_for_dice_roll"
    WHITE_DICE_PHASE = "white_dice_phase"
    ACTIVE_PLAYER_PHASE = "active_player_phase"
    TURN_ENDED = "turn_ended"


WHITE_DICE: tuple[DiceColor, DiceColor] = (DiceColor.WHITE_1, DiceColor.WHITE_2)
ALL_ROWS: tuple[RowColor, ...] = tuple(RowColor)


@dataclass(frozen=True)
class DiceCombination:
    """
    A candidate move derived from a roll.

    Attributes:
        value: Sum of the two dice
        dice_used: The dice that produced the sum
        rows: Rows the sum may be marked on
        is_pass: True for the explicit "pass" pseudo-move
    """
    value: int
    dice_used: tuple[DiceColor, ...]
    rows: tuple[RowColor, ...]
    is_pass: bool = False

    @property
    def key(self) -> tuple[int, tuple[str, ...]]:
        """Identity used for duplicate suppression: value plus sorted rows."""
        return (self.value, tuple(sorted(row.value for row in self.rows)))

    @property
    def uses_both_white_dice(self) -> bool:
        return all(die in self.dice_used for die in WHITE_DICE)

    def with_rows(self, rows: tuple[RowColor, ...]) -> "DiceCombination":
        """Copy of this combination restricted to the given rows."""
        return DiceCombination(
            value=self.value,
            dice_used=self.dice_used,
            rows=rows,
            is_pass=self.is_pass,
        )

    @classmethod
    def pass_move(cls) -> "DiceCombination":
        """The pseudo-move offered alongside every move listing."""
        return cls(value=0, dice_used=(), rows=(), is_pass=True)


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Per-row detail of a scoresheet's total.

    Attributes:
        row_scores: Score of each row keyed by color
        penalty_points: Points deducted for penalties (positive number)
        total: Row scores minus penalty points
    """
    row_scores: dict[RowColor, int] = field(default_factory=dict)
    penalty_points: int = 0
    total: int = 0
