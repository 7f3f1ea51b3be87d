"""
Qwixx - Scoresheet

One player's four rows plus penalty count. Every operation returns a new
sheet; invalid moves return None so the caller can reject the action
without touching any state.

Scoring Rules:
    - Each row scores n * (n + 1) / 2 for n marks
    - Each penalty costs 5 points
    - A sheet ends the game at 4 penalties or 2 locked rows
"""

from dataclasses import dataclass, field, replace
from typing import ClassVar, Mapping

from qwixx.engine.base import ALL_ROWS, DiceColor, DiceCombination, RowColor, ScoreBreakdown
from qwixx.engine.dice import DiceRoller
from qwixx.engine.row import QwixxRow

_ROW_FIELDS: dict[RowColor, str] = {
    RowColor.RED: "red_row",
    RowColor.YELLOW: "yellow_row",
    RowColor.GREEN: "green_row",
    RowColor.BLUE: "blue_row",
}


@dataclass(frozen=True)
class ScoreSheet:
    """
    Immutable scoresheet.

    Attributes:
        red_row: Ascending row
        yellow_row: Ascending row
        green_row: Descending row
        blue_row: Descending row
        penalties: Number of penalties taken
    """
    red_row: QwixxRow = field(default_factory=QwixxRow.ascending)
    yellow_row: QwixxRow = field(default_factory=QwixxRow.ascending)
    green_row: QwixxRow = field(default_factory=QwixxRow.descending)
    blue_row: QwixxRow = field(default_factory=QwixxRow.descending)
    penalties: int = 0

    PENALTY_POINTS: ClassVar[int] = 5
    MAX_PENALTIES: ClassVar[int] = 4
    LOCKED_ROWS_TO_END: ClassVar[int] = 2

    def __post_init__(self) -> None:
        if self.penalties < 0:
            raise ValueError(f"Penalties cannot be negative, got {self.penalties}")

    def row(self, color: RowColor) -> QwixxRow:
        return getattr(self, _ROW_FIELDS[color])

    def _with_row(self, color: RowColor, row: QwixxRow) -> "ScoreSheet":
        return replace(self, **{_ROW_FIELDS[color]: row})

    def is_valid_move(self, color: RowColor, number: int) -> bool:
        """True if the number can be marked on the row right now."""
        row = self.row(color)
        return row.can_mark(number) and not row.locked

    def mark_number(self, color: RowColor, number: int) -> "ScoreSheet | None":
        """
        Mark a number on a row.

        Args:
            color: Row to mark
            number: Number to mark

        Returns:
            New ScoreSheet with the mark, or None if the move is invalid
        """
        if not self.is_valid_move(color, number):
            return None
        return self._with_row(color, self.row(color).mark(number))

    def valid_moves(
        self,
        roll: Mapping[DiceColor, int],
        is_active_player: bool = True
    ) -> list[DiceCombination]:
        """
        Combinations from a roll that this sheet can legally mark.

        Args:
            roll: Current dice values
            is_active_player: Whether colored dice may be used

        Returns:
            Combinations restricted to markable rows; empty ones dropped
        """
        if is_active_player:
            combinations = DiceRoller.active_player_combinations(roll)
        else:
            combinations = DiceRoller.non_active_player_combinations(roll)

        moves = []
        for combination in combinations:
            rows = tuple(
                color for color in combination.rows
                if self.is_valid_move(color, combination.value)
            )
            if rows:
                moves.append(combination.with_rows(rows))
        return moves

    def add_penalty(self) -> "ScoreSheet":
        return replace(self, penalties=self.penalties + 1)

    def can_lock_row(self, color: RowColor) -> bool:
        return self.row(color).can_be_locked()

    def lock_row(self, color: RowColor) -> "ScoreSheet | None":
        """
        Lock a row that has met the lock condition.

        Returns:
            New ScoreSheet with the row locked, or None if the row has
            fewer than 5 marks or its terminal value is unmarked
        """
        if not self.can_lock_row(color):
            return None
        return self._with_row(color, self.row(color).lock())

    def marked_count(self, color: RowColor) -> int:
        return self.row(color).marked_count

    def is_row_locked(self, color: RowColor) -> bool:
        return self.row(color).locked

    @property
    def locked_rows(self) -> frozenset[RowColor]:
        return frozenset(color for color in ALL_ROWS if self.row(color).locked)

    def calculate_score(self) -> int:
        """Sum of row scores minus penalty points. May be negative."""
        rows_total = sum(self.row(color).score() for color in ALL_ROWS)
        return rows_total - self.penalties * self.PENALTY_POINTS

    def score_breakdown(self) -> ScoreBreakdown:
        return ScoreBreakdown(
            row_scores={color: self.row(color).score() for color in ALL_ROWS},
            penalty_points=self.penalties * self.PENALTY_POINTS,
            total=self.calculate_score(),
        )

    def should_end_game(self) -> bool:
        return (
            self.penalties >= self.MAX_PENALTIES
            or len(self.locked_rows) >= self.LOCKED_ROWS_TO_END
        )
