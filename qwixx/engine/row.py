"""
Qwixx - Scoresheet Row

One color's track of eleven numbers. Marks must progress left to right
along the row's own sequence, so a descending row (12..2) still only moves
forward through its values.

Row Rules:
    - A value can be marked only if it lies right of every marked value
    - Marking the terminal value with 5+ marks afterwards locks the row
    - A locked row accepts no further marks
    - Score is the triangular number of the marked count
"""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass(frozen=True)
class QwixxRow:
    """
    Immutable state of a single row.

    Attributes:
        values: The row's sequence of numbers, left to right
        marked: Values marked so far
        locked: Whether the row is closed to further marks
    """
    values: tuple[int, ...]
    marked: frozenset[int] = field(default_factory=frozenset)
    locked: bool = False

    LOCK_MIN_MARKS: ClassVar[int] = 5

    def __post_init__(self) -> None:
        """Validate marked values belong to the sequence."""
        if len(set(self.values)) != len(self.values):
            raise ValueError("Row values must be distinct")
        stray = self.marked - set(self.values)
        if stray:
            raise ValueError(f"Marked values {sorted(stray)} are not in the row")

    @classmethod
    def ascending(cls) -> "QwixxRow":
        """Row running 2..12 (red and yellow)."""
        return cls(values=tuple(range(2, 13)))

    @classmethod
    def descending(cls) -> "QwixxRow":
        """Row running 12..2 (green and blue)."""
        return cls(values=tuple(range(12, 1, -1)))

    @property
    def terminal_value(self) -> int:
        return self.values[-1]

    @property
    def marked_count(self) -> int:
        return len(self.marked)

    def rightmost_marked_index(self) -> int:
        """Sequence position of the rightmost mark, or -1 when empty."""
        if not self.marked:
            return -1
        return max(self.values.index(value) for value in self.marked)

    def available_values(self) -> tuple[int, ...]:
        """Values right of the rightmost mark, in row order."""
        if self.locked:
            return ()
        return self.values[self.rightmost_marked_index() + 1:]

    def can_mark(self, value: int) -> bool:
        if self.locked or value not in self.values:
            return False
        return self.values.index(value) > self.rightmost_marked_index()

    def mark(self, value: int) -> "QwixxRow":
        """
        Mark a value.

        Returns the row unchanged when the mark is not allowed; the caller
        decides how to report that.

        Args:
            value: Number to mark

        Returns:
            New row with the value marked, auto-locked when the terminal
            value is marked with enough marks
        """
        if not self.can_mark(value):
            return self

        marked = self.marked | {value}
        auto_lock = value == self.terminal_value and len(marked) >= self.LOCK_MIN_MARKS
        return QwixxRow(values=self.values, marked=marked, locked=auto_lock)

    def lock(self) -> "QwixxRow":
        """Lock the row without checking the lock precondition."""
        return QwixxRow(values=self.values, marked=self.marked, locked=True)

    def can_be_locked(self) -> bool:
        return self.marked_count >= self.LOCK_MIN_MARKS and self.terminal_value in self.marked

    def score(self) -> int:
        n = self.marked_count
        return n * (n + 1) // 2
