"""
Qwixx - Dice Roller Tests

Rolling, combination enumeration and roll validation.
"""

import random

from qwixx.engine.base import DiceColor, DiceCombination, RowColor
from qwixx.engine.dice import DiceRoller


class TestRollAll:
    """Tests for rolling the six dice."""

    def test_roll_has_every_die_in_range(self):
        for _ in range(100):
            roll = DiceRoller.roll_all()
            assert set(roll) == set(DiceColor)
            assert all(1 <= value <= 6 for value in roll.values())

    def test_seeded_rolls_repeat(self):
        first = [DiceRoller.roll_all(random.Random(99)) for _ in range(3)]
        second = [DiceRoller.roll_all(random.Random(99)) for _ in range(3)]
        assert first == second

    def test_every_face_appears(self):
        rng = random.Random(5)
        faces = {DiceRoller.roll_all(rng)[DiceColor.RED] for _ in range(500)}
        assert faces == {1, 2, 3, 4, 5, 6}


class TestActivePlayerCombinations:
    """Tests for the active player's combinations."""

    def test_mixed_roll(self, mixed_roll):
        combinations = DiceRoller.active_player_combinations(mixed_roll)
        assert len(combinations) == 9

        white_pair = combinations[0]
        assert white_pair.value == 7
        assert white_pair.dice_used == (DiceColor.WHITE_1, DiceColor.WHITE_2)
        assert white_pair.rows == tuple(RowColor)

        pairs = {(c.dice_used, c.value, c.rows) for c in combinations[1:]}
        assert ((DiceColor.WHITE_1, DiceColor.RED), 8, (RowColor.RED,)) in pairs
        assert ((DiceColor.WHITE_2, DiceColor.RED), 9, (RowColor.RED,)) in pairs
        assert ((DiceColor.WHITE_1, DiceColor.BLUE), 4, (RowColor.BLUE,)) in pairs
        assert ((DiceColor.WHITE_2, DiceColor.GREEN), 10, (RowColor.GREEN,)) in pairs

    def test_all_ones_collapse_to_five(self, all_ones_roll):
        combinations = DiceRoller.active_player_combinations(all_ones_roll)
        assert len(combinations) == 5
        assert all(c.value == 2 for c in combinations)
        assert len({c.key for c in combinations}) == 5

    def test_duplicates_keep_first_dice_pair(self, roll_of):
        """W1 and W2 both 2 with red 3: only the W1 + red entry survives."""
        combinations = DiceRoller.active_player_combinations(roll_of(2, 2, 3, 1, 1, 1))
        red = [c for c in combinations if c.rows == (RowColor.RED,)]
        assert len(red) == 1
        assert red[0].dice_used == (DiceColor.WHITE_1, DiceColor.RED)

    def test_same_value_on_different_rows_kept(self, roll_of):
        combinations = DiceRoller.active_player_combinations(roll_of(1, 6, 2, 2, 6, 6))
        sevens = [c for c in combinations if c.value == 7]
        assert {c.rows for c in sevens} == {
            tuple(RowColor), (RowColor.GREEN,), (RowColor.BLUE,)
        }


class TestNonActivePlayerCombinations:
    """Tests for the shared white dice combination."""

    def test_single_white_pair(self, mixed_roll):
        combinations = DiceRoller.non_active_player_combinations(mixed_roll)
        assert combinations == [
            DiceCombination(
                value=7,
                dice_used=(DiceColor.WHITE_1, DiceColor.WHITE_2),
                rows=tuple(RowColor),
            )
        ]

    def test_always_one_combination(self):
        rng = random.Random(3)
        for _ in range(50):
            roll = DiceRoller.roll_all(rng)
            combinations = DiceRoller.non_active_player_combinations(roll)
            assert len(combinations) == 1
            assert combinations[0].uses_both_white_dice


class TestValidateAndFormat:
    """Tests for roll validation and formatting."""

    def test_valid_roll(self, mixed_roll):
        assert DiceRoller.validate(mixed_roll)

    def test_missing_die(self, mixed_roll):
        del mixed_roll[DiceColor.BLUE]
        assert not DiceRoller.validate(mixed_roll)

    def test_value_out_of_range(self, roll_of):
        assert not DiceRoller.validate(roll_of(0, 1, 1, 1, 1, 1))
        assert not DiceRoller.validate(roll_of(1, 1, 1, 1, 1, 7))

    def test_format_roll(self, mixed_roll):
        assert DiceRoller.format_roll(mixed_roll) == "W1:3 W2:4 R:5 Y:2 G:6 B:1"


class TestDiceCombination:
    """Tests for the combination value type."""

    def test_pass_move(self):
        move = DiceCombination.pass_move()
        assert move.is_pass
        assert move.rows == ()
        assert move.value == 0

    def test_key_ignores_row_order(self):
        a = DiceCombination(value=5, dice_used=(), rows=(RowColor.RED, RowColor.BLUE))
        b = DiceCombination(value=5, dice_used=(), rows=(RowColor.BLUE, RowColor.RED))
        assert a.key == b.key
