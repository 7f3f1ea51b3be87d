"""
Qwixx Game Engine.

Pure Python rules engine with no transport or storage dependencies.
Handles dice combinations, row marking and locking, scoring, and the
turn phase state machine.
"""

from qwixx.engine.base import (
    DiceColor,
    DiceCombination,
    GameLifecycle,
    RowColor,
    ScoreBreakdown,
    TurnState,
)
from qwixx.engine.dice import DiceRoller
from qwixx.engine.game import QwixxGame
from qwixx.engine.player import Player
from qwixx.engine.row import QwixxRow
from qwixx.engine.scoresheet import ScoreSheet

__all__ = [
    # Data Classes
    "DiceCombination",
    "Player",
    "QwixxRow",
    "ScoreBreakdown",
    "ScoreSheet",
    # Enums
    "DiceColor",
    "GameLifecycle",
    "RowColor",
    "TurnState",
    # Engines
    "DiceRoller",
    "QwixxGame",
]
