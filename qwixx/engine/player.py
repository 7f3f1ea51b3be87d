"""
Qwixx - Player

A seat at the table. AI seats are ordinary players whose actions are
submitted by an external driver.
"""

from dataclasses import dataclass, field, replace

from qwixx.engine.scoresheet import ScoreSheet


@dataclass(frozen=True)
class Player:
    """
    Immutable player record.

    Attributes:
        id: Identifier unique within the game (``player_N`` or ``ai_N``)
        name: Display name
        score_sheet: The player's sheet
        is_host: True for the first human seat only
        is_connected: Whether the player currently takes part in decisions
        is_ai: True for AI seats
    """
    id: str
    name: str
    score_sheet: ScoreSheet = field(default_factory=ScoreSheet)
    is_host: bool = False
    is_connected: bool = True
    is_ai: bool = False

    def with_score_sheet(self, score_sheet: ScoreSheet) -> "Player":
        return replace(self, score_sheet=score_sheet)

    def with_connection(self, connected: bool) -> "Player":
        return replace(self, is_connected=connected)
