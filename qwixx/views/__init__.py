"""
Qwixx Read Models.

Pydantic snapshots of game state and final results.
"""

from qwixx.views.builders import build_results, build_score_sheet_view, build_snapshot
from qwixx.views.models import (
    GameResults,
    GameSnapshot,
    PlayerStanding,
    PlayerView,
    RowView,
    ScoreSheetView,
)

__all__ = [
    "build_results",
    "build_score_sheet_view",
    "build_snapshot",
    "GameResults",
    "GameSnapshot",
    "PlayerStanding",
    "PlayerView",
    "RowView",
    "ScoreSheetView",
]
