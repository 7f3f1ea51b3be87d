"""
Qwixx - Read Models

Pydantic models describing a game for whoever sits outside the engine
(transport, storage, UI). They are snapshots; changing them does not
change the game.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class RowView(BaseModel):
    """One row of a scoresheet."""

    color: str
    values: list[int]
    marked: list[int] = Field(default_factory=list)
    locked: bool = False
    score: int = 0

    model_config = {"from_attributes": True}


class ScoreSheetView(BaseModel):
    """A player's sheet with its scores."""

    rows: list[RowView]
    penalties: int = Field(default=0, ge=0)
    penalty_points: int = 0
    total_score: int = 0

    model_config = {"from_attributes": True}


class PlayerView(BaseModel):
    """A seat at the table."""

    id: str
    name: str
    is_host: bool = False
    is_connected: bool = True
    is_ai: bool = False
    score_sheet: ScoreSheetView

    model_config = {"from_attributes": True}


class GameSnapshot(BaseModel):
    """Full state of a game at one moment."""

    id: str
    lifecycle: str
    turn_state: str
    current_player_id: str | None = None
    players: list[PlayerView] = Field(default_factory=list)
    dice_values: dict[str, int] | None = None
    locked_rows: list[str] = Field(default_factory=list)
    players_who_moved: list[str] = Field(default_factory=list)
    players_who_passed: list[str] = Field(default_factory=list)
    white_dice_phase_completed: bool = False
    created_at: datetime
    finished_at: datetime | None = None

    model_config = {"from_attributes": True}


class PlayerStanding(BaseModel):
    """Final placing of one player."""

    rank: int = Field(ge=1)
    player_id: str
    name: str
    score: int
    row_scores: dict[str, int] = Field(default_factory=dict)
    penalty_points: int = 0


class GameResults(BaseModel):
    """Final standings of a finished game."""

    game_id: str
    winner_id: str
    standings: list[PlayerStanding]
    finished_at: datetime
