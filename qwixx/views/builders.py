"""
Qwixx - Read Model Builders

Turns a live QwixxGame into the pydantic read models.
"""

from qwixx.engine.base import ALL_ROWS, GameLifecycle
from qwixx.engine.game import QwixxGame
from qwixx.engine.scoresheet import ScoreSheet
from qwixx.views.models import GameResults, GameSnapshot, ScoreSheetView


def _score_sheet_data(sheet: ScoreSheet) -> dict:
    breakdown = sheet.score_breakdown()
    rows = []
    for color in ALL_ROWS:
        row = sheet.row(color)
        rows.append({
            "color": color.value,
            "values": list(row.values),
            "marked": [value for value in row.values if value in row.marked],
            "locked": row.locked,
            "score": breakdown.row_scores[color],
        })
    return {
        "rows": rows,
        "penalties": sheet.penalties,
        "penalty_points": breakdown.penalty_points,
        "total_score": breakdown.total,
    }


def build_score_sheet_view(sheet: ScoreSheet) -> ScoreSheetView:
    return ScoreSheetView.model_validate(_score_sheet_data(sheet))


def build_snapshot(game: QwixxGame) -> GameSnapshot:
    """Capture the current state of a game."""
    roll = game.get_roll()
    data = {
        "id": game.id,
        "lifecycle": game.lifecycle.value,
        "turn_state": game.get_current_turn_state().value,
        "current_player_id": game.get_current_player().id if game.players else None,
        "players": [
            {
                "id": player.id,
                "name": player.name,
                "is_host": player.is_host,
                "is_connected": player.is_connected,
                "is_ai": player.is_ai,
                "score_sheet": _score_sheet_data(player.score_sheet),
            }
            for player in game.players
        ],
        "dice_values": {color.value: value for color, value in roll.items()} if roll else None,
        "locked_rows": [color.value for color in ALL_ROWS if color in game.locked_rows],
        "players_who_moved": sorted(game.players_who_moved),
        "players_who_passed": sorted(game.players_who_passed),
        "white_dice_phase_completed": game.white_dice_phase_completed,
        "created_at": game.created_at,
        "finished_at": game.finished_at,
    }
    return GameSnapshot.model_validate(data)


def build_results(game: QwixxGame) -> GameResults | None:
    """
    Final standings, best score first.

    Ties keep seat order and share a rank.

    Returns:
        GameResults, or None unless the game is finished
    """
    if game.lifecycle != GameLifecycle.FINISHED:
        return None

    winner = game.get_winner()
    ranked = sorted(
        enumerate(game.players),
        key=lambda item: (-item[1].score_sheet.calculate_score(), item[0]),
    )

    standings = []
    previous_score = None
    rank = 0
    for position, (_, player) in enumerate(ranked, start=1):
        breakdown = player.score_sheet.score_breakdown()
        if breakdown.total != previous_score:
            rank = position
            previous_score = breakdown.total
        standings.append({
            "rank": rank,
            "player_id": player.id,
            "name": player.name,
            "score": breakdown.total,
            "row_scores": {color.value: score for color, score in breakdown.row_scores.items()},
            "penalty_points": breakdown.penalty_points,
        })

    return GameResults.model_validate({
        "game_id": game.id,
        "winner_id": winner.id,
        "standings": standings,
        "finished_at": game.finished_at,
    })
