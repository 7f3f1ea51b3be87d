"""
Qwixx - Game Orchestrator

Owns the players, the current roll and the per-turn bookkeeping, and
drives each turn through the phase table in turn_phases. Marking and
scoring are delegated to each player's ScoreSheet.

Turn Flow:
    1. The active player rolls all six dice
    2. Every connected player may mark the white sum on any row, or pass
    3. Once everyone has decided, the active player may mark one
       white + colored sum on that color's row, or pass
    4. Ending the turn penalises an active player who marked nothing

Every action returns True on success and False when it is not legal right
now. A rejected action changes nothing. Only the roster passed to
create_game is validated by raising ValueError.
"""

import functools
import logging
import random
import threading
from datetime import datetime, timezone
from typing import Callable, ClassVar, Mapping, Sequence, TypeVar
from uuid import uuid4

from qwixx.config.settings import get_settings
from qwixx.engine.base import (
    ALL_ROWS,
    WHITE_DICE,
    DiceColor,
    DiceCombination,
    GameLifecycle,
    RowColor,
    TurnState,
)
from qwixx.engine.dice import DiceRoller
from qwixx.engine.player import Player
from qwixx.engine.scoresheet import ScoreSheet
from qwixx.engine.turn_phases import MoveSource, PhasePolicy, policy_for
from qwixx.engine.validators import MAX_PLAYERS, validate_player_roster

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def _serialized(method: Callable[..., _T]) -> Callable[..., _T]:
    """Run a game method under the game's lock."""
    @functools.wraps(method)
    def wrapper(self: "QwixxGame", *args, **kwargs) -> _T:
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class QwixxGame:
    """
    Mutable game state driven by the turn phase table.

    Attributes:
        id: Game identifier
        players: Seats in turn order
        current_player_index: Index of the active player
        lifecycle: Waiting, in progress or finished
        dice_values: Current roll, present only mid-turn
        locked_rows: Rows nobody may mark any more
        players_who_moved: Players who marked something this turn
        players_who_passed: Players who passed on the white dice this turn
        white_dice_phase_completed: Whether the white dice phase is closed
        created_at: Creation time (UTC)
        finished_at: Time the game finished (UTC)
    """

    MAX_PLAYERS: ClassVar[int] = MAX_PLAYERS
    MIN_PLAYERS_TO_START: ClassVar[int] = 2

    def __init__(self, game_id: str | None = None, rng: random.Random | None = None) -> None:
        self.id = game_id or str(uuid4())
        self.players: list[Player] = []
        self.current_player_index = 0
        self.lifecycle = GameLifecycle.WAITING_FOR_PLAYERS
        self.dice_values: dict[DiceColor, int] | None = None
        self.locked_rows: set[RowColor] = set()
        self.players_who_moved: set[str] = set()
        self.players_who_passed: set[str] = set()
        self.white_dice_phase_completed = False
        self.created_at = datetime.now(timezone.utc)
        self.finished_at: datetime | None = None

        self._turn_state = TurnState.WAITING_FOR_DICE_ROLL
        self._rng = rng if rng is not None else random.Random(get_settings().dice_seed)
        self._lock = threading.RLock()

    @classmethod
    def create_game(
        cls,
        player_names: Sequence[str],
        ai_count: int = 0,
        *,
        rng: random.Random | None = None,
    ) -> "QwixxGame":
        """
        Create a game from an ordered roster.

        Humans get ids ``player_0``, ``player_1``... (``player_0`` hosts);
        AI seats follow as ``ai_1``, ``ai_2``...

        Args:
            player_names: Human player names in seat order
            ai_count: Number of AI seats appended after the humans
            rng: Random source for dice (seeded from settings when omitted)

        Returns:
            A new game, in progress once it has at least two seats

        Raises:
            ValueError: If the roster is empty or has more than 5 seats
        """
        names = validate_player_roster(player_names, ai_count)

        game = cls(rng=rng)
        for index, name in enumerate(names):
            game.players.append(Player(id=f"player_{index}", name=name, is_host=index == 0))
        for ai_index in range(1, ai_count + 1):
            game.players.append(Player(id=f"ai_{ai_index}", name=f"AI Player {ai_index}", is_ai=True))

        game._start_if_ready()
        logger.info(
            "Created game %s with %d players (%d AI)", game.id, len(game.players), ai_count
        )
        return game

    @property
    def _policy(self) -> PhasePolicy:
        return policy_for(self._turn_state)

    # -- Lobby ------------------------------------------------------------

    @_serialized
    def add_player(self, player_name: str) -> bool:
        """Add a human player while the game is still waiting for players."""
        if self.lifecycle != GameLifecycle.WAITING_FOR_PLAYERS:
            return self._reject("add_player", "game already started")
        if len(self.players) >= self.MAX_PLAYERS:
            return self._reject("add_player", "table is full")
        if not player_name or not player_name.strip():
            return self._reject("add_player", "blank name")

        human_count = sum(1 for player in self.players if not player.is_ai)
        self.players.append(Player(id=f"player_{human_count}", name=player_name))
        logger.info("Player %s joined game %s", player_name, self.id)

        self._start_if_ready()
        return True

    @_serialized
    def update_player_connection(self, player_id: str, connected: bool) -> bool:
        """Mark a player as connected or disconnected."""
        if self.lifecycle == GameLifecycle.FINISHED:
            return self._reject("update_player_connection", "game finished")
        index = self._player_index(player_id)
        if index is None:
            return self._reject("update_player_connection", f"unknown player {player_id}")

        self.players[index] = self.players[index].with_connection(connected)
        logger.info(
            "Player %s %s game %s", player_id, "rejoined" if connected else "left", self.id
        )

        # A departing player may be the last one the white dice phase waits on
        if self._turn_state == TurnState.WHITE_DICE_PHASE:
            self._check_white_dice_phase_complete()
        return True

    # -- Turn actions -----------------------------------------------------

    @_serialized
    def roll_dice(self, roll: Mapping[DiceColor, int] | None = None) -> bool:
        """
        Roll all six dice and open the white dice phase.

        Args:
            roll: Optional pre-determined roll (for replay and testing)

        Returns:
            True if the dice were rolled
        """
        if not self._is_playable():
            return self._reject("roll_dice", "game not in progress")
        if not self._policy.can_roll:
            return self._reject("roll_dice", f"not allowed in {self._turn_state.name}")
        if roll is not None and not DiceRoller.validate(roll):
            return self._reject("roll_dice", "malformed roll")

        values = dict(roll) if roll is not None else DiceRoller.roll_all(self._rng)
        self.dice_values = {color: values[color] for color in DiceColor}
        self.players_who_moved.clear()
        self.players_who_passed.clear()
        self.white_dice_phase_completed = False

        self._turn_state = self._policy.on_roll
        logger.info(
            "Game %s: %s rolled %s",
            self.id, self.get_current_player().id, DiceRoller.format_roll(self.dice_values),
        )
        return True

    @_serialized
    def make_shared_dice_move(self, player_id: str, row_color: RowColor) -> bool:
        """
        Mark the white dice sum on one of a player's rows.

        Any connected player may do this once per turn during the white
        dice phase. The phase closes by itself once every connected player
        has moved or passed.
        """
        if not self._is_playable():
            return self._reject("make_shared_dice_move", "game not in progress")
        if self.white_dice_phase_completed:
            return self._reject("make_shared_dice_move", "white dice phase closed")
        player = self.get_player(player_id)
        if player is None:
            return self._reject("make_shared_dice_move", f"unknown player {player_id}")
        if not self._policy.can_make_shared_dice_move(player.is_connected):
            return self._reject("make_shared_dice_move", f"not allowed for {player_id}")
        if self._has_decided(player_id):
            return self._reject("make_shared_dice_move", f"{player_id} already decided")
        if row_color in self.locked_rows:
            return self._reject("make_shared_dice_move", f"{row_color.name} row is locked")
        if self.dice_values is None:
            return self._reject("make_shared_dice_move", "no roll")

        value = DiceRoller.white_sum(self.dice_values)
        new_sheet = player.score_sheet.mark_number(row_color, value)
        if new_sheet is None:
            return self._reject("make_shared_dice_move", f"cannot mark {value} on {row_color.name}")

        self._apply_mark(player_id, row_color, value, new_sheet)
        self._turn_state = self._policy.on_shared_move
        self._check_white_dice_phase_complete()
        return True

    @_serialized
    def pass_shared_dice_move(self, player_id: str) -> bool:
        """Decline the white dice this turn."""
        if not self._is_playable():
            return self._reject("pass_shared_dice_move", "game not in progress")
        if self.white_dice_phase_completed:
            return self._reject("pass_shared_dice_move", "white dice phase closed")
        player = self.get_player(player_id)
        if player is None:
            return self._reject("pass_shared_dice_move", f"unknown player {player_id}")
        if not self._policy.can_make_shared_dice_move(player.is_connected):
            return self._reject("pass_shared_dice_move", f"not allowed for {player_id}")
        if self._has_decided(player_id):
            return self._reject("pass_shared_dice_move", f"{player_id} already decided")

        self.players_who_passed.add(player_id)
        logger.debug("Game %s: %s passed on the white dice", self.id, player_id)
        self._check_white_dice_phase_complete()
        return True

    @_serialized
    def make_active_player_move(
        self,
        player_id: str,
        row_color: RowColor,
        white_die: DiceColor | None = None,
        value: int | None = None,
    ) -> bool:
        """
        Mark a combination as the active player.

        Candidates are the legal active-player combinations for the row.
        Naming a white die keeps only that die paired with the row's
        colored die. Naming a value keeps only combinations with that sum.
        The first remaining candidate in enumeration order is marked.

        Args:
            player_id: Must be the active player
            row_color: Row to mark
            white_die: WHITE_1 or WHITE_2, or None for any combination
            value: Optional sum to mark

        Returns:
            True if a number was marked and the turn moved to TURN_ENDED
        """
        if not self._is_playable():
            return self._reject("make_active_player_move", "game not in progress")
        if not self._policy.can_make_active_player_move(player_id, self.get_current_player().id):
            return self._reject("make_active_player_move", f"not allowed for {player_id}")
        if row_color in self.locked_rows:
            return self._reject("make_active_player_move", f"{row_color.name} row is locked")
        if white_die is not None and white_die not in WHITE_DICE:
            return self._reject("make_active_player_move", f"{white_die.name} is not a white die")

        candidates = [
            combination for combination in self._active_player_valid_moves()
            if row_color in combination.rows
        ]
        if white_die is not None:
            candidates = [
                combination for combination in candidates
                if white_die in combination.dice_used and not combination.uses_both_white_dice
            ]
        if value is not None:
            candidates = [combination for combination in candidates if combination.value == value]
        if not candidates:
            return self._reject("make_active_player_move", f"no combination for {row_color.name}")

        move = candidates[0]
        player = self.get_current_player()
        new_sheet = player.score_sheet.mark_number(row_color, move.value)
        if new_sheet is None:
            return self._reject("make_active_player_move", f"cannot mark {move.value}")

        self._apply_mark(player_id, row_color, move.value, new_sheet)
        self._turn_state = self._policy.on_active_move
        return True

    @_serialized
    def pass_active_player_move(self, player_id: str) -> bool:
        """Decline the colored dice; the turn moves to TURN_ENDED."""
        if not self._is_playable():
            return self._reject("pass_active_player_move", "game not in progress")
        if not self._policy.can_make_active_player_move(player_id, self.get_current_player().id):
            return self._reject("pass_active_player_move", f"not allowed for {player_id}")

        logger.debug("Game %s: %s passed on the colored dice", self.id, player_id)
        self._turn_state = self._policy.on_active_move
        return True

    @_serialized
    def move_to_active_player_phase(self) -> bool:
        """Close the white dice phase for the rest of the turn."""
        if not self._is_playable():
            return self._reject("move_to_active_player_phase", "game not in progress")
        if not self._policy.can_advance_phase:
            return self._reject(
                "move_to_active_player_phase", f"not allowed in {self._turn_state.name}"
            )

        self.white_dice_phase_completed = True
        self._turn_state = self._policy.on_advance_phase
        logger.debug("Game %s: white dice phase closed", self.id)
        return True

    @_serialized
    def end_turn(self) -> bool:
        """
        Finish the turn and hand the dice to the next player.

        An active player who marked nothing this turn takes a penalty.
        """
        if not self._is_playable():
            return self._reject("end_turn", "game not in progress")
        if not self._policy.can_end_turn:
            return self._reject("end_turn", f"not allowed in {self._turn_state.name}")

        active_id = self.get_current_player().id
        if active_id not in self.players_who_moved:
            self._add_penalty(active_id)

        self._move_to_next_player()
        self._turn_state = self._policy.on_end_turn
        return True

    @_serialized
    def make_move(self, player_id: str, move: DiceCombination) -> bool:
        """
        Play a combination, typically one returned by get_valid_moves.

        Passes go to the white dice pass while that phase is open for the
        player, otherwise to the active player pass. The white pair goes to
        the white dice move while that phase is open; anything else is
        treated as an active player move.
        """
        player = self.get_player(player_id)
        if player is None:
            return self._reject("make_move", f"unknown player {player_id}")
        shared_open = (
            not self.white_dice_phase_completed
            and self._policy.can_make_shared_dice_move(player.is_connected)
        )

        if move.is_pass:
            if shared_open:
                return self.pass_shared_dice_move(player_id)
            return self.pass_active_player_move(player_id)

        if not move.rows:
            return self._reject("make_move", "combination has no rows")
        row_color = move.rows[0]

        if move.uses_both_white_dice and shared_open:
            return self.make_shared_dice_move(player_id, row_color)

        white_dice = [die for die in move.dice_used if die.is_white]
        if len(move.dice_used) != 2 or not white_dice:
            return self._reject("make_move", "combination does not use a white die")
        white_die = None if move.uses_both_white_dice else white_dice[0]
        return self.make_active_player_move(player_id, row_color, white_die, value=move.value)

    # -- Queries ----------------------------------------------------------

    @_serialized
    def get_valid_moves(self, player_id: str) -> list[DiceCombination]:
        """
        Moves open to a player right now, always ending with a pass.

        During the white dice phase this is the white sum on every row the
        player can still mark; during the active player phase it is every
        active-player combination, for the active player only.
        """
        moves: list[DiceCombination] = []
        player = self.get_player(player_id)
        source = self._policy.move_source

        if player is not None and self._is_playable():
            if source == MoveSource.SHARED_DICE:
                moves = self._white_dice_valid_moves(player)
            elif source == MoveSource.ACTIVE_PLAYER and self.is_current_player(player_id):
                moves = self._active_player_valid_moves()

        return moves + [DiceCombination.pass_move()]

    def get_current_turn_state(self) -> TurnState:
        return self._turn_state

    def get_current_player(self) -> Player:
        return self.players[self.current_player_index]

    def is_current_player(self, player_id: str) -> bool:
        return self.get_current_player().id == player_id

    def get_player(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_roll(self) -> dict[DiceColor, int] | None:
        """Copy of the current roll, or None between turns."""
        return dict(self.dice_values) if self.dice_values is not None else None

    def is_game_over(self) -> bool:
        return self.lifecycle == GameLifecycle.FINISHED

    @_serialized
    def get_winner(self) -> Player | None:
        """Highest total wins; ties go to the earlier seat. None until finished."""
        if not self.is_game_over():
            return None
        return max(self.players, key=lambda player: player.score_sheet.calculate_score())

    # -- Internals --------------------------------------------------------

    def _reject(self, action: str, reason: str) -> bool:
        logger.debug("Game %s rejected %s: %s", self.id, action, reason)
        return False

    def _is_playable(self) -> bool:
        return self.lifecycle == GameLifecycle.IN_PROGRESS

    def _start_if_ready(self) -> None:
        if (
            self.lifecycle == GameLifecycle.WAITING_FOR_PLAYERS
            and len(self.players) >= self.MIN_PLAYERS_TO_START
        ):
            self.lifecycle = GameLifecycle.IN_PROGRESS
            logger.info("Game %s started", self.id)

    def _player_index(self, player_id: str) -> int | None:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        return None

    def _has_decided(self, player_id: str) -> bool:
        return player_id in self.players_who_moved or player_id in self.players_who_passed

    def _playable_rows(self, sheet: ScoreSheet, combination: DiceCombination) -> tuple[RowColor, ...]:
        return tuple(
            color for color in combination.rows
            if color not in self.locked_rows and sheet.is_valid_move(color, combination.value)
        )

    def _filter_moves(
        self,
        sheet: ScoreSheet,
        combinations: list[DiceCombination],
    ) -> list[DiceCombination]:
        moves = []
        for combination in combinations:
            rows = self._playable_rows(sheet, combination)
            if rows:
                moves.append(combination.with_rows(rows))
        return moves

    def _white_dice_valid_moves(self, player: Player) -> list[DiceCombination]:
        if self.dice_values is None or self.white_dice_phase_completed:
            return []
        if self._has_decided(player.id) or not player.is_connected:
            return []
        return self._filter_moves(
            player.score_sheet, DiceRoller.non_active_player_combinations(self.dice_values)
        )

    def _active_player_valid_moves(self) -> list[DiceCombination]:
        if self.dice_values is None:
            return []
        return self._filter_moves(
            self.get_current_player().score_sheet,
            DiceRoller.active_player_combinations(self.dice_values),
        )

    def _update_score_sheet(self, player_id: str, score_sheet: ScoreSheet) -> None:
        index = self._player_index(player_id)
        self.players[index] = self.players[index].with_score_sheet(score_sheet)

    def _apply_mark(
        self,
        player_id: str,
        row_color: RowColor,
        value: int,
        score_sheet: ScoreSheet,
    ) -> None:
        if score_sheet.can_lock_row(row_color) and not score_sheet.is_row_locked(row_color):
            score_sheet = score_sheet.lock_row(row_color)

        self._update_score_sheet(player_id, score_sheet)
        self.players_who_moved.add(player_id)
        logger.info("Game %s: %s marked %d on %s", self.id, player_id, value, row_color.name)

        self._refresh_locked_rows()
        self._check_game_end()

    def _refresh_locked_rows(self) -> None:
        for color in ALL_ROWS:
            if color in self.locked_rows:
                continue
            if any(player.score_sheet.can_lock_row(color) for player in self.players):
                self.locked_rows.add(color)
                logger.info("Game %s: %s row locked", self.id, color.name)

    def _add_penalty(self, player_id: str) -> None:
        player = self.get_player(player_id)
        if player is None:
            return
        self._update_score_sheet(player_id, player.score_sheet.add_penalty())
        logger.info(
            "Game %s: penalty for %s (%d total)",
            self.id, player_id, player.score_sheet.penalties + 1,
        )
        self._check_game_end()

    def _check_white_dice_phase_complete(self) -> None:
        if not self._is_playable() or self.white_dice_phase_completed:
            return
        if self._turn_state != TurnState.WHITE_DICE_PHASE:
            return
        deciding = [player for player in self.players if player.is_connected]
        if all(self._has_decided(player.id) for player in deciding):
            self.move_to_active_player_phase()

    def _move_to_next_player(self) -> None:
        self.current_player_index = (self.current_player_index + 1) % len(self.players)
        self.players_who_moved.clear()
        self.players_who_passed.clear()
        self.white_dice_phase_completed = False
        self.dice_values = None

    def _check_game_end(self) -> None:
        if self.lifecycle != GameLifecycle.IN_PROGRESS:
            return
        sheet_ended = any(player.score_sheet.should_end_game() for player in self.players)
        if sheet_ended or len(self.locked_rows) >= 2:
            self.lifecycle = GameLifecycle.FINISHED
            self.finished_at = datetime.now(timezone.utc)
            logger.info("Game %s finished", self.id)
