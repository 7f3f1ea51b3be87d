"""
Qwixx - Turn Phase State Machine

Each turn runs through four phases:

    WAITING_FOR_DICE_ROLL -> WHITE_DICE_PHASE -> ACTIVE_PLAYER_PHASE
        -> TURN_ENDED -> WAITING_FOR_DICE_ROLL (next player)

Every phase maps to a fixed PhasePolicy describing which actions are
allowed and which phase each action leads to. The game asks the policy of
its current phase before doing anything.
"""

from dataclasses import dataclass
from enum import Enum, auto

from qwixx.engine.base import TurnState


class MoveSource(Enum):
    """Which combinations a phase offers as moves."""
    NONE = auto()
    SHARED_DICE = auto()     # White pair, any connected player
    ACTIVE_PLAYER = auto()   # White + colored, active player only


@dataclass(frozen=True)
class PhasePolicy:
    """
    Capabilities and transitions of one phase.

    Attributes:
        state: The phase this policy describes
        can_roll: Rolling the dice is allowed
        shared_dice_open: Any connected player may move or pass on the white pair
        active_move_open: The active player may move or pass with white + colored
        can_advance_phase: The shared-dice phase may be closed
        can_end_turn: The turn may be ended
        on_roll: Phase after a roll
        on_shared_move: Phase after a shared-dice move
        on_active_move: Phase after an active-player move or pass
        on_advance_phase: Phase after closing the shared-dice phase
        on_end_turn: Phase after ending the turn
        move_source: Combinations offered by get_valid_moves
    """
    state: TurnState
    can_roll: bool
    shared_dice_open: bool
    active_move_open: bool
    can_advance_phase: bool
    can_end_turn: bool
    on_roll: TurnState
    on_shared_move: TurnState
    on_active_move: TurnState
    on_advance_phase: TurnState
    on_end_turn: TurnState
    move_source: MoveSource = MoveSource.NONE

    def can_make_shared_dice_move(self, is_connected: bool) -> bool:
        return self.shared_dice_open and is_connected

    def can_make_active_player_move(self, actor_id: str, active_player_id: str) -> bool:
        return self.active_move_open and actor_id == active_player_id


_WAITING = TurnState.WAITING_FOR_DICE_ROLL
_WHITE = TurnState.WHITE_DICE_PHASE
_ACTIVE = TurnState.ACTIVE_PLAYER_PHASE
_ENDED = TurnState.TURN_ENDED


PHASE_POLICIES: dict[TurnState, PhasePolicy] = {
    _WAITING: PhasePolicy(
        state=_WAITING,
        can_roll=True,
        shared_dice_open=False,
        active_move_open=False,
        can_advance_phase=False,
        can_end_turn=False,
        on_roll=_WHITE,
        on_shared_move=_WAITING,
        on_active_move=_WAITING,
        on_advance_phase=_WAITING,
        on_end_turn=_WAITING,
    ),
    _WHITE: PhasePolicy(
        state=_WHITE,
        can_roll=False,
        shared_dice_open=True,
        active_move_open=False,
        can_advance_phase=True,
        can_end_turn=False,
        on_roll=_WHITE,
        on_shared_move=_WHITE,
        on_active_move=_WHITE,
        on_advance_phase=_ACTIVE,
        on_end_turn=_WHITE,
        move_source=MoveSource.SHARED_DICE,
    ),
    _ACTIVE: PhasePolicy(
        state=_ACTIVE,
        can_roll=False,
        shared_dice_open=False,
        active_move_open=True,
        can_advance_phase=False,
        # Fallback for a driver that skips the active player's decision
        can_end_turn=True,
        on_roll=_ACTIVE,
        on_shared_move=_ACTIVE,
        on_active_move=_ENDED,
        on_advance_phase=_ACTIVE,
        on_end_turn=_WAITING,
        move_source=MoveSource.ACTIVE_PLAYER,
    ),
    _ENDED: PhasePolicy(
        state=_ENDED,
        can_roll=False,
        shared_dice_open=False,
        active_move_open=False,
        can_advance_phase=False,
        can_end_turn=True,
        on_roll=_ENDED,
        on_shared_move=_ENDED,
        on_active_move=_ENDED,
        on_advance_phase=_ENDED,
        on_end_turn=_WAITING,
    ),
}


def policy_for(state: TurnState) -> PhasePolicy:
    """Look up the policy of a phase."""
    return PHASE_POLICIES[state]
