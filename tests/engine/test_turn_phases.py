"""
Qwixx - Turn Phase Table Tests
"""

import pytest

from qwixx.engine.base import TurnState
from qwixx.engine.turn_phases import PHASE_POLICIES, MoveSource, policy_for


class TestPhaseTable:
    """Tests for capabilities of each phase."""

    def test_every_state_has_a_policy(self):
        assert set(PHASE_POLICIES) == set(TurnState)
        for state, policy in PHASE_POLICIES.items():
            assert policy.state == state

    def test_waiting_for_roll(self):
        policy = policy_for(TurnState.WAITING_FOR_DICE_ROLL)
        assert policy.can_roll
        assert not policy.can_make_shared_dice_move(True)
        assert not policy.can_make_active_player_move("player_0", "player_0")
        assert not policy.can_advance_phase
        assert not policy.can_end_turn
        assert policy.move_source == MoveSource.NONE

    def test_white_dice_phase_open_to_connected_players(self):
        policy = policy_for(TurnState.WHITE_DICE_PHASE)
        assert not policy.can_roll
        assert policy.can_make_shared_dice_move(True)
        assert not policy.can_make_shared_dice_move(False)
        assert not policy.can_make_active_player_move("player_0", "player_0")
        assert policy.can_advance_phase
        assert not policy.can_end_turn
        assert policy.move_source == MoveSource.SHARED_DICE

    def test_active_phase_only_for_active_player(self):
        policy = policy_for(TurnState.ACTIVE_PLAYER_PHASE)
        assert policy.can_make_active_player_move("player_1", "player_1")
        assert not policy.can_make_active_player_move("player_0", "player_1")
        assert not policy.can_make_shared_dice_move(True)
        assert not policy.can_advance_phase
        assert policy.can_end_turn
        assert policy.move_source == MoveSource.ACTIVE_PLAYER

    def test_turn_ended_only_allows_end_turn(self):
        policy = policy_for(TurnState.TURN_ENDED)
        assert policy.can_end_turn
        assert not policy.can_roll
        assert not policy.can_advance_phase
        assert not policy.can_make_active_player_move("player_0", "player_0")


class TestPhaseTransitions:
    """Tests for the transition targets."""

    def test_full_turn_cycle(self):
        state = TurnState.WAITING_FOR_DICE_ROLL
        state = policy_for(state).on_roll
        assert state == TurnState.WHITE_DICE_PHASE
        state = policy_for(state).on_shared_move
        assert state == TurnState.WHITE_DICE_PHASE
        state = policy_for(state).on_advance_phase
        assert state == TurnState.ACTIVE_PLAYER_PHASE
        state = policy_for(state).on_active_move
        assert state == TurnState.TURN_ENDED
        state = policy_for(state).on_end_turn
        assert state == TurnState.WAITING_FOR_DICE_ROLL

    def test_active_phase_end_turn_fallback(self):
        assert policy_for(TurnState.ACTIVE_PLAYER_PHASE).on_end_turn == TurnState.WAITING_FOR_DICE_ROLL

    @pytest.mark.parametrize("state", list(TurnState))
    def test_disallowed_actions_loop_back(self, state):
        policy = policy_for(state)
        if not policy.can_roll:
            assert policy.on_roll == state
        if not policy.can_advance_phase:
            assert policy.on_advance_phase == state
