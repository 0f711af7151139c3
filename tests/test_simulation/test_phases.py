"""Tests for the ball state machine."""

import pytest

from goalkick.simulation.core.entities import BallState
from goalkick.simulation.core.phases import (
    VALID_TRANSITIONS,
    BallStateMachine,
    InvalidBallTransition,
)


class TestValidTransitions:
    """Tests for the transition table."""

    def test_scoring_path(self):
        fsm = BallStateMachine()
        fsm.transition_to(BallState.KICKED, reason="impulse")
        fsm.transition_to(BallState.IN_GOAL_AREA, reason="entered")
        fsm.transition_to(BallState.SCORED, reason="settled")
        assert fsm.state == BallState.SCORED
        assert fsm.is_terminal
        assert [t.to_state for t in fsm.history] == [
            BallState.KICKED,
            BallState.IN_GOAL_AREA,
            BallState.SCORED,
        ]

    @pytest.mark.parametrize("start", [BallState.KICKED, BallState.IN_GOAL_AREA])
    def test_out_of_play_escape(self, start):
        assert BallState.RESTING in VALID_TRANSITIONS[start]

    def test_scored_is_terminal(self):
        assert VALID_TRANSITIONS[BallState.SCORED] == set()

    def test_cannot_skip_goal_area(self):
        """A kicked ball can't score without entering the goal."""
        fsm = BallStateMachine(BallState.KICKED)
        assert not fsm.can_transition_to(BallState.SCORED)
        with pytest.raises(InvalidBallTransition):
            fsm.transition_to(BallState.SCORED)

    def test_resting_only_kicked(self):
        fsm = BallStateMachine()
        with pytest.raises(InvalidBallTransition):
            fsm.transition_to(BallState.IN_GOAL_AREA)

    def test_unvalidated_reset_from_scored(self):
        fsm = BallStateMachine(BallState.SCORED)
        fsm.transition_to(BallState.RESTING, reason="reset", validate=False)
        assert fsm.state == BallState.RESTING


class TestCallbacks:
    def test_callback_receives_transition(self):
        seen = []
        fsm = BallStateMachine()
        fsm.on_transition(seen.append)
        fsm.transition_to(BallState.KICKED, reason="impulse", tick=45, time=0.75)

        assert len(seen) == 1
        assert seen[0].from_state == BallState.RESTING
        assert seen[0].to_state == BallState.KICKED
        assert seen[0].tick == 45

    def test_failed_transition_no_callback(self):
        seen = []
        fsm = BallStateMachine()
        fsm.on_transition(seen.append)
        with pytest.raises(InvalidBallTransition):
            fsm.transition_to(BallState.SCORED)
        assert seen == []
        assert fsm.state == BallState.RESTING


class TestQueries:
    def test_is_live(self):
        assert not BallStateMachine(BallState.RESTING).is_live
        assert BallStateMachine(BallState.KICKED).is_live
        assert BallStateMachine(BallState.IN_GOAL_AREA).is_live
        assert not BallStateMachine(BallState.SCORED).is_live

    def test_reset_forgets_history(self):
        fsm = BallStateMachine()
        fsm.transition_to(BallState.KICKED)
        fsm.reset()
        assert fsm.state == BallState.RESTING
        assert fsm.history == []
