"""Ball State Machine - Explicit ball state transitions.

All ball state changes go through this state machine so the allowed
transitions live in one table.

Ball Lifecycle:
    RESTING → KICKED → IN_GOAL_AREA → SCORED

    Escape (out of play):
        KICKED | IN_GOAL_AREA → RESTING

    Reset commands bypass validation and may return to RESTING
    from any state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Set

from .entities import BallState


VALID_TRANSITIONS: Dict[BallState, Set[BallState]] = {
    BallState.RESTING: {BallState.KICKED},
    BallState.KICKED: {
        BallState.IN_GOAL_AREA,  # Crossed into the goal volume
        BallState.RESTING,       # Out of play
    },
    BallState.IN_GOAL_AREA: {
        BallState.SCORED,        # Came to rest inside
        BallState.RESTING,       # Out of play
    },
    BallState.SCORED: set(),     # Terminal until reset
}


@dataclass
class BallTransition:
    """Record of a ball state transition."""
    from_state: BallState
    to_state: BallState
    reason: str
    tick: int
    time: float


TransitionCallback = Callable[[BallTransition], None]


class BallStateMachine:
    """Manages ball state transitions with validation.

    Usage:
        fsm = BallStateMachine()
        if fsm.can_transition_to(BallState.KICKED):
            fsm.transition_to(BallState.KICKED, reason="impulse", tick=45, time=0.75)
    """

    def __init__(self, initial_state: BallState = BallState.RESTING):
        self._state = initial_state
        self._history: list[BallTransition] = []
        self._callbacks: list[TransitionCallback] = []

    @property
    def state(self) -> BallState:
        """Current state."""
        return self._state

    @property
    def history(self) -> list[BallTransition]:
        """History of transitions."""
        return self._history.copy()

    def can_transition_to(self, target: BallState) -> bool:
        """Check if transition to target state is valid."""
        return target in VALID_TRANSITIONS.get(self._state, set())

    def transition_to(
        self,
        target: BallState,
        reason: str = "",
        tick: int = 0,
        time: float = 0.0,
        validate: bool = True,
    ) -> BallTransition:
        """Transition to a new state.

        Raises:
            InvalidBallTransition: If transition is not valid and validate=True
        """
        if validate and not self.can_transition_to(target):
            raise InvalidBallTransition(
                f"Cannot transition from {self._state.value} to {target.value}. "
                f"Valid targets: {[s.value for s in VALID_TRANSITIONS.get(self._state, set())]}"
            )

        transition = BallTransition(
            from_state=self._state,
            to_state=target,
            reason=reason,
            tick=tick,
            time=time,
        )

        self._state = target
        self._history.append(transition)

        for callback in self._callbacks:
            callback(transition)

        return transition

    def on_transition(self, callback: TransitionCallback) -> None:
        """Register a callback for state changes."""
        self._callbacks.append(callback)

    def reset(self, initial_state: BallState = BallState.RESTING) -> None:
        """Reset to initial state and forget history."""
        self._state = initial_state
        self._history.clear()

    @property
    def is_live(self) -> bool:
        """True if the ball is being integrated."""
        return self._state in (BallState.KICKED, BallState.IN_GOAL_AREA)

    @property
    def is_terminal(self) -> bool:
        return self._state == BallState.SCORED


class InvalidBallTransition(Exception):
    """Raised when an invalid ball state transition is attempted."""
    pass
