"""Ball simulator - owns the ball and its scoring state machine.

Each tick while the ball is live:
    1. Integrate gravity/friction and move
    2. Ground contact (clamp + bounce)
    3. Goal containment (enter, damp, clamp face by face)
    4. Score check (slow enough inside the goal)
    5. Out-of-play check (reset ball, ask for a player reset)

Nothing else writes to the ball. Other systems read BallSnapshots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ...config import BallPhysicsConfig
from ..core.clock import Clock
from ..core.entities import Ball, BallSnapshot, BallState
from ..core.events import EventBus, EventType
from ..core.field import Pitch
from ..core.phases import BallStateMachine, BallTransition
from ..core.vec3 import Axis, Vec3
from ..physics import ball_physics
from ..physics.ball_physics import BallStepResult
from ..physics.goal_volume import GoalVolume


logger = logging.getLogger(__name__)


@dataclass
class BallTickResult:
    """What happened to the ball during one tick."""
    state_before: BallState
    state_after: BallState
    step: Optional[BallStepResult] = None

    entered_goal: bool = False
    clamped_axes: Tuple[Axis, ...] = field(default_factory=tuple)
    scored: bool = False
    out_of_play: bool = False


class BallSimulator:
    """Ball physics and scoring state machine.

    Usage:
        sim = BallSimulator(goal, BallPhysicsConfig(), Pitch(), event_bus, clock)
        sim.apply_impulse(Vec3(0.2, 0.5, -2.3))
        while sim.state != BallState.SCORED:
            sim.tick()
    """

    def __init__(
        self,
        goal: GoalVolume,
        config: BallPhysicsConfig,
        pitch: Pitch,
        event_bus: EventBus,
        clock: Clock,
        spawn: Optional[Vec3] = None,
    ):
        self.goal = goal
        self.config = config
        self.pitch = pitch
        self.event_bus = event_bus
        self.clock = clock
        self.spawn = spawn if spawn is not None else pitch.ball_spawn

        self._ball = Ball(position=self.spawn, velocity=Vec3.zero(), state=BallState.RESTING)
        self._fsm = BallStateMachine(BallState.RESTING)
        self._fsm.on_transition(self._on_transition)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def state(self) -> BallState:
        return self._fsm.state

    @property
    def state_machine(self) -> BallStateMachine:
        return self._fsm

    def snapshot(self) -> BallSnapshot:
        return self._ball.snapshot()

    # =========================================================================
    # Commands
    # =========================================================================

    def apply_impulse(self, impulse: Vec3) -> bool:
        """Strike the ball. Only a resting ball can be kicked.

        Returns:
            True if the impulse was applied
        """
        if self._fsm.state != BallState.RESTING:
            logger.debug("Impulse ignored, ball is %s", self._fsm.state.value)
            self._emit(
                EventType.KICK_IGNORED,
                f"ball already {self._fsm.state.value}",
                state=self._fsm.state.value,
            )
            return False

        self._ball.velocity = impulse
        self._transition(BallState.KICKED, "impulse applied")
        logger.info("Ball kicked with impulse %s", impulse)
        return True

    def reset_ball(self, reason: str = "reset") -> None:
        """Put the ball back on the spot, at rest."""
        self._ball.position = self.spawn
        self._ball.velocity = Vec3.zero()
        if self._fsm.state != BallState.RESTING:
            self._transition(BallState.RESTING, reason, validate=False)
        self._emit(EventType.BALL_RESET, reason)
        logger.info("Ball reset (%s)", reason)

    # =========================================================================
    # Tick
    # =========================================================================

    def tick(self) -> BallTickResult:
        """Advance the ball by one physics step."""
        state_before = self._fsm.state
        result = BallTickResult(state_before=state_before, state_after=state_before)

        if state_before == BallState.RESTING:
            return result

        if state_before == BallState.SCORED:
            # Dead ball: let it sit on the grass, nothing else runs
            self._ball.position = ball_physics.settle(self._ball.position, self.config)
            self._ball.velocity = Vec3.zero()
            return result

        step = ball_physics.step(self._ball.position, self._ball.velocity, self.config)
        result.step = step
        logger.debug("Ball step %s", step.format_debug())
        pos, vel = step.new_pos, step.new_vel

        # Goal containment
        if self._fsm.state == BallState.KICKED and self.goal.contains(pos):
            self._ball.position, self._ball.velocity = pos, vel
            self._transition(BallState.IN_GOAL_AREA, "entered goal volume")
            self._emit(EventType.ENTERED_GOAL_AREA, "ball in the net", position=pos.as_tuple())
            logger.info("Ball entered goal area at %s", pos)
            result.entered_goal = True

        if self._fsm.state == BallState.IN_GOAL_AREA:
            vel = vel * self.config.goal_damping
            containment = self.goal.clamp(pos, vel)
            pos, vel = containment.position, containment.velocity
            if containment.was_clamped:
                result.clamped_axes = containment.clamped_axes
                self._emit(
                    EventType.GOAL_FACE_CLAMP,
                    "held at goal face",
                    axes=[a.value for a in containment.clamped_axes],
                )

            self._ball.position, self._ball.velocity = pos, vel

            if vel.length() < self.config.score_epsilon:
                self._ball.velocity = Vec3.zero()
                self._ball.position = pos.with_y(self.config.floor)
                self._transition(BallState.SCORED, "came to rest in goal")
                self._emit(EventType.GOAL_SCORED, "goal!", position=self._ball.position.as_tuple())
                logger.info("Goal scored at tick %d", self.clock.tick_count)
                result.scored = True

            result.state_after = self._fsm.state
            return result

        self._ball.position, self._ball.velocity = pos, vel

        if self.pitch.is_ball_out_of_play(pos):
            logger.info("Ball out of play at %s", pos)
            result.out_of_play = True
            self._emit(EventType.BALL_OUT_OF_PLAY, "ball left the play area", position=pos.as_tuple())
            self.reset_ball("out of play")

        result.state_after = self._fsm.state
        return result

    # =========================================================================
    # Internals
    # =========================================================================

    def _transition(self, target: BallState, reason: str, validate: bool = True) -> None:
        self._fsm.transition_to(
            target,
            reason=reason,
            tick=self.clock.tick_count,
            time=self.clock.current_time,
            validate=validate,
        )

    def _on_transition(self, transition: BallTransition) -> None:
        self._ball.state = transition.to_state
        self._emit(
            EventType.BALL_STATE_CHANGED,
            f"{transition.from_state.value} -> {transition.to_state.value} ({transition.reason})",
            from_state=transition.from_state.value,
            to_state=transition.to_state.value,
        )

    def _emit(self, event_type: EventType, description: str = "", **data) -> None:
        self.event_bus.emit_simple(
            event_type,
            self.clock.tick_count,
            self.clock.current_time,
            description=description,
            source="ball",
            **data,
        )
