"""Orchestrator - Main simulation loop.

The Match coordinates the player, the scheduled kick actions and the
ball, and is the only surface the outside world (input, clock,
presentation) talks to.

Tick order (update(dt)):
    1. Advance simulation time
    2. Player movement from the held intents
    3. Fire due scheduled actions (kick impulse, pose reset)
    4. Ball physics, containment and scoring

Ball and player are attached separately because the scene loads them
asynchronously. Until then, commands are no-ops and snapshot queries
return None.

Usage:
    match = create_match(seed=7)
    match.trigger_kick()
    while not match.get_score_state().is_scored:
        match.update(1 / 60)
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, Optional

from ..config import SimulationConfig, get_config
from .core.clock import Clock
from .core.entities import (
    BallSnapshot,
    BallState,
    InputAction,
    MoveIntent,
    PlayerSnapshot,
    ScoreState,
)
from .core.events import Event, EventBus, EventType
from .core.scheduler import TIME_EPSILON, ScheduledAction, ScheduledEvent, Scheduler
from .core.vec3 import Vec3
from .physics.goal_volume import GoalVolume
from .resolution.kick import KickResolver, KickResult
from .systems.ball_simulator import BallSimulator
from .systems.player_controller import PlayerController


logger = logging.getLogger(__name__)


class Match:
    """Main simulation orchestrator.

    Owns the clock, scheduler and event bus, and one BallSimulator and
    PlayerController once attached.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        goal: Optional[GoalVolume] = None,
    ):
        self.config = config or get_config()
        errors = self.config.validate()
        if errors:
            raise ValueError(f"Invalid simulation config: {'; '.join(errors)}")

        # Core components
        self.clock = Clock()
        self.event_bus = event_bus or EventBus()
        self.scheduler = Scheduler()

        pitch = self.config.pitch
        self.goal = goal or GoalVolume(pitch.goal_center, pitch.goal_half_extents)
        self.kick_resolver = KickResolver(self.config.kick)
        if not self.kick_resolver.targets_fit(self.goal):
            logger.warning("Kick aim spots plus jitter reach outside the goal volume %s", self.goal)

        self.rng = rng or random.Random(self.config.seed)

        # Attached entities
        self.ball: Optional[BallSimulator] = None
        self.player: Optional[PlayerController] = None

        # Input
        self._intent: frozenset[MoveIntent] = frozenset()

        # Fixed-timestep ball stepping (only when config.ball.timestep is set)
        self._ball_accumulator: float = 0.0

        # Tallies
        self._goals: int = 0
        self._kicks: int = 0
        self.last_kick: Optional[KickResult] = None

        self._setup_event_handlers()

    def _setup_event_handlers(self) -> None:
        """Subscribe to events we need to track."""
        self.event_bus.subscribe(EventType.BALL_OUT_OF_PLAY, self._on_ball_out_of_play)
        self.event_bus.subscribe(EventType.GOAL_SCORED, self._on_goal_scored)

    # =========================================================================
    # Event Handlers
    # =========================================================================

    def _on_ball_out_of_play(self, event: Event) -> None:
        """A missed shot sends the kicker back to the spot too."""
        if self.player is not None:
            self.player.reset_player("ball out of play")

    def _on_goal_scored(self, event: Event) -> None:
        self._goals += 1

    # =========================================================================
    # Setup
    # =========================================================================

    def attach_ball(self, spawn: Optional[Vec3] = None) -> BallSimulator:
        """Create the ball once its asset is ready."""
        if self.ball is not None:
            logger.debug("Ball already attached")
            return self.ball
        self.ball = BallSimulator(
            goal=self.goal,
            config=self.config.ball,
            pitch=self.config.pitch,
            event_bus=self.event_bus,
            clock=self.clock,
            spawn=spawn,
        )
        logger.info("Ball attached at %s", self.ball.spawn)
        return self.ball

    def attach_player(self) -> PlayerController:
        """Create the player once its asset is ready."""
        if self.player is not None:
            logger.debug("Player already attached")
            return self.player
        self.player = PlayerController(
            config=self.config.player,
            kick_config=self.config.kick,
            pitch=self.config.pitch,
            scheduler=self.scheduler,
            event_bus=self.event_bus,
            clock=self.clock,
        )
        logger.info("Player attached")
        return self.player

    @property
    def is_ready(self) -> bool:
        """True once both ball and player are attached."""
        return self.ball is not None and self.player is not None

    # =========================================================================
    # Input
    # =========================================================================

    def set_movement_intent(self, intent: Iterable[MoveIntent]) -> None:
        """Replace the held movement intents."""
        self._intent = frozenset(intent)

    @property
    def movement_intent(self) -> frozenset[MoveIntent]:
        return self._intent

    def handle_action(self, action: InputAction) -> None:
        """Dispatch a discrete input action."""
        if action == InputAction.KICK:
            self.trigger_kick()
        elif action == InputAction.RESET_SCORED:
            if self.ball is not None and self.ball.state == BallState.SCORED:
                self.reset_ball()
                self.reset_player()
            else:
                logger.debug("Reset-scored ignored, no goal to reset")
        elif action == InputAction.RESET_GAME:
            self.reset_game()

    # =========================================================================
    # Main Loop
    # =========================================================================

    def update(self, dt: Optional[float] = None, intent: Optional[Iterable[MoveIntent]] = None) -> None:
        """Advance everything by one tick."""
        if intent is not None:
            self.set_movement_intent(intent)

        dt = self.clock.tick(dt)

        if self.player is not None:
            self.player.apply_movement_intent(self._intent, dt)

        for scheduled in self.scheduler.pop_due(self.clock.current_time):
            self._dispatch(scheduled)

        self._step_ball(dt)

    def run_until(
        self,
        predicate: Callable[[Match], bool],
        dt: Optional[float] = None,
        max_ticks: int = 1000,
    ) -> int:
        """Tick until predicate(match) holds or max_ticks pass.

        Returns:
            Number of ticks run
        """
        ticks = 0
        while ticks < max_ticks and not predicate(self):
            self.update(dt)
            ticks += 1
        return ticks

    def _dispatch(self, scheduled: ScheduledEvent) -> None:
        if scheduled.action == ScheduledAction.KICK_IMPULSE:
            self._resolve_kick()
        elif scheduled.action == ScheduledAction.POSE_RESET:
            if self.player is not None:
                self.player.end_kick_pose()

    def _resolve_kick(self) -> None:
        """Strike the ball toward the goal."""
        if self.ball is None:
            logger.debug("Kick impulse fired with no ball attached")
            return

        if self.ball.state != BallState.RESTING:
            logger.debug("Kick impulse ignored, ball is %s", self.ball.state.value)
            self.event_bus.emit_simple(
                EventType.KICK_IGNORED,
                self.clock.tick_count,
                self.clock.current_time,
                description=f"ball already {self.ball.state.value}",
                source="match",
                state=self.ball.state.value,
            )
            return

        plan = self.kick_resolver.plan(self.ball.snapshot().position, self.goal, self.rng)
        if not self.ball.apply_impulse(plan.impulse):
            return

        self._kicks += 1
        self.last_kick = plan
        self.event_bus.emit_simple(
            EventType.KICK_RESOLVED,
            self.clock.tick_count,
            self.clock.current_time,
            description=plan.format_debug(),
            source="match",
            aim=plan.aim.value,
            target=plan.target.as_tuple(),
            impulse=plan.impulse.as_tuple(),
        )

    def _step_ball(self, dt: float) -> None:
        if self.ball is None:
            return

        timestep = self.config.ball.timestep
        if timestep is None:
            self.ball.tick()
            return

        self._ball_accumulator += dt
        steps = int(self._ball_accumulator / timestep + TIME_EPSILON)
        if steps > self.config.ball.max_substeps:
            # Too far behind; drop the backlog instead of catching up
            logger.debug("Ball stepping fell behind by %d steps", steps - self.config.ball.max_substeps)
            steps = self.config.ball.max_substeps
            self._ball_accumulator = 0.0
        else:
            self._ball_accumulator = max(0.0, self._ball_accumulator - steps * timestep)

        for _ in range(steps):
            self.ball.tick()

    # =========================================================================
    # Commands
    # =========================================================================

    def trigger_kick(self) -> bool:
        """Start a kick. No-op before the player is attached."""
        if self.player is None:
            logger.debug("Kick ignored, no player attached")
            return False
        return self.player.trigger_kick()

    def reset_ball(self) -> None:
        if self.ball is None:
            return
        self.ball.reset_ball("reset command")

    def reset_player(self) -> None:
        if self.player is None:
            return
        self.player.reset_player("reset command")

    def reset_game(self) -> None:
        """Everything back to the canonical start."""
        self.scheduler.clear()
        self.clock.reset()
        self._intent = frozenset()
        self._ball_accumulator = 0.0
        self._goals = 0
        self._kicks = 0
        self.last_kick = None

        if self.ball is not None:
            self.ball.reset_ball("game reset")
        if self.player is not None:
            self.player.reset_player("game reset")

        self.event_bus.emit_simple(
            EventType.GAME_RESET,
            self.clock.tick_count,
            self.clock.current_time,
            description="game reset",
            source="match",
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def get_ball_snapshot(self) -> Optional[BallSnapshot]:
        if self.ball is None:
            return None
        return self.ball.snapshot()

    def get_player_snapshot(self) -> Optional[PlayerSnapshot]:
        if self.player is None:
            return None
        return self.player.snapshot()

    def get_score_state(self) -> Optional[ScoreState]:
        if self.ball is None:
            return None
        return ScoreState(ball_state=self.ball.state, goals=self._goals, kicks=self._kicks)

    def __repr__(self) -> str:
        ball = self.ball.state.value if self.ball else "detached"
        player = self.player.locomotion.value if self.player else "detached"
        return f"Match({self.clock.format_time()}, ball={ball}, player={player})"


def create_match(
    seed: Optional[int] = None,
    config: Optional[SimulationConfig] = None,
    event_bus: Optional[EventBus] = None,
    rng: Optional[random.Random] = None,
) -> Match:
    """Create a Match with ball and player already attached."""
    if rng is None and seed is not None:
        rng = random.Random(seed)
    match = Match(config=config, event_bus=event_bus, rng=rng)
    match.attach_ball()
    match.attach_player()
    return match
