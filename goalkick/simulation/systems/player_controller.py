"""Player controller - owns the kicker's position, heading and locomotion.

Locomotion:
    IDLE ↔ RUNNING follows whether any movement intent is held, even a
    set that cancels out (LEFT with RIGHT) and leaves the player in place.
    KICKING is entered by trigger_kick() and left when the scheduled pose
    reset fires (or the player is reset). Movement intents keep moving
    the player during KICKING; only the locomotion state is held.

A kick schedules two deferred actions on simulation time:
    KICK_IMPULSE after the impulse delay (ball struck)
    POSE_RESET after the pose reset delay (kick animation done)
"""

from __future__ import annotations

import logging
from typing import Iterable

from ...config import KickConfig, PlayerConfig
from ..core.clock import Clock
from ..core.entities import Locomotion, MoveIntent, Player, PlayerSnapshot
from ..core.events import EventBus, EventType
from ..core.field import Pitch
from ..core.scheduler import ScheduledAction, Scheduler
from ..physics.movement import MovementResult, MovementSolver


logger = logging.getLogger(__name__)


class PlayerController:
    """Single owner of the Player entity."""

    def __init__(
        self,
        config: PlayerConfig,
        kick_config: KickConfig,
        pitch: Pitch,
        scheduler: Scheduler,
        event_bus: EventBus,
        clock: Clock,
    ):
        self.config = config
        self.kick_config = kick_config
        self.pitch = pitch
        self.scheduler = scheduler
        self.event_bus = event_bus
        self.clock = clock
        self.solver = MovementSolver(pitch, config.speed)

        self._player = Player(
            position=pitch.player_spawn,
            heading=pitch.player_spawn_heading,
            locomotion=Locomotion.IDLE,
        )

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def locomotion(self) -> Locomotion:
        return self._player.locomotion

    @property
    def is_kicking(self) -> bool:
        return self._player.is_kicking

    def snapshot(self) -> PlayerSnapshot:
        return self._player.snapshot()

    # =========================================================================
    # Movement
    # =========================================================================

    def apply_movement_intent(self, intent: Iterable[MoveIntent], dt: float) -> MovementResult:
        """Move the player for one tick and update locomotion."""
        intent = frozenset(intent)
        result = self.solver.solve(self._player.position, intent, dt)

        self._player.position = result.new_pos
        if result.new_heading is not None:
            self._player.heading = result.new_heading

        if not self._player.is_kicking:
            held = bool(intent)
            self._set_locomotion(Locomotion.RUNNING if held else Locomotion.IDLE)

        if result.moved:
            logger.debug("Player moved %s", result.format_debug())
        return result

    # =========================================================================
    # Kick
    # =========================================================================

    def trigger_kick(self) -> bool:
        """Start a kick unless one is already underway.

        Returns:
            True if a kick was started
        """
        if self._player.is_kicking:
            logger.debug("Kick ignored, already kicking")
            return False

        self._set_locomotion(Locomotion.KICKING)
        now = self.clock.current_time
        self.scheduler.schedule(ScheduledAction.KICK_IMPULSE, self.kick_config.impulse_delay, now)
        self.scheduler.schedule(ScheduledAction.POSE_RESET, self.kick_config.pose_reset_delay, now)
        self.clock.mark_event("kick")

        self._emit(
            EventType.KICK_TRIGGERED,
            "kick started",
            impulse_at=now + self.kick_config.impulse_delay,
            pose_reset_at=now + self.kick_config.pose_reset_delay,
        )
        logger.info("Kick triggered at %.2fs", now)
        return True

    def end_kick_pose(self) -> None:
        """Kick animation finished; back to idle."""
        if not self._player.is_kicking:
            return
        self._set_locomotion(Locomotion.IDLE)
        self._emit(
            EventType.KICK_POSE_ENDED,
            "kick pose reset",
            pose_seconds=self.clock.time_since("kick"),
            pose_ticks=self.clock.ticks_since("kick"),
        )

    # =========================================================================
    # Reset
    # =========================================================================

    def reset_player(self, reason: str = "reset") -> None:
        """Back to the spawn pose, idle.

        A pending pose reset is cancelled. A pending kick impulse is left
        alone; the ball ignores it unless resting.
        """
        cancelled = self.scheduler.cancel_action(ScheduledAction.POSE_RESET)
        self._player.position = self.pitch.player_spawn
        self._player.heading = self.pitch.player_spawn_heading
        self._set_locomotion(Locomotion.IDLE)

        self._emit(EventType.PLAYER_RESET, reason, cancelled_pose_resets=cancelled)
        logger.info("Player reset (%s)", reason)

    # =========================================================================
    # Internals
    # =========================================================================

    def _set_locomotion(self, locomotion: Locomotion) -> None:
        previous = self._player.locomotion
        if previous == locomotion:
            return
        self._player.locomotion = locomotion
        self._emit(
            EventType.LOCOMOTION_CHANGED,
            f"{previous.value} -> {locomotion.value}",
            from_state=previous.value,
            to_state=locomotion.value,
        )

    def _emit(self, event_type: EventType, description: str = "", **data) -> None:
        self.event_bus.emit_simple(
            event_type,
            self.clock.tick_count,
            self.clock.current_time,
            description=description,
            source="player",
            **data,
        )
