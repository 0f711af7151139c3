"""Core entities: the ball, the kicker, and the read-only views of them.

Ball and Player are mutable and owned by exactly one system each
(BallSimulator and PlayerController). Everything outside those systems
works with the frozen snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .vec3 import Vec3


# =============================================================================
# Enums
# =============================================================================

class BallState(str, Enum):
    """Ball lifecycle."""
    RESTING = "resting"            # At the spot, waiting for a kick
    KICKED = "kicked"              # In play, not yet in the goal
    IN_GOAL_AREA = "in_goal_area"  # Inside the goal volume, settling
    SCORED = "scored"              # Goal counted, ball dead until reset


class Locomotion(str, Enum):
    """Player animation/locomotion state."""
    IDLE = "idle"
    RUNNING = "running"
    KICKING = "kicking"


class MoveIntent(str, Enum):
    """Abstract movement directions from the input source."""
    FORWARD = "forward"  # -Z, toward the goal
    BACK = "back"        # +Z
    LEFT = "left"        # -X
    RIGHT = "right"      # +X


class InputAction(str, Enum):
    """Discrete commands from the input source."""
    KICK = "kick"
    RESET_SCORED = "reset_scored"
    RESET_GAME = "reset_game"


# =============================================================================
# Owned State
# =============================================================================

@dataclass
class Ball:
    """The ball. Only BallSimulator writes to this."""
    position: Vec3 = field(default_factory=Vec3.zero)
    velocity: Vec3 = field(default_factory=Vec3.zero)
    state: BallState = BallState.RESTING

    @property
    def speed(self) -> float:
        return self.velocity.length()

    def snapshot(self) -> BallSnapshot:
        return BallSnapshot(position=self.position, velocity=self.velocity, state=self.state)


@dataclass
class Player:
    """The kicker. Only PlayerController writes to this.

    Attributes:
        position: Feet position (y stays on the grass)
        heading: Rotation about +Y in radians; 0 faces +Z, pi faces -Z
        locomotion: Current locomotion/animation state
    """
    position: Vec3 = field(default_factory=Vec3.zero)
    heading: float = 0.0
    locomotion: Locomotion = Locomotion.IDLE

    @property
    def is_kicking(self) -> bool:
        return self.locomotion == Locomotion.KICKING

    def snapshot(self) -> PlayerSnapshot:
        return PlayerSnapshot(position=self.position, heading=self.heading, locomotion=self.locomotion)


# =============================================================================
# Snapshots
# =============================================================================

@dataclass(frozen=True)
class BallSnapshot:
    """Read-only ball state for presentation and other systems."""
    position: Vec3
    velocity: Vec3
    state: BallState

    @property
    def speed(self) -> float:
        return self.velocity.length()

    def to_dict(self) -> dict:
        return {
            "position": self.position.as_tuple(),
            "velocity": self.velocity.as_tuple(),
            "state": self.state.value,
        }


@dataclass(frozen=True)
class PlayerSnapshot:
    """Read-only player state for presentation and other systems."""
    position: Vec3
    heading: float
    locomotion: Locomotion

    def to_dict(self) -> dict:
        return {
            "position": self.position.as_tuple(),
            "heading": self.heading,
            "locomotion": self.locomotion.value,
        }


@dataclass(frozen=True)
class ScoreState:
    """Scoring status of the current attempt plus match tallies.

    Attributes:
        ball_state: State of the ball for the current attempt
        goals: Goals scored since the last game reset
        kicks: Kicks struck since the last game reset
    """
    ball_state: BallState
    goals: int = 0
    kicks: int = 0

    @property
    def is_scored(self) -> bool:
        return self.ball_state == BallState.SCORED

    def to_dict(self) -> dict:
        return {"ball_state": self.ball_state.value, "goals": self.goals, "kicks": self.kicks}
