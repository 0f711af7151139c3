"""Kick resolution - where the shot goes.

The kicker picks one of three spots across the goal mouth, the strike
adds a little jitter, and the ball leaves at fixed power toward that
spot with a slight lift.

Randomness comes from an injected source so a seeded ``random.Random``
reproduces the same shot every time.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...config import KickConfig
from ..core.vec3 import Vec3
from ..physics.goal_volume import GoalVolume


logger = logging.getLogger(__name__)


class AimCandidate(str, Enum):
    """Named aim spots, in the order they are drawn from."""
    CENTER = "center"
    RIGHT = "right"
    LEFT = "left"


AIM_ORDER = (AimCandidate.CENTER, AimCandidate.RIGHT, AimCandidate.LEFT)


@dataclass(frozen=True)
class KickResult:
    """Everything decided for one kick.

    Attributes:
        aim: Which spot was chosen
        aim_point: Spot before jitter
        target: Spot after jitter (what the ball is struck toward)
        direction: Unit vector from ball to target
        impulse: Velocity given to the ball
    """
    aim: AimCandidate
    aim_point: Vec3
    target: Vec3
    direction: Vec3
    impulse: Vec3

    def format_debug(self) -> str:
        return f"aim={self.aim.value} target={self.target} impulse={self.impulse}"


class KickResolver:
    """Stateless kick impulse generator.

    Usage:
        resolver = KickResolver()
        impulse = resolver.resolve(ball.position, goal, random.Random(7))
    """

    def __init__(self, config: Optional[KickConfig] = None):
        self.config = config or KickConfig()

    def aim_point(self, goal: GoalVolume, aim: AimCandidate) -> Vec3:
        """Un-jittered target for an aim candidate.

        Depth and height are the goal center; only the lateral offset varies.
        """
        offset = self.config.aim_offsets[AIM_ORDER.index(aim)]
        return goal.center.with_x(goal.center.x + offset)

    def targets_fit(self, goal: GoalVolume) -> bool:
        """True if every jittered target is strictly inside the goal."""
        cfg = self.config
        half = goal.half_extents
        widest = max(abs(offset) for offset in cfg.aim_offsets) + cfg.lateral_jitter
        return widest < half.x and cfg.vertical_jitter < half.y and cfg.depth_jitter < half.z

    def plan(self, ball_position: Vec3, goal: GoalVolume, rng: random.Random) -> KickResult:
        """Choose aim and jitter and compute the impulse."""
        cfg = self.config
        aim = rng.choice(AIM_ORDER)
        aim_point = self.aim_point(goal, aim)

        # Draw order is fixed (lateral, vertical, depth) for reproducibility
        jitter = Vec3(
            rng.uniform(-cfg.lateral_jitter, cfg.lateral_jitter),
            rng.uniform(-cfg.vertical_jitter, cfg.vertical_jitter),
            rng.uniform(-cfg.depth_jitter, cfg.depth_jitter),
        )
        target = aim_point + jitter

        direction = (target - ball_position).normalized()
        impulse = direction * cfg.power + Vec3(0.0, cfg.upward_bias, 0.0)

        result = KickResult(
            aim=aim,
            aim_point=aim_point,
            target=target,
            direction=direction,
            impulse=impulse,
        )
        logger.debug("Kick planned: %s", result.format_debug())
        return result

    def resolve(self, ball_position: Vec3, goal: GoalVolume, rng: random.Random) -> Vec3:
        """Impulse for a kick from ball_position at the goal."""
        return self.plan(ball_position, goal, rng).impulse
