"""Pitch geometry and coordinate system.

Single, unified coordinate system used throughout the simulation.
All measurements in scene units.

Coordinate system:
    Origin (0, 0, 0) = Center spot on the grass
    +X = Right (kicker facing the goal)
    +Y = Up
    -Z = Toward the goal
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .vec3 import Vec3


# =============================================================================
# Player Field Bounds
# =============================================================================

PLAYER_MIN_X = -60.0
PLAYER_MAX_X = 60.0
PLAYER_MIN_Z = -100.0
PLAYER_MAX_Z = 100.0


# =============================================================================
# Ball Play Area
# =============================================================================

# A kicked ball beyond any of these is out of play and gets reset
PLAY_AREA_MIN_Z = -120.0
PLAY_AREA_MAX_Z = 100.0
PLAY_AREA_HALF_WIDTH = 50.0


# =============================================================================
# Goal
# =============================================================================

GOAL_CENTER = Vec3(0.0, 5.5, -109.0)
GOAL_HALF_EXTENTS = Vec3(16.5, 5.5, 4.0)


# =============================================================================
# Spawn Poses
# =============================================================================

BALL_SPAWN = Vec3(-3.9, 0.0, -56.25)
PLAYER_SPAWN = Vec3(-3.9, 0.0, -52.0)  # Just behind the ball
PLAYER_SPAWN_HEADING = math.pi         # Facing -Z


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value between min and max."""
    return max(min_val, min(max_val, value))


@dataclass(frozen=True)
class Pitch:
    """Static pitch layout: bounds, goal placement and spawn poses.

    Attributes:
        player_min_x, player_max_x: Lateral limits for the player
        player_min_z, player_max_z: Depth limits for the player
        play_area_min_z, play_area_max_z: Depth limits for a live ball
        play_area_half_width: Lateral limit for a live ball (|x|)
        goal_center, goal_half_extents: Scoring volume
        ball_spawn: Canonical resting spot for the ball
        player_spawn, player_spawn_heading: Canonical player pose
    """
    player_min_x: float = PLAYER_MIN_X
    player_max_x: float = PLAYER_MAX_X
    player_min_z: float = PLAYER_MIN_Z
    player_max_z: float = PLAYER_MAX_Z

    play_area_min_z: float = PLAY_AREA_MIN_Z
    play_area_max_z: float = PLAY_AREA_MAX_Z
    play_area_half_width: float = PLAY_AREA_HALF_WIDTH

    goal_center: Vec3 = field(default_factory=lambda: GOAL_CENTER)
    goal_half_extents: Vec3 = field(default_factory=lambda: GOAL_HALF_EXTENTS)

    ball_spawn: Vec3 = field(default_factory=lambda: BALL_SPAWN)
    player_spawn: Vec3 = field(default_factory=lambda: PLAYER_SPAWN)
    player_spawn_heading: float = PLAYER_SPAWN_HEADING

    def clamp_player(self, pos: Vec3) -> Vec3:
        """Clamp a position to the player's field rectangle."""
        return Vec3(
            clamp(pos.x, self.player_min_x, self.player_max_x),
            pos.y,
            clamp(pos.z, self.player_min_z, self.player_max_z),
        )

    def player_in_bounds(self, pos: Vec3) -> bool:
        return (
            self.player_min_x <= pos.x <= self.player_max_x
            and self.player_min_z <= pos.z <= self.player_max_z
        )

    def is_ball_out_of_play(self, pos: Vec3) -> bool:
        """True if a ball position is beyond the play area."""
        return (
            pos.z < self.play_area_min_z
            or pos.z > self.play_area_max_z
            or abs(pos.x) > self.play_area_half_width
        )

    def validate(self) -> list[str]:
        """Validate layout, return list of errors."""
        errors = []
        if self.player_min_x >= self.player_max_x:
            errors.append("player x bounds are empty")
        if self.player_min_z >= self.player_max_z:
            errors.append("player z bounds are empty")
        if self.play_area_min_z >= self.play_area_max_z:
            errors.append("play area z bounds are empty")
        if self.play_area_half_width <= 0:
            errors.append("play area half width must be positive")
        if min(self.goal_half_extents.as_tuple()) <= 0:
            errors.append("goal half extents must be positive")
        if not self.player_in_bounds(self.player_spawn):
            errors.append("player spawn is outside the player bounds")
        return errors
