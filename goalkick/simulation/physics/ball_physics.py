"""Ball step physics.

One step = gravity, friction, position update, then ground contact.
Constants are per step, matching how the ball has always felt in play;
see BallPhysicsConfig.timestep for running steps at a fixed rate.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...config import BallPhysicsConfig
from ..core.vec3 import Vec3


@dataclass
class BallStepResult:
    """Result of one physics step.

    Contains new position and velocity plus debug info.
    """
    new_pos: Vec3
    new_vel: Vec3

    # Debug info
    bounced: bool = False
    speed_before: float = 0.0
    speed_after: float = 0.0

    def format_debug(self) -> str:
        """Format for logging."""
        parts = [f"→ {self.new_pos} @ {self.speed_after:.3f}/step"]
        if self.bounced:
            parts.append("[BOUNCE]")
        return " ".join(parts)


def integrate(position: Vec3, velocity: Vec3, config: BallPhysicsConfig) -> tuple[Vec3, Vec3]:
    """Apply gravity and friction, then move by the new velocity."""
    velocity = Vec3(velocity.x, velocity.y + config.gravity, velocity.z) * config.friction
    return position + velocity, velocity


def apply_ground_contact(
    position: Vec3,
    velocity: Vec3,
    config: BallPhysicsConfig,
) -> tuple[Vec3, Vec3, bool]:
    """Clamp to the floor and bounce if the ball reached it.

    Returns:
        (position, velocity, bounced)
    """
    if position.y > config.floor:
        return position, velocity, False

    position = position.with_y(config.floor)
    velocity = Vec3(
        velocity.x * config.ground_damping,
        velocity.y * -config.restitution,
        velocity.z * config.ground_damping,
    )
    return position, velocity, True


def step(position: Vec3, velocity: Vec3, config: BallPhysicsConfig) -> BallStepResult:
    """Integrate one step and resolve ground contact."""
    speed_before = velocity.length()
    new_pos, new_vel = integrate(position, velocity, config)
    new_pos, new_vel, bounced = apply_ground_contact(new_pos, new_vel, config)
    return BallStepResult(
        new_pos=new_pos,
        new_vel=new_vel,
        bounced=bounced,
        speed_before=speed_before,
        speed_after=new_vel.length(),
    )


def settle(position: Vec3, config: BallPhysicsConfig) -> Vec3:
    """Let a dead ball drop onto the floor.

    Gravity pulls it down and the floor holds it; velocity is not kept.
    """
    return position.with_y(max(config.floor, position.y + config.gravity))
