"""
Simulation configuration.

Physics constants, kick tuning, player movement and pitch layout.
A few settings can be overridden via environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from goalkick.simulation.core.field import Pitch


def _env_float(name: str, default: Optional[float] = None) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


@dataclass
class BallPhysicsConfig:
    """Per-step ball constants.

    Gravity and friction are applied once per ball step, not scaled by dt.
    With ``timestep`` unset there is one ball step per match update; with a
    value, the match runs ball steps at that fixed rate instead.
    """

    gravity: float = -0.005
    friction: float = 0.98
    floor: float = 0.5
    restitution: float = 0.6        # Fraction of vertical speed kept on bounce
    ground_damping: float = 0.8     # Horizontal speed kept on ground contact
    goal_damping: float = 0.7       # Speed kept per step inside the goal
    score_epsilon: float = 0.1      # Below this speed a ball in the goal counts

    timestep: Optional[float] = field(
        default_factory=lambda: _env_float("GOALKICK_BALL_TIMESTEP")
    )
    max_substeps: int = 8

    def validate(self) -> list[str]:
        errors = []
        if not 0 < self.friction <= 1:
            errors.append("friction must be in (0, 1]")
        if not 0 <= self.restitution <= 1:
            errors.append("restitution must be in [0, 1]")
        if not 0 < self.goal_damping < 1:
            errors.append("goal_damping must be in (0, 1)")
        if self.score_epsilon <= 0:
            errors.append("score_epsilon must be positive")
        if self.timestep is not None and self.timestep <= 0:
            errors.append("GOALKICK_BALL_TIMESTEP must be positive")
        if self.max_substeps < 1:
            errors.append("max_substeps must be at least 1")
        return errors


@dataclass
class KickConfig:
    """Kick timing and aim."""

    power: float = 2.3
    upward_bias: float = 0.3

    # Lateral offsets from the goal center, in the order candidates are drawn
    aim_offsets: tuple[float, float, float] = (0.0, 9.0, -9.0)

    lateral_jitter: float = 0.5
    vertical_jitter: float = 0.25
    depth_jitter: float = 0.25

    impulse_delay: float = 0.75     # Trigger -> ball struck
    pose_reset_delay: float = 2.0   # Trigger -> kick animation done

    def validate(self) -> list[str]:
        errors = []
        if self.power <= 0:
            errors.append("kick power must be positive")
        if self.impulse_delay < 0 or self.pose_reset_delay < 0:
            errors.append("kick delays must not be negative")
        if self.pose_reset_delay < self.impulse_delay:
            errors.append("pose reset must not come before the impulse")
        return errors


@dataclass
class PlayerConfig:
    """Player locomotion."""

    speed: float = field(
        default_factory=lambda: _env_float("GOALKICK_PLAYER_SPEED", 8.0)
    )

    def validate(self) -> list[str]:
        if self.speed <= 0:
            return ["GOALKICK_PLAYER_SPEED must be positive"]
        return []


@dataclass
class SimulationConfig:
    """Everything a Match needs."""

    ball: BallPhysicsConfig = field(default_factory=BallPhysicsConfig)
    kick: KickConfig = field(default_factory=KickConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    pitch: Pitch = field(default_factory=Pitch)

    # Seed for the kick aim random source (None = nondeterministic)
    seed: Optional[int] = field(default_factory=lambda: _env_int("GOALKICK_SEED"))
    log_level: str = field(
        default_factory=lambda: os.getenv("GOALKICK_LOG_LEVEL", "WARNING").upper()
    )

    @classmethod
    def from_env(cls) -> "SimulationConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        errors.extend(self.ball.validate())
        errors.extend(self.kick.validate())
        errors.extend(self.player.validate())
        errors.extend(self.pitch.validate())
        return errors


# Singleton config instance
_config: Optional[SimulationConfig] = None


def get_config() -> SimulationConfig:
    """Get the global simulation configuration."""
    global _config
    if _config is None:
        _config = SimulationConfig.from_env()
    return _config


def set_config(config: Optional[SimulationConfig]) -> None:
    """Replace the global configuration (None re-reads the environment)."""
    global _config
    _config = config
