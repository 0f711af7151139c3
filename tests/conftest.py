"""Shared pytest fixtures for goalkick tests."""

import pytest

from goalkick.config import (
    BallPhysicsConfig,
    KickConfig,
    PlayerConfig,
    SimulationConfig,
    set_config,
)
from goalkick.simulation.core.clock import Clock
from goalkick.simulation.core.events import EventBus
from goalkick.simulation.core.field import Pitch
from goalkick.simulation.core.scheduler import Scheduler
from goalkick.simulation.orchestrator import create_match
from goalkick.simulation.physics.goal_volume import GoalVolume
from goalkick.simulation.resolution.kick import AimCandidate
from goalkick.simulation.testing.scenario import ScriptedRandom


# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def config() -> SimulationConfig:
    """Default config with nothing taken from the environment."""
    return SimulationConfig(
        ball=BallPhysicsConfig(timestep=None),
        kick=KickConfig(),
        player=PlayerConfig(speed=8.0),
        pitch=Pitch(),
        seed=7,
        log_level="WARNING",
    )


@pytest.fixture(autouse=True)
def isolated_config(config):
    """Keep the global config from leaking between tests."""
    set_config(config)
    yield
    set_config(None)


@pytest.fixture
def pitch(config) -> Pitch:
    return config.pitch


# =============================================================================
# Core Fixtures
# =============================================================================


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def goal(pitch) -> GoalVolume:
    """The regulation goal volume."""
    return GoalVolume(pitch.goal_center, pitch.goal_half_extents)


@pytest.fixture
def center_rng() -> ScriptedRandom:
    """Always aims at the center spot with no jitter."""
    return ScriptedRandom(AimCandidate.CENTER, 0.0)


# =============================================================================
# Match Fixtures
# =============================================================================


@pytest.fixture
def match(config, center_rng):
    """Match with ball and player attached and a center, jitter-free kick."""
    return create_match(config=config, rng=center_rng)
