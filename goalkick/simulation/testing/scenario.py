"""Scenario runner for behavioral testing.

Scenarios are pre-configured kicks that can be run and analyzed. They
produce logs and metrics (how long until the ball is struck, reaches
the goal, and is counted) for assessing simulation behavior.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

from ...config import SimulationConfig, get_config
from ..core.entities import BallState
from ..core.events import Event, EventType
from ..core.vec3 import Vec3
from ..orchestrator import Match
from ..resolution.kick import AimCandidate
from .logger import MatchLogger


class ScriptedRandom:
    """Random source that always picks a given aim and jitter.

    Stands in for random.Random where a test or scenario needs an exact
    shot. ``jitter`` is returned for every uniform() draw, clamped to
    the requested range.
    """

    def __init__(self, aim: AimCandidate = AimCandidate.CENTER, jitter: float = 0.0):
        self.aim = aim
        self.jitter = jitter

    def choice(self, seq: Sequence[Any]) -> Any:
        if self.aim not in seq:
            raise ValueError(f"{self.aim} is not one of {list(seq)}")
        return self.aim

    def uniform(self, a: float, b: float) -> float:
        return max(min(a, b), min(max(a, b), self.jitter))


@dataclass
class KickScenario:
    """A single kick from a fixed spot.

    Attributes:
        name: Scenario name
        description: What this checks
        ball_spawn: Where the ball rests before the kick
        aim: Forced aim candidate, or None for a seeded random aim
        seed: Seed for the random aim/jitter when aim is None
        dt: Seconds per tick
        max_ticks: Give up after this many ticks
    """
    name: str
    description: str = ""
    ball_spawn: Optional[Vec3] = None
    aim: Optional[AimCandidate] = AimCandidate.CENTER
    seed: Optional[int] = None
    dt: float = 1.0 / 60.0
    max_ticks: int = 500

    def make_rng(self) -> Any:
        if self.aim is not None:
            return ScriptedRandom(self.aim, 0.0)
        return random.Random(self.seed)


@dataclass
class ScenarioResult:
    """Result of running a scenario."""
    scenario_name: str
    success: bool
    tick_count: int
    duration: float
    final_state: BallState

    # Key metrics
    metrics: Dict[str, Any] = field(default_factory=dict)

    impulse: Optional[Vec3] = None
    aim: Optional[AimCandidate] = None

    # The full log
    log: Optional[MatchLogger] = None

    def format_summary(self) -> str:
        status = "GOAL" if self.success else "NO GOAL"
        lines = [
            f"Scenario: {self.scenario_name}",
            f"Result: {status} after {self.tick_count} ticks ({self.duration:.2f}s)",
        ]
        if self.aim is not None:
            lines.append(f"Aim: {self.aim.value}")
        if self.impulse is not None:
            lines.append(f"Impulse: {self.impulse}")
        for key, value in self.metrics.items():
            lines.append(f"  {key}: {value}")
        return "\n".join(lines)


def run_scenario(
    scenario: KickScenario,
    config: Optional[SimulationConfig] = None,
    record: bool = False,
) -> ScenarioResult:
    """Kick once and run until the goal counts, the ball resets, or time runs out."""
    config = config or get_config()
    if scenario.ball_spawn is not None:
        config = replace(config, pitch=replace(config.pitch, ball_spawn=scenario.ball_spawn))

    match = Match(config=config, rng=scenario.make_rng())
    match.attach_ball()
    match.attach_player()
    log = MatchLogger(match) if record else None

    milestones: Dict[str, int] = {}

    def mark(name: str) -> Any:
        def handler(event: Event) -> None:
            milestones.setdefault(name, event.tick)
        return handler

    match.event_bus.subscribe(EventType.KICK_RESOLVED, mark("ticks_to_impulse"))
    match.event_bus.subscribe(EventType.ENTERED_GOAL_AREA, mark("ticks_to_goal_area"))
    match.event_bus.subscribe(EventType.GOAL_SCORED, mark("ticks_to_score"))
    match.event_bus.subscribe(EventType.BALL_OUT_OF_PLAY, mark("ticks_to_out_of_play"))

    match.trigger_kick()

    def finished(m: Match) -> bool:
        return "ticks_to_score" in milestones or "ticks_to_out_of_play" in milestones

    ticks = 0
    while ticks < scenario.max_ticks and not finished(match):
        match.update(scenario.dt)
        ticks += 1
        if log is not None:
            log.record()

    score = match.get_score_state()
    metrics: Dict[str, Any] = dict(milestones)
    metrics["goals"] = score.goals if score else 0

    return ScenarioResult(
        scenario_name=scenario.name,
        success="ticks_to_score" in milestones,
        tick_count=ticks,
        duration=round(match.clock.current_time, 4),
        final_state=match.ball.state if match.ball else BallState.RESTING,
        metrics=metrics,
        impulse=match.last_kick.impulse if match.last_kick else None,
        aim=match.last_kick.aim if match.last_kick else None,
        log=log,
    )


# =============================================================================
# Presets
# =============================================================================

PENALTY_CENTER = KickScenario(
    name="penalty_center",
    description="Straight at the middle of the goal, no jitter",
    ball_spawn=Vec3(-3.9, 0.0, -56.25),
    aim=AimCandidate.CENTER,
)

PENALTY_LEFT = KickScenario(
    name="penalty_left",
    description="Left aim spot, no jitter",
    ball_spawn=Vec3(-3.9, 0.0, -56.25),
    aim=AimCandidate.LEFT,
)

PENALTY_RIGHT = KickScenario(
    name="penalty_right",
    description="Right aim spot, no jitter",
    ball_spawn=Vec3(-3.9, 0.0, -56.25),
    aim=AimCandidate.RIGHT,
)


def penalty_random(seed: Optional[int] = None) -> KickScenario:
    """Seeded random aim and jitter."""
    return KickScenario(
        name="penalty_random",
        description="Random aim spot and jitter",
        ball_spawn=Vec3(-3.9, 0.0, -56.25),
        aim=None,
        seed=seed,
    )


SCENARIOS: Dict[str, KickScenario] = {
    "center": PENALTY_CENTER,
    "left": PENALTY_LEFT,
    "right": PENALTY_RIGHT,
}


def run_all(config: Optional[SimulationConfig] = None) -> List[ScenarioResult]:
    """Run every fixed-aim preset."""
    return [run_scenario(s, config=config) for s in SCENARIOS.values()]
