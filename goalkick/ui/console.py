"""Rich rendering of match snapshots and scenario results.

A presentation adapter: reads snapshots only, and copes with a match
whose ball or player is not attached yet.
"""

import math
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from goalkick.simulation.core.entities import (
    BallSnapshot,
    BallState,
    Locomotion,
    PlayerSnapshot,
    ScoreState,
)
from goalkick.simulation.testing.scenario import ScenarioResult


BALL_STATE_STYLES = {
    BallState.RESTING: "#666666",
    BallState.KICKED: "bold #1565c0",
    BallState.IN_GOAL_AREA: "bold #ef6c00",
    BallState.SCORED: "bold #2e7d32",
}

LOCOMOTION_STYLES = {
    Locomotion.IDLE: "#666666",
    Locomotion.RUNNING: "bold",
    Locomotion.KICKING: "bold #c62828",
}


def _vec(v) -> str:
    return f"({v.x:7.2f}, {v.y:6.2f}, {v.z:8.2f})"


def render_state(
    ball: Optional[BallSnapshot],
    player: Optional[PlayerSnapshot],
    score: Optional[ScoreState],
    title: str = "Match",
) -> Table:
    """One table with ball, player and score rows."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Entity")
    table.add_column("State")
    table.add_column("Position")
    table.add_column("Detail")

    if ball is None:
        table.add_row("Ball", Text("loading", style="dim"), "", "")
    else:
        table.add_row(
            "Ball",
            Text(ball.state.value, style=BALL_STATE_STYLES.get(ball.state, "")),
            _vec(ball.position),
            f"speed {ball.speed:.3f}",
        )

    if player is None:
        table.add_row("Player", Text("loading", style="dim"), "", "")
    else:
        table.add_row(
            "Player",
            Text(player.locomotion.value, style=LOCOMOTION_STYLES.get(player.locomotion, "")),
            _vec(player.position),
            f"heading {math.degrees(player.heading):.0f}°",
        )

    if score is not None:
        table.add_row("Score", "", "", f"{score.goals} goals / {score.kicks} kicks")

    return table


def render_scenario(result: ScenarioResult) -> Table:
    """Summary table for a scenario run."""
    status = Text("GOAL", style="bold #2e7d32") if result.success else Text("NO GOAL", style="bold #c62828")
    table = Table(title=f"Scenario: {result.scenario_name}", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value")

    table.add_row("Result", status)
    table.add_row("Ticks", str(result.tick_count))
    table.add_row("Sim time", f"{result.duration:.2f}s")
    table.add_row("Final state", result.final_state.value)
    if result.aim is not None:
        table.add_row("Aim", result.aim.value)
    if result.impulse is not None:
        table.add_row("Impulse", _vec(result.impulse))
    for key, value in result.metrics.items():
        table.add_row(key.replace("_", " "), str(value))
    return table


class ConsoleView:
    """Prints snapshots and scenario summaries to a rich Console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_state(
        self,
        ball: Optional[BallSnapshot],
        player: Optional[PlayerSnapshot],
        score: Optional[ScoreState],
        title: str = "Match",
    ) -> None:
        self.console.print(render_state(ball, player, score, title=title))

    def show_scenario(self, result: ScenarioResult) -> None:
        self.console.print(render_scenario(result))

    def show_log(self, text: str) -> None:
        self.console.print(Text(text))
