"""Player movement solver.

Turns a set of abstract movement intents into a displacement on the
ground plane. This is the single place player positions are computed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..core.entities import MoveIntent
from ..core.field import Pitch
from ..core.vec3 import Vec3


DIAGONAL_FACTOR = 1.0 / math.sqrt(2.0)


@dataclass
class MovementResult:
    """Result of a movement calculation.

    Contains new position, the new heading if the player turned, and
    debug info about what happened.
    """
    new_pos: Vec3
    new_heading: Optional[float] = None

    # Debug info
    moved: bool = False
    delta: Vec3 = field(default_factory=Vec3.zero)
    hit_boundary: bool = False

    def format_debug(self) -> str:
        """Format for logging."""
        parts = [f"→ {self.new_pos}"]
        if self.new_heading is not None:
            parts.append(f"heading {math.degrees(self.new_heading):.0f}°")
        if self.hit_boundary:
            parts.append("[BOUNDARY]")
        return " ".join(parts)


def intent_axes(intent: Iterable[MoveIntent]) -> tuple[int, int]:
    """Net (x, z) direction signs for an intent set.

    Opposing intents cancel out.
    """
    active = set(intent)
    x = (MoveIntent.RIGHT in active) - (MoveIntent.LEFT in active)
    z = (MoveIntent.BACK in active) - (MoveIntent.FORWARD in active)
    return x, z


class MovementSolver:
    """Solves player movement for one tick."""

    def __init__(self, pitch: Pitch, speed: float):
        self.pitch = pitch
        self.speed = speed

    def solve(self, current_pos: Vec3, intent: Iterable[MoveIntent], dt: float) -> MovementResult:
        """Compute movement for the given intents.

        Args:
            current_pos: Current position
            intent: Active movement intents
            dt: Time step in seconds

        Returns:
            MovementResult with new position and heading
        """
        sx, sz = intent_axes(intent)
        if (sx == 0 and sz == 0) or dt <= 0:
            return MovementResult(new_pos=current_pos)

        # Diagonals move at the same overall speed as straight lines
        factor = DIAGONAL_FACTOR if sx and sz else 1.0
        step = self.speed * dt * factor

        wanted = current_pos + Vec3(sx * step, 0.0, sz * step)
        new_pos = self.pitch.clamp_player(wanted)
        delta = new_pos - current_pos

        moved = abs(delta.x) > 0.0 or abs(delta.z) > 0.0
        heading = math.atan2(delta.x, delta.z) if moved else None

        return MovementResult(
            new_pos=new_pos,
            new_heading=heading,
            moved=moved,
            delta=delta,
            hit_boundary=new_pos != wanted,
        )
