"""Physics layer - ball steps, player movement and the goal volume."""

from .goal_volume import ContainmentResult, GoalVolume
from .ball_physics import BallStepResult
from .movement import MovementResult, MovementSolver

__all__ = [
    "ContainmentResult",
    "GoalVolume",
    "BallStepResult",
    "MovementResult",
    "MovementSolver",
]
