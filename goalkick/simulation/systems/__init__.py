"""Systems layer - the single owners of ball and player state."""

from .ball_simulator import BallSimulator, BallTickResult
from .player_controller import PlayerController

__all__ = ["BallSimulator", "BallTickResult", "PlayerController"]
