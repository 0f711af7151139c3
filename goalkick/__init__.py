"""goalkick - a kick-at-goal gameplay simulation core."""

__version__ = "0.1.0"
