"""Resolution layer - deciding outcomes of player actions."""

from .kick import AimCandidate, KickResolver, KickResult

__all__ = ["AimCandidate", "KickResolver", "KickResult"]
