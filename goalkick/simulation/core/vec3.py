"""3D Vector implementation for simulation.

All positions and velocities in the simulation use Vec3.
Units are scene units (one unit ~ one meter on the pitch).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class Axis(str, Enum):
    """World axes, used for per-axis containment checks."""
    X = "x"
    Y = "y"
    Z = "z"


@dataclass(frozen=True, slots=True)
class Vec3:
    """Immutable 3D vector.

    Coordinate system:
        Origin (0, 0, 0) = Center spot, on the grass
        +X = Right (kicker's perspective, facing the goal)
        +Y = Up
        -Z = Toward the goal being attacked
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # =========================================================================
    # Arithmetic Operations
    # =========================================================================

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar: float) -> Vec3:
        if scalar == 0:
            return Vec3(0, 0, 0)
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    # =========================================================================
    # Vector Operations
    # =========================================================================

    def length(self) -> float:
        """Magnitude of vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vec3:
        """Unit vector in same direction."""
        length = self.length()
        if length < 0.0001:
            return Vec3(0, 0, 0)
        return Vec3(self.x / length, self.y / length, self.z / length)

    # =========================================================================
    # Per-axis access
    # =========================================================================

    def component(self, axis: Axis) -> float:
        """Value along a single axis."""
        return getattr(self, axis.value)

    def with_component(self, axis: Axis, value: float) -> Vec3:
        """Return new vector with one axis replaced."""
        if axis == Axis.X:
            return Vec3(value, self.y, self.z)
        if axis == Axis.Y:
            return Vec3(self.x, value, self.z)
        return Vec3(self.x, self.y, value)

    def with_x(self, x: float) -> Vec3:
        """Return new vector with different x."""
        return Vec3(x, self.y, self.z)

    def with_y(self, y: float) -> Vec3:
        """Return new vector with different y."""
        return Vec3(self.x, y, self.z)

    # =========================================================================
    # Utility
    # =========================================================================

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __repr__(self) -> str:
        return f"Vec3({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

    # =========================================================================
    # Class Methods
    # =========================================================================

    @classmethod
    def zero(cls) -> Vec3:
        """Zero vector."""
        return cls(0, 0, 0)
