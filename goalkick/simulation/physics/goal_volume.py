"""Goal volume - the axis-aligned box that counts as "in the net".

Pure geometry: no state beyond the box itself. Per-axis checks are
exposed separately because containment is enforced face by face.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from ..core.vec3 import Axis, Vec3


AXES: Tuple[Axis, Axis, Axis] = (Axis.X, Axis.Y, Axis.Z)


@dataclass(frozen=True)
class ContainmentResult:
    """Result of clamping a ball to the goal volume.

    Attributes:
        position: Position after clamping
        velocity: Velocity after zeroing clamped axes
        clamped_axes: Axes whose bound was exceeded
    """
    position: Vec3
    velocity: Vec3
    clamped_axes: Tuple[Axis, ...] = field(default_factory=tuple)

    @property
    def was_clamped(self) -> bool:
        return bool(self.clamped_axes)


@dataclass(frozen=True)
class GoalVolume:
    """Axis-aligned box given by center and half extents.

    Bounds are inclusive: a point on a face is inside.
    """
    center: Vec3
    half_extents: Vec3

    @property
    def min_corner(self) -> Vec3:
        return self.center - self.half_extents

    @property
    def max_corner(self) -> Vec3:
        return self.center + self.half_extents

    def axis_bounds(self, axis: Axis) -> Tuple[float, float]:
        """(low, high) bound along one axis."""
        c = self.center.component(axis)
        h = self.half_extents.component(axis)
        return c - h, c + h

    def contains_axis(self, position: Vec3, axis: Axis) -> bool:
        """True if position lies within the bounds on one axis."""
        low, high = self.axis_bounds(axis)
        return low <= position.component(axis) <= high

    def contains(self, position: Vec3) -> bool:
        """True if position lies within the box on all three axes."""
        return all(self.contains_axis(position, axis) for axis in AXES)

    def contains_strictly(self, position: Vec3) -> bool:
        """True if position is inside and touches no face."""
        for axis in AXES:
            low, high = self.axis_bounds(axis)
            if not low < position.component(axis) < high:
                return False
        return True

    def axes_outside(self, position: Vec3) -> Tuple[Axis, ...]:
        """Axes on which position exceeds the box."""
        return tuple(axis for axis in AXES if not self.contains_axis(position, axis))

    def clamp(self, position: Vec3, velocity: Vec3) -> ContainmentResult:
        """Pull position back onto the box, face by face.

        Every clamped axis has its velocity component zeroed; the other
        components are left as they are. Clamping without zeroing lets the
        ball push through the same face again on the next step.
        """
        clamped = []
        for axis in AXES:
            low, high = self.axis_bounds(axis)
            value = position.component(axis)
            if value < low or value > high:
                position = position.with_component(axis, low if value < low else high)
                velocity = velocity.with_component(axis, 0.0)
                clamped.append(axis)
        return ContainmentResult(position=position, velocity=velocity, clamped_axes=tuple(clamped))

    def __repr__(self) -> str:
        return f"GoalVolume(center={self.center}, half_extents={self.half_extents})"
