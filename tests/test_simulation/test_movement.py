"""Tests for the player MovementSolver."""

import math

import pytest

from goalkick.simulation.core.entities import MoveIntent
from goalkick.simulation.core.vec3 import Vec3
from goalkick.simulation.physics.movement import MovementSolver, intent_axes


@pytest.fixture
def solver(pitch) -> MovementSolver:
    return MovementSolver(pitch, speed=8.0)


class TestIntentAxes:
    def test_single_directions(self):
        assert intent_axes({MoveIntent.FORWARD}) == (0, -1)
        assert intent_axes({MoveIntent.BACK}) == (0, 1)
        assert intent_axes({MoveIntent.LEFT}) == (-1, 0)
        assert intent_axes({MoveIntent.RIGHT}) == (1, 0)

    def test_opposites_cancel(self):
        assert intent_axes({MoveIntent.LEFT, MoveIntent.RIGHT}) == (0, 0)
        assert intent_axes({MoveIntent.FORWARD, MoveIntent.BACK, MoveIntent.RIGHT}) == (1, 0)


class TestSolve:
    """Tests for MovementSolver.solve()."""

    def test_no_intent_no_move(self, solver):
        result = solver.solve(Vec3(0, 0, 0), set(), 1 / 60)
        assert not result.moved
        assert result.new_heading is None
        assert result.new_pos == Vec3(0, 0, 0)

    def test_forward_moves_toward_goal(self, solver):
        result = solver.solve(Vec3(0, 0, 0), {MoveIntent.FORWARD}, 0.5)
        assert result.new_pos.z == pytest.approx(-4.0)
        assert result.new_pos.x == pytest.approx(0.0)
        assert result.new_heading == pytest.approx(math.pi)

    def test_right_heading(self, solver):
        result = solver.solve(Vec3(0, 0, 0), {MoveIntent.RIGHT}, 0.5)
        assert result.new_heading == pytest.approx(math.pi / 2)

    def test_diagonal_same_speed(self, solver):
        """Diagonal movement is normalized, not faster."""
        result = solver.solve(Vec3(0, 0, 0), {MoveIntent.FORWARD, MoveIntent.LEFT}, 1.0)
        assert result.delta.length() == pytest.approx(8.0)

    def test_clamped_at_boundary(self, solver):
        result = solver.solve(Vec3(59.9, 0, 0), {MoveIntent.RIGHT}, 1.0)
        assert result.new_pos.x == pytest.approx(60.0)
        assert result.hit_boundary

    def test_pinned_at_boundary_does_not_turn(self, solver):
        """Pushing into a wall you're already on is not a move."""
        result = solver.solve(Vec3(0, 0, -100.0), {MoveIntent.FORWARD}, 1.0)
        assert not result.moved
        assert result.new_heading is None

    def test_zero_dt(self, solver):
        assert not solver.solve(Vec3(0, 0, 0), {MoveIntent.FORWARD}, 0.0).moved
