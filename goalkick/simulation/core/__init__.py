"""Core layer - foundational types and utilities."""

from .vec3 import Axis, Vec3
from .field import Pitch
from .entities import (
    Ball,
    BallSnapshot,
    BallState,
    InputAction,
    Locomotion,
    MoveIntent,
    Player,
    PlayerSnapshot,
    ScoreState,
)
from .clock import Clock
from .events import Event, EventType, EventBus
from .scheduler import ScheduledAction, ScheduledEvent, Scheduler
from .phases import BallStateMachine, InvalidBallTransition

__all__ = [
    "Axis",
    "Vec3",
    "Pitch",
    "Ball",
    "BallSnapshot",
    "BallState",
    "InputAction",
    "Locomotion",
    "MoveIntent",
    "Player",
    "PlayerSnapshot",
    "ScoreState",
    "Clock",
    "Event",
    "EventType",
    "EventBus",
    "ScheduledAction",
    "ScheduledEvent",
    "Scheduler",
    "BallStateMachine",
    "InvalidBallTransition",
]
