"""Deferred actions on simulation time.

Kick resolution and the end of the kick pose happen a fixed time after
the kick is triggered. They are queued here and released by the match
loop as simulation time passes, so tests can step time without sleeping.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


# Floating point slack when comparing accumulated tick time to fire times
TIME_EPSILON = 1e-9


class ScheduledAction(str, Enum):
    """What a scheduled event does when it fires."""
    KICK_IMPULSE = "kick_impulse"  # Resolve the kick and push the ball
    POSE_RESET = "pose_reset"      # Kick animation finished, back to idle


@dataclass
class ScheduledEvent:
    """A single deferred action.

    Attributes:
        fire_at: Simulation time (seconds) at which the event is due
        action: What to do
        seq: Insertion order, breaks ties between equal fire times
        payload: Action-specific data
        cancelled: Set when removed before firing
    """
    fire_at: float
    action: ScheduledAction
    seq: int
    payload: dict[str, Any] = field(default_factory=dict)
    cancelled: bool = False

    def is_due(self, now: float) -> bool:
        return now + TIME_EPSILON >= self.fire_at


class Scheduler:
    """Queue of ScheduledEvents ordered by fire time.

    Usage:
        scheduler = Scheduler()
        scheduler.schedule(ScheduledAction.KICK_IMPULSE, delay=0.75, now=clock.current_time)

        # Each tick:
        for event in scheduler.pop_due(clock.current_time):
            dispatch(event)
    """

    def __init__(self) -> None:
        self._queue: list[ScheduledEvent] = []
        self._counter = itertools.count()

    def schedule(
        self,
        action: ScheduledAction,
        delay: float,
        now: float,
        **payload: Any,
    ) -> ScheduledEvent:
        """Queue an action to fire ``delay`` seconds after ``now``."""
        event = ScheduledEvent(
            fire_at=now + max(0.0, delay),
            action=action,
            seq=next(self._counter),
            payload=payload,
        )
        self._queue.append(event)
        self._queue.sort(key=lambda e: (e.fire_at, e.seq))
        return event

    def cancel(self, event: ScheduledEvent) -> bool:
        """Cancel a single pending event. Returns False if it was not pending."""
        if event not in self._queue:
            return False
        event.cancelled = True
        self._queue.remove(event)
        return True

    def cancel_action(self, action: ScheduledAction) -> int:
        """Cancel every pending event of one kind. Returns how many were removed."""
        removed = [e for e in self._queue if e.action == action]
        for event in removed:
            event.cancelled = True
        self._queue = [e for e in self._queue if e.action != action]
        return len(removed)

    def pop_due(self, now: float) -> list[ScheduledEvent]:
        """Remove and return all events due at ``now``, oldest first."""
        due: list[ScheduledEvent] = []
        while self._queue and self._queue[0].is_due(now):
            due.append(self._queue.pop(0))
        return due

    def pending(self, action: Optional[ScheduledAction] = None) -> list[ScheduledEvent]:
        """Pending events, optionally filtered by action."""
        if action is None:
            return list(self._queue)
        return [e for e in self._queue if e.action == action]

    def next_fire_time(self) -> Optional[float]:
        """Fire time of the earliest pending event, or None."""
        if not self._queue:
            return None
        return self._queue[0].fire_at

    def clear(self) -> None:
        """Drop every pending event."""
        for event in self._queue:
            event.cancelled = True
        self._queue.clear()

    def __len__(self) -> int:
        return len(self._queue)
