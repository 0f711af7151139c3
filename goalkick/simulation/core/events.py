"""Simulation events.

Systems announce what happened on an EventBus: state changes, ignored
commands, resets. The match, diagnostics and presentation listen; no
listener writes back into the emitting system.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional


class EventType(str, Enum):
    """Everything the simulation announces."""

    # =========================================================================
    # Kick
    # =========================================================================
    KICK_TRIGGERED = "kick_triggered"
    KICK_RESOLVED = "kick_resolved"
    KICK_IGNORED = "kick_ignored"
    KICK_POSE_ENDED = "kick_pose_ended"

    # =========================================================================
    # Ball
    # =========================================================================
    BALL_STATE_CHANGED = "ball_state_changed"
    ENTERED_GOAL_AREA = "entered_goal_area"
    GOAL_FACE_CLAMP = "goal_face_clamp"
    GOAL_SCORED = "goal_scored"
    BALL_OUT_OF_PLAY = "ball_out_of_play"
    BALL_RESET = "ball_reset"

    # =========================================================================
    # Player
    # =========================================================================
    LOCOMOTION_CHANGED = "locomotion_changed"
    PLAYER_RESET = "player_reset"

    # =========================================================================
    # Match
    # =========================================================================
    GAME_RESET = "game_reset"


@dataclass
class Event:
    """Something that happened at a given tick.

    Attributes:
        type: What happened
        tick: Clock tick of the emitting update
        time: Simulation time in seconds
        source: Emitting system ("ball", "player", "match"), if known
        data: Event-specific values (plain types, safe to serialize)
        description: Short human-readable text
    """
    type: EventType
    tick: int
    time: float
    source: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)
    description: str = ""

    def __str__(self) -> str:
        text = f"[{self.time:.2f}s] {self.type.value}"
        if self.source:
            text += f" ({self.source})"
        if self.description:
            text += f" - {self.description}"
        return text

    def format_detailed(self) -> str:
        """Multi-line dump including the data payload."""
        lines = [
            f"Event: {self.type.value}",
            f"  Time: {self.time:.3f}s (tick {self.tick})",
        ]
        if self.source:
            lines.append(f"  Source: {self.source}")
        if self.description:
            lines.append(f"  Description: {self.description}")
        lines.extend(f"  {key}: {value}" for key, value in self.data.items())
        return "\n".join(lines)


EventHandler = Callable[[Event], None]

# Subscription key for handlers that want every event type
ALL_EVENTS = None


class EventBus:
    """Synchronous publish/subscribe with an optional history.

    Handlers run in subscription order, typed handlers before catch-all
    ones. A handler may subscribe or unsubscribe while being notified;
    the change applies from the next emit.

    Usage:
        bus = EventBus()
        bus.subscribe(EventType.GOAL_SCORED, on_goal)
        bus.subscribe_all(logger.on_event)
        bus.emit_simple(EventType.KICK_TRIGGERED, tick=0, time=0.0, source="player")
    """

    def __init__(self) -> None:
        self._subscribers: dict[Optional[EventType], list[EventHandler]] = defaultdict(list)
        self._history: list[Event] = []
        self._recording = True

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        self._subscribers[event_type].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        self._subscribers[ALL_EVENTS].append(handler)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        self._remove(event_type, handler)

    def unsubscribe_all(self, handler: EventHandler) -> None:
        """Remove a catch-all handler."""
        self._remove(ALL_EVENTS, handler)

    def _remove(self, key: Optional[EventType], handler: EventHandler) -> None:
        handlers = self._subscribers.get(key)
        if handlers and handler in handlers:
            handlers.remove(handler)

    # =========================================================================
    # Emitting
    # =========================================================================

    def emit(self, event: Event) -> None:
        if self._recording:
            self._history.append(event)

        targets = [*self._subscribers.get(event.type, ()), *self._subscribers.get(ALL_EVENTS, ())]
        for handler in targets:
            handler(event)

    def emit_simple(
        self,
        event_type: EventType,
        tick: int,
        time: float,
        description: str = "",
        source: Optional[str] = None,
        **data: Any,
    ) -> Event:
        """Build an Event from keyword data and emit it."""
        event = Event(
            type=event_type,
            tick=tick,
            time=time,
            source=source,
            data=data,
            description=description,
        )
        self.emit(event)
        return event

    # =========================================================================
    # History
    # =========================================================================

    @property
    def history(self) -> list[Event]:
        return self._history

    def set_recording(self, enabled: bool) -> None:
        self._recording = enabled

    def clear_history(self) -> None:
        self._history.clear()

    def get_events_by_type(self, event_type: EventType) -> list[Event]:
        return [event for event in self._history if event.type == event_type]

    def format_history(self, last_n: Optional[int] = None) -> str:
        """One line per recorded event, optionally only the newest ``last_n``."""
        events = self._history[-last_n:] if last_n else self._history
        return "\n".join(map(str, events))

    def __len__(self) -> int:
        return len(self._history)

    def __bool__(self) -> bool:
        # An empty history must not make `bus or EventBus()` pick a new bus
        return True
