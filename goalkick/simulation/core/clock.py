"""Simulation clock.

Frame deltas come from the caller, so ticks are not evenly spaced.
Nothing here reads the wall clock.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ClockMark:
    """When a named moment happened, in both time and ticks."""
    time: float
    tick: int


@dataclass
class Clock:
    """Elapsed simulation time and tick count.

    Attributes:
        default_dt: Frame delta used when tick() gets none
        current_time: Seconds since start or last reset
        tick_count: Frames since start or last reset
        last_dt: Delta applied by the latest tick
    """
    default_dt: float = 1.0 / 60.0
    current_time: float = 0.0
    tick_count: int = 0
    last_dt: float = 0.0

    _marks: dict[str, ClockMark] = field(default_factory=dict)

    def tick(self, dt: Optional[float] = None) -> float:
        """Advance one frame and return the delta actually applied.

        A negative delta still counts as a frame but adds no time.
        """
        applied = max(0.0, self.default_dt if dt is None else dt)
        self.tick_count += 1
        self.current_time += applied
        self.last_dt = applied
        return applied

    def reset(self) -> None:
        self.current_time = 0.0
        self.tick_count = 0
        self.last_dt = 0.0
        self._marks.clear()

    # =========================================================================
    # Marks
    # =========================================================================

    def mark_event(self, name: str) -> ClockMark:
        """Remember the current moment under ``name`` (replacing any older mark)."""
        mark = ClockMark(time=self.current_time, tick=self.tick_count)
        self._marks[name] = mark
        return mark

    def time_since(self, name: str) -> Optional[float]:
        """Seconds since the mark, or None if never marked."""
        mark = self._marks.get(name)
        if mark is None:
            return None
        return self.current_time - mark.time

    def ticks_since(self, name: str) -> Optional[int]:
        """Frames since the mark, or None if never marked."""
        mark = self._marks.get(name)
        if mark is None:
            return None
        return self.tick_count - mark.tick

    def format_time(self) -> str:
        return f"{self.current_time:.2f}s (tick {self.tick_count})"

    def __repr__(self) -> str:
        return f"Clock(time={self.current_time:.3f}s, tick={self.tick_count})"
