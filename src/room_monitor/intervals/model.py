from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import hours_between
from ..core.enums import WindowState


@dataclass(frozen=True)
class Interval:
    """Time range between two aware instants."""

    start: datetime
    end: datetime

    @property
    def is_valid(self) -> bool:
        return self.end > self.start

    def duration_hours(self) -> float:
        return max(0.0, hours_between(self.start, self.end))

    def overlaps(self, other: "Interval") -> bool:
        # Touching intervals (a.end == b.start) do not overlap.
        return self.start < other.end and other.start < self.end

    def intersect_hours(self, other: "Interval") -> float:
        latest_start = max(self.start, other.start)
        earliest_end = min(self.end, other.end)
        return max(0.0, hours_between(latest_start, earliest_end))


@dataclass(frozen=True)
class WindowInfo:
    state: WindowState
    minutes_until_start: Optional[int] = None
    minutes_until_end: Optional[int] = None


def schedule_window_state(start: datetime, end: datetime, now: datetime) -> WindowInfo:
    """Where ``now`` sits relative to a shift: running, upcoming or over."""
    if end <= start:
        return WindowInfo(state=WindowState.INVALID)
    if now > end:
        return WindowInfo(state=WindowState.EXPIRED)
    if now >= start:
        return WindowInfo(
            state=WindowState.ACTIVE,
            minutes_until_end=int((end - now).total_seconds() // 60),
        )
    return WindowInfo(
        state=WindowState.UPCOMING,
        minutes_until_start=int((start - now).total_seconds() // 60),
    )


def format_minutes(minutes: int) -> str:
    """Human readable remaining time, e.g. ``2 hours and 5 minutes``."""
    if minutes < 0:
        return "Time is up"
    if minutes < 60:
        return f"{minutes} minutes"

    hours, rest = divmod(minutes, 60)
    unit = "hour" if hours == 1 else "hours"
    if rest == 0:
        return f"{hours} {unit}"
    return f"{hours} {unit} and {rest} minutes"
