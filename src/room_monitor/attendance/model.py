from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..intervals.model import Interval


@dataclass(frozen=True)
class RoomEntry:
    """Recorded presence of a monitor in a room (check-in / check-out)."""

    entry_id: int
    user_id: int
    room_id: int
    started_at: datetime
    ended_at: Optional[datetime] = None
    user_name: Optional[str] = None
    room_name: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.ended_at is None

    @property
    def interval(self) -> Optional[Interval]:
        """None while the entry is still open."""
        if self.ended_at is None:
            return None
        return Interval(self.started_at, self.ended_at)

    def duration_hours(self) -> float:
        interval = self.interval
        return interval.duration_hours() if interval else 0.0

    @property
    def room_label(self) -> str:
        return self.room_name or f"Room {self.room_id}"
