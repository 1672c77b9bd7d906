from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ConflictReason, ScheduleStatus
from ..intervals.model import Interval


@dataclass(frozen=True)
class Schedule:
    """Planned assignment of one monitor to one room for one interval."""

    schedule_id: Optional[int]
    user_id: int
    room_id: int
    start: datetime
    end: datetime
    status: ScheduleStatus = ScheduleStatus.ACTIVE
    recurring: bool = False
    notes: Optional[str] = None
    user_name: Optional[str] = None
    room_name: Optional[str] = None

    @property
    def interval(self) -> Interval:
        return Interval(self.start, self.end)

    @property
    def is_active(self) -> bool:
        return self.status == ScheduleStatus.ACTIVE

    def duration_hours(self) -> float:
        return self.interval.duration_hours()

    @property
    def monitor_label(self) -> str:
        return self.user_name or f"Monitor {self.user_id}"

    @property
    def room_label(self) -> str:
        return self.room_name or f"Room {self.room_id}"

    def to_dict(self) -> dict:
        return {
            "id": self.schedule_id,
            "user_id": self.user_id,
            "room_id": self.room_id,
            "start_datetime": self.start.isoformat(),
            "end_datetime": self.end.isoformat(),
            "status": self.status.value,
            "recurring": self.recurring,
            "notes": self.notes,
            "user_name": self.user_name,
            "room_name": self.room_name,
        }


@dataclass(frozen=True)
class ScheduleConflict:
    """Typed rejection returned by the conflict validator."""

    reason: ConflictReason
    message: str
    conflicting_schedule_id: Optional[int] = None
    monitor_name: Optional[str] = None
    room_name: Optional[str] = None
    period: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "reason": self.reason.value,
            "message": self.message,
            "conflicting_schedule_id": self.conflicting_schedule_id,
            "monitor_name": self.monitor_name,
            "room_name": self.room_name,
            "period": self.period,
        }
