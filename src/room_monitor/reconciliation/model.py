from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.records import SkippedRecord
from ..core.enums import ArrivalStatus


@dataclass(frozen=True)
class OverlapRecord:
    """Time shared by one schedule and one room entry."""

    entry_id: int
    schedule_id: Optional[int]
    user_id: int
    room_id: int
    overlap_hours: float
    entry_period: str
    schedule_period: str
    entry_date: date

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "schedule_id": self.schedule_id,
            "user_id": self.user_id,
            "room_id": self.room_id,
            "overlap_hours": round(self.overlap_hours, 4),
            "entry_period": self.entry_period,
            "schedule_period": self.schedule_period,
            "entry_date": self.entry_date.isoformat(),
        }


@dataclass(frozen=True)
class ArrivalComparison:
    """One row of the turn-comparison view."""

    entry_id: int
    user_id: int
    room_id: int
    status: ArrivalStatus
    entry_date: date
    entry_period: str
    schedule_id: Optional[int] = None
    schedule_period: Optional[str] = None
    difference_minutes: Optional[int] = None
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "user_id": self.user_id,
            "room_id": self.room_id,
            "status": self.status.value,
            "entry_date": self.entry_date.isoformat(),
            "entry_period": self.entry_period,
            "schedule_id": self.schedule_id,
            "schedule_period": self.schedule_period,
            "difference_minutes": self.difference_minutes,
            "note": self.note,
        }


@dataclass(frozen=True)
class ReconciliationResult:
    overlaps: tuple[OverlapRecord, ...] = ()
    comparisons: tuple[ArrivalComparison, ...] = ()
    late_arrivals: int = 0
    skipped: tuple[SkippedRecord, ...] = field(default_factory=tuple)
