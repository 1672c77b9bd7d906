from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..common.records import SkippedRecord
from ..core.enums import WorkedHoursSource


def _r(value: float) -> float:
    return round(float(value), 2)


@dataclass(frozen=True)
class DayBucket:
    day: date
    entries: int = 0
    exits: int = 0
    hours: float = 0.0

    def to_dict(self) -> dict:
        return {"day": self.day.isoformat(), "entries": self.entries, "exits": self.exits, "hours": _r(self.hours)}


@dataclass(frozen=True)
class RoomShare:
    room_id: int
    room_name: str
    hours: float
    entries: int
    active_entries: int
    percentage: float

    def to_dict(self) -> dict:
        return {
            "room_id": self.room_id,
            "room_name": self.room_name,
            "hours": _r(self.hours),
            "entries": self.entries,
            "active_entries": self.active_entries,
            "percentage": _r(self.percentage),
        }


@dataclass(frozen=True)
class AggregateReport:
    late_arrivals_count: int = 0
    assigned_hours: float = 0.0
    worked_hours: float = 0.0
    hours_by_user: dict = field(default_factory=dict)
    hours_by_schedule: dict = field(default_factory=dict)
    days: tuple[DayBucket, ...] = ()
    rooms: tuple[RoomShare, ...] = ()
    worked_hours_source: WorkedHoursSource = WorkedHoursSource.OVERLAP
    skipped_records: tuple[SkippedRecord, ...] = ()

    @property
    def remaining_hours(self) -> float:
        return max(0.0, self.assigned_hours - self.worked_hours)

    @property
    def compliance_percentage(self) -> float:
        if self.assigned_hours <= 0:
            return 0.0
        return self.worked_hours / self.assigned_hours * 100

    def to_dict(self) -> dict:
        return {
            "late_arrivals_count": self.late_arrivals_count,
            "assigned_hours": _r(self.assigned_hours),
            "worked_hours": _r(self.worked_hours),
            "remaining_hours": _r(self.remaining_hours),
            "compliance_percentage": _r(self.compliance_percentage),
            "hours_by_user": {str(k): _r(v) for k, v in self.hours_by_user.items()},
            "hours_by_schedule": {str(k): _r(v) for k, v in self.hours_by_schedule.items()},
            "days": [d.to_dict() for d in self.days],
            "rooms": [r.to_dict() for r in self.rooms],
            "worked_hours_source": self.worked_hours_source.value,
            "skipped_records": [s.to_dict() for s in self.skipped_records],
        }


@dataclass(frozen=True)
class ComparisonSummary:
    on_time: int = 0
    early: int = 0
    late: int = 0
    no_registration: int = 0

    def to_dict(self) -> dict:
        return {
            "on_time": self.on_time,
            "early": self.early,
            "late": self.late,
            "no_registration": self.no_registration,
        }
