from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..attendance.model import RoomEntry
from ..common.datetime_utils import CivilCalendar, parse_iso_date
from ..common.validators import optional_positive_id
from ..core.enums import PairingMode
from ..core.exceptions import ValidationError
from ..reconciliation.model import ArrivalComparison, OverlapRecord
from ..schedules.model import Schedule


@dataclass(frozen=True)
class ReportFilters:
    """Reporting window: civil date range (inclusive) plus optional room / monitor."""

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    room_id: Optional[int] = None
    user_id: Optional[int] = None

    def __post_init__(self):
        if self.date_from and self.date_to and self.date_to < self.date_from:
            raise ValidationError("date_to must not be before date_from")

    @classmethod
    def from_params(cls, params) -> "ReportFilters":
        """Build from query-string style values (``date_from=2024-01-01`` ...)."""
        date_from = params.get("date_from") or params.get("from_date")
        date_to = params.get("date_to") or params.get("to_date")
        return cls(
            date_from=parse_iso_date(date_from) if date_from else None,
            date_to=parse_iso_date(date_to) if date_to else None,
            room_id=optional_positive_id(params.get("room_id"), "Room"),
            user_id=optional_positive_id(params.get("user_id"), "Monitor"),
        )

    @property
    def pairing(self) -> PairingMode:
        # Without a monitor filter every shift in the room counts as coverage.
        return PairingMode.USER if self.user_id is not None else PairingMode.ROOM

    def window(self, calendar: CivilCalendar) -> tuple[Optional[datetime], Optional[datetime]]:
        """Instant bounds [start, end) of the civil date range."""
        start = calendar.start_of_day(self.date_from) if self.date_from else None
        end = calendar.start_of_day(self.date_to + timedelta(days=1)) if self.date_to else None
        return start, end

    def _in_range(self, day: date) -> bool:
        if self.date_from and day < self.date_from:
            return False
        if self.date_to and day > self.date_to:
            return False
        return True

    def _match(self, *, user_id: int, room_id: int, day: date) -> bool:
        if self.user_id is not None and user_id != self.user_id:
            return False
        if self.room_id is not None and room_id != self.room_id:
            return False
        return self._in_range(day)

    def schedule(self, schedule: Schedule, calendar: CivilCalendar) -> bool:
        return self._match(user_id=schedule.user_id, room_id=schedule.room_id, day=calendar.civil_date(schedule.start))

    def entry(self, entry: RoomEntry, calendar: CivilCalendar) -> bool:
        return self._match(user_id=entry.user_id, room_id=entry.room_id, day=calendar.civil_date(entry.started_at))

    def overlap(self, overlap: OverlapRecord) -> bool:
        return self._match(user_id=overlap.user_id, room_id=overlap.room_id, day=overlap.entry_date)

    def comparison(self, comparison: ArrivalComparison) -> bool:
        return self._match(user_id=comparison.user_id, room_id=comparison.room_id, day=comparison.entry_date)

    def to_dict(self) -> dict:
        return {
            "date_from": self.date_from.isoformat() if self.date_from else None,
            "date_to": self.date_to.isoformat() if self.date_to else None,
            "room_id": self.room_id,
            "user_id": self.user_id,
        }
