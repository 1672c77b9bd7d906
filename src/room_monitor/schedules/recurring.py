from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, timedelta

from ..common.datetime_utils import CivilCalendar, iter_dates
from ..core.constants import DEFAULT_MAX_RECURRING_DAYS
from ..core.enums import MidnightPolicy, ScheduleStatus
from ..core.exceptions import ValidationError
from .model import Schedule


@dataclass
class RecurringExpander:
    """Repeat a template shift on every matching weekday of a date range.

    Weekday and time-of-day are read in the civil calendar. The generated
    schedules are candidates only: no conflict checks, no deduplication.
    """

    calendar: CivilCalendar = field(default_factory=CivilCalendar)
    midnight_policy: MidnightPolicy = MidnightPolicy.REJECT
    max_range_days: int = DEFAULT_MAX_RECURRING_DAYS

    def expand(self, base: Schedule, range_start: date, range_end: date) -> list[Schedule]:
        self._check_range(range_start, range_end)

        start_time = self.calendar.time_of_day(base.start)
        end_time = self.calendar.time_of_day(base.end)
        weekday = self.calendar.weekday(base.start)

        crosses_midnight = end_time <= start_time
        if crosses_midnight and self.midnight_policy == MidnightPolicy.REJECT:
            raise ValidationError("The base shift crosses midnight and cannot be repeated")
        end_offset = timedelta(days=1) if crosses_midnight else timedelta(0)

        out: list[Schedule] = []
        for day in iter_dates(range_start, range_end):
            if day.weekday() != weekday:
                continue
            out.append(
                replace(
                    base,
                    schedule_id=None,
                    start=self.calendar.combine(day, start_time),
                    end=self.calendar.combine(day + end_offset, end_time),
                    status=ScheduleStatus.ACTIVE,
                    recurring=True,
                )
            )
        return out

    def _check_range(self, range_start: date, range_end: date) -> None:
        if range_end < range_start:
            raise ValidationError("The end of the range must not be before its start")
        if (range_end - range_start).days + 1 > self.max_range_days:
            raise ValidationError(f"The range cannot exceed {self.max_range_days} days")
