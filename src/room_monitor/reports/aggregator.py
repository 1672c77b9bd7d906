from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ..attendance.model import RoomEntry
from ..common.datetime_utils import CivilCalendar
from ..common.logging import get_logger
from ..common.records import SkippedRecord
from ..core.enums import ArrivalStatus, WorkedHoursSource
from ..reconciliation.model import ArrivalComparison, OverlapRecord
from ..reconciliation.sanity import usable_entries, usable_schedules
from ..schedules.model import Schedule
from .filters import ReportFilters
from .model import AggregateReport, ComparisonSummary, DayBucket, RoomShare

logger = get_logger(__name__)


class Aggregator:
    """Summarise reconciled data for the reports screen.

    ``overlaps=None`` means reconciliation was not run for this window; worked hours
    then fall back to the duration of the closed entries.
    """

    def __init__(self, calendar: Optional[CivilCalendar] = None):
        self._calendar = calendar or CivilCalendar()

    def aggregate(
        self,
        overlaps: Optional[Iterable[OverlapRecord]],
        schedules: Iterable[Schedule],
        entries: Iterable[RoomEntry],
        filters: Optional[ReportFilters] = None,
        *,
        late_arrivals: int = 0,
        skipped: Sequence[SkippedRecord] = (),
    ) -> AggregateReport:
        filters = filters or ReportFilters()
        skipped_records = list(skipped)
        # Records already skipped by reconciliation are not listed twice.
        fresh: list[SkippedRecord] = []
        schedules = [s for s in usable_schedules(schedules, fresh) if filters.schedule(s, self._calendar)]
        entries = [e for e in usable_entries(entries, fresh) if filters.entry(e, self._calendar)]
        known = {(s.kind, s.record_id) for s in skipped_records}
        skipped_records.extend(s for s in fresh if (s.kind, s.record_id) not in known)

        if overlaps is None:
            source = WorkedHoursSource.ENTRY_DURATION
            logger.warning("worked_hours_fallback", entries=len(entries))
            pairs = None
        else:
            source = WorkedHoursSource.OVERLAP
            pairs = [o for o in overlaps if filters.overlap(o)]

        assigned = sum(s.duration_hours() for s in schedules)
        if pairs is None:
            worked = sum(e.duration_hours() for e in entries)
        else:
            worked = sum(o.overlap_hours for o in pairs)

        return AggregateReport(
            late_arrivals_count=int(late_arrivals),
            assigned_hours=assigned,
            worked_hours=worked,
            hours_by_user=self._hours_by_user(pairs, entries),
            hours_by_schedule=self._hours_by_schedule(pairs, schedules),
            days=self._days(pairs, entries),
            rooms=self._rooms(pairs, entries, filters),
            worked_hours_source=source,
            skipped_records=tuple(skipped_records),
        )

    @staticmethod
    def _hours_by_user(pairs, entries) -> dict:
        out: dict[int, float] = defaultdict(float)
        if pairs is None:
            for e in entries:
                out[e.user_id] += e.duration_hours()
        else:
            for o in pairs:
                out[o.user_id] += o.overlap_hours
        return dict(sorted(out.items()))

    @staticmethod
    def _hours_by_schedule(pairs, schedules) -> dict:
        out: dict[int, float] = defaultdict(float)
        if pairs is None:
            for s in schedules:
                if s.schedule_id is not None:
                    out[s.schedule_id] += s.duration_hours()
        else:
            for o in pairs:
                if o.schedule_id is not None:
                    out[o.schedule_id] += o.overlap_hours
        return dict(sorted(out.items()))

    def _days(self, pairs, entries) -> tuple[DayBucket, ...]:
        arrivals: dict = defaultdict(int)
        exits: dict = defaultdict(int)
        hours: dict = defaultdict(float)

        for e in entries:
            day = self._calendar.civil_date(e.started_at)
            arrivals[day] += 1
            if e.ended_at is not None:
                exits[day] += 1
            if pairs is None:
                hours[day] += e.duration_hours()

        if pairs is not None:
            for o in pairs:
                hours[o.entry_date] += o.overlap_hours

        days = sorted(set(arrivals) | set(hours))
        return tuple(DayBucket(day=d, entries=arrivals[d], exits=exits[d], hours=hours[d]) for d in days)

    @staticmethod
    def _rooms(pairs, entries, filters: ReportFilters) -> tuple[RoomShare, ...]:
        names: dict[int, str] = {}
        counts: dict[int, int] = defaultdict(int)
        active: dict[int, int] = defaultdict(int)
        hours: dict[int, float] = defaultdict(float)

        for e in entries:
            names.setdefault(e.room_id, e.room_label)
            counts[e.room_id] += 1
            if e.is_open:
                active[e.room_id] += 1
            if pairs is None:
                hours[e.room_id] += e.duration_hours()

        if pairs is not None:
            for o in pairs:
                hours[o.room_id] += o.overlap_hours

        if filters.room_id is not None:
            room_id = filters.room_id
            return (
                RoomShare(
                    room_id=room_id,
                    room_name=names.get(room_id, f"Room {room_id}"),
                    hours=hours[room_id],
                    entries=counts[room_id],
                    active_entries=active[room_id],
                    percentage=100.0,
                ),
            )

        total = sum(hours.values())
        rooms = set(counts) | set(hours)
        shares = [
            RoomShare(
                room_id=room_id,
                room_name=names.get(room_id, f"Room {room_id}"),
                hours=hours[room_id],
                entries=counts[room_id],
                active_entries=active[room_id],
                percentage=(hours[room_id] / total * 100) if total > 0 else 0.0,
            )
            for room_id in rooms
        ]
        shares.sort(key=lambda r: (-r.hours, r.room_id))
        return tuple(shares)


def summarize_comparisons(comparisons: Iterable[ArrivalComparison]) -> ComparisonSummary:
    counts = defaultdict(int)
    for c in comparisons:
        counts[c.status] += 1
    return ComparisonSummary(
        on_time=counts[ArrivalStatus.ON_TIME],
        early=counts[ArrivalStatus.EARLY],
        late=counts[ArrivalStatus.LATE],
        no_registration=counts[ArrivalStatus.NO_REGISTRATION],
    )
