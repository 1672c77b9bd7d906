from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.model import RoomEntry
from ..common.datetime_utils import CivilCalendar
from ..common.logging import get_logger
from ..common.records import SkippedRecord
from ..core.constants import DEFAULT_MATCH_WINDOW_MINUTES
from ..core.enums import ArrivalStatus, PairingMode, ScheduleStatus
from ..schedules.model import Schedule
from .factory import ArrivalStrategyFactory
from .model import ArrivalComparison, OverlapRecord, ReconciliationResult
from .sanity import usable_entries, usable_schedules

logger = get_logger(__name__)


class ReconciliationEngine:
    """Compare planned shifts with recorded room entries.

    Produces the overlap hours of every matching (entry, schedule) pair and the
    arrival classification of every entry. Records that cannot be used are
    skipped and reported, never raised. Each call is independent of the previous
    ones.
    """

    def __init__(
        self,
        *,
        calendar: Optional[CivilCalendar] = None,
        strategy_factory: Optional[ArrivalStrategyFactory] = None,
        match_window_minutes: int = DEFAULT_MATCH_WINDOW_MINUTES,
    ):
        self._calendar = calendar or CivilCalendar()
        self._factory = strategy_factory or ArrivalStrategyFactory()
        self._match_window = timedelta(minutes=int(match_window_minutes))

    def reconcile(
        self,
        schedules: Iterable[Schedule],
        entries: Iterable[RoomEntry],
        *,
        pairing: PairingMode = PairingMode.USER,
    ) -> ReconciliationResult:
        skipped: list[SkippedRecord] = []
        good_schedules = usable_schedules(schedules, skipped)
        good_entries = usable_entries(entries, skipped)

        good_schedules.sort(key=lambda s: (s.start, s.schedule_id or 0))
        good_entries.sort(key=lambda e: (e.started_at, e.entry_id))

        overlaps = self._overlaps(good_schedules, good_entries, pairing)
        comparisons = tuple(self._compare(entry, good_schedules) for entry in good_entries)
        late = sum(1 for c in comparisons if c.status == ArrivalStatus.LATE)
        logger.debug(
            "reconciliation_done",
            schedules=len(good_schedules),
            entries=len(good_entries),
            overlaps=len(overlaps),
            late=late,
            skipped=len(skipped),
        )

        return ReconciliationResult(
            overlaps=overlaps,
            comparisons=comparisons,
            late_arrivals=late,
            skipped=tuple(skipped),
        )

    def _overlaps(self, schedules: Sequence[Schedule], entries: Sequence[RoomEntry], pairing: PairingMode):
        # Pairwise scan, O(entries x schedules); fine at reporting-window sizes.
        out = []
        for entry in entries:
            entry_interval = entry.interval
            if entry_interval is None:
                continue
            entry_period = self._calendar.format_period(entry.started_at, entry.ended_at)
            entry_date = self._calendar.civil_date(entry.started_at)
            for schedule in schedules:
                if pairing == PairingMode.USER and schedule.user_id != entry.user_id:
                    continue
                if pairing == PairingMode.ROOM and schedule.room_id != entry.room_id:
                    continue
                hours = entry_interval.intersect_hours(schedule.interval)
                if hours <= 0:
                    continue
                out.append(
                    OverlapRecord(
                        entry_id=entry.entry_id,
                        schedule_id=schedule.schedule_id,
                        user_id=entry.user_id,
                        room_id=entry.room_id,
                        overlap_hours=hours,
                        entry_period=entry_period,
                        schedule_period=self._calendar.format_period(schedule.start, schedule.end),
                        entry_date=entry_date,
                    )
                )
        return tuple(out)

    def nearest_schedule(self, entry: RoomEntry, schedules: Iterable[Schedule]) -> Optional[Schedule]:
        """Same-user, non-cancelled schedule starting closest to the check-in, within the match window."""
        best = None
        best_key = None
        for schedule in schedules:
            if schedule.user_id != entry.user_id or schedule.status == ScheduleStatus.CANCELLED:
                continue
            distance = abs(entry.started_at - schedule.start)
            if distance >= self._match_window:
                continue
            key = (distance, schedule.start, schedule.schedule_id or 0)
            if best_key is None or key < best_key:
                best, best_key = schedule, key
        return best

    def _compare(self, entry: RoomEntry, schedules: Sequence[Schedule]) -> ArrivalComparison:
        schedule = self.nearest_schedule(entry, schedules)
        strategy = self._factory.for_arrival(entry=entry, schedule=schedule)
        decision = strategy.decide(entry=entry, schedule=schedule)
        return ArrivalComparison(
            entry_id=entry.entry_id,
            user_id=entry.user_id,
            room_id=entry.room_id,
            status=decision.status,
            entry_date=self._calendar.civil_date(entry.started_at),
            entry_period=self._calendar.format_period(entry.started_at, entry.ended_at),
            schedule_id=schedule.schedule_id if schedule else None,
            schedule_period=self._calendar.format_period(schedule.start, schedule.end) if schedule else None,
            difference_minutes=decision.difference_minutes,
            note=decision.note,
        )
