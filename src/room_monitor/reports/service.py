from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.repository import RoomEntryRepository
from ..common.datetime_utils import CivilCalendar
from ..common.logging import get_logger
from ..core.constants import TOPIC_RECONCILIATION_COMPLETED
from ..notifications.channel import NotificationChannel
from ..reconciliation.engine import ReconciliationEngine
from ..reconciliation.model import ArrivalComparison, OverlapRecord, ReconciliationResult
from ..schedules.repository import ScheduleRepository
from .aggregator import Aggregator, summarize_comparisons
from .filters import ReportFilters
from .model import AggregateReport, ComparisonSummary

logger = get_logger(__name__)


@dataclass(frozen=True)
class TurnComparisonData:
    rows: tuple[ArrivalComparison, ...]
    summary: ComparisonSummary

    def to_dict(self) -> dict:
        return {"rows": [r.to_dict() for r in self.rows], "summary": self.summary.to_dict()}


class ReportService:
    """Fetch a reporting window, reconcile it and aggregate the result."""

    def __init__(
        self,
        schedules: ScheduleRepository,
        entries: RoomEntryRepository,
        *,
        engine: ReconciliationEngine,
        aggregator: Aggregator,
        calendar: Optional[CivilCalendar] = None,
        notifier: Optional[NotificationChannel] = None,
    ):
        self._schedules = schedules
        self._entries = entries
        self._engine = engine
        self._aggregator = aggregator
        self._calendar = calendar or CivilCalendar()
        self._notifier = notifier

    def _snapshot(self, filters: ReportFilters):
        start, end = filters.window(self._calendar)
        fetched = self._schedules.list_range(start=start, end=end, user_id=filters.user_id, room_id=filters.room_id)
        # Shifts are counted on the civil date they start, for assigned and worked hours alike.
        schedules = tuple(s for s in fetched if filters.schedule(s, self._calendar))
        entries = tuple(self._entries.list_range(start=start, end=end, user_id=filters.user_id, room_id=filters.room_id))
        return schedules, entries

    def _reconcile(self, filters: ReportFilters):
        schedules, entries = self._snapshot(filters)
        result = self._engine.reconcile(schedules, entries, pairing=filters.pairing)
        if self._notifier:
            self._notifier.publish(
                TOPIC_RECONCILIATION_COMPLETED,
                {
                    "filters": filters.to_dict(),
                    "overlaps": len(result.overlaps),
                    "late_arrivals": result.late_arrivals,
                    "skipped": len(result.skipped),
                },
            )
        return schedules, entries, result

    def reconcile(self, filters: Optional[ReportFilters] = None) -> ReconciliationResult:
        _, _, result = self._reconcile(filters or ReportFilters())
        return result

    def summary(self, filters: Optional[ReportFilters] = None) -> AggregateReport:
        filters = filters or ReportFilters()
        schedules, entries, result = self._reconcile(filters)
        report = self._aggregator.aggregate(
            result.overlaps,
            schedules,
            entries,
            filters,
            late_arrivals=result.late_arrivals,
            skipped=result.skipped,
        )
        logger.info(
            "report_built",
            assigned_hours=round(report.assigned_hours, 2),
            worked_hours=round(report.worked_hours, 2),
            late_arrivals=report.late_arrivals_count,
        )
        return report

    def overlaps(self, filters: Optional[ReportFilters] = None) -> tuple[OverlapRecord, ...]:
        filters = filters or ReportFilters()
        _, _, result = self._reconcile(filters)
        return tuple(o for o in result.overlaps if filters.overlap(o))

    def turn_comparison(self, filters: Optional[ReportFilters] = None) -> TurnComparisonData:
        filters = filters or ReportFilters()
        _, _, result = self._reconcile(filters)
        rows = tuple(c for c in result.comparisons if filters.comparison(c))
        return TurnComparisonData(rows=rows, summary=summarize_comparisons(rows))
