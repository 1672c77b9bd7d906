from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from room_monitor.attendance.memory_repository import InMemoryRoomEntryRepository
from room_monitor.attendance.model import RoomEntry
from room_monitor.common.datetime_utils import CivilCalendar
from room_monitor.core.constants import TOPIC_RECONCILIATION_COMPLETED
from room_monitor.core.enums import ArrivalStatus, ScheduleStatus
from room_monitor.notifications.channel import NotificationChannel
from room_monitor.reconciliation.engine import ReconciliationEngine
from room_monitor.reports.aggregator import Aggregator
from room_monitor.reports.filters import ReportFilters
from room_monitor.reports.service import ReportService
from room_monitor.schedules.memory_repository import InMemoryScheduleRepository
from room_monitor.schedules.model import Schedule

BOG = ZoneInfo("America/Bogota")


def _at(hour, minute=0, day=8):
    return datetime(2024, 1, day, hour, minute, tzinfo=BOG)


def _service():
    cal = CivilCalendar()
    schedules = InMemoryScheduleRepository(
        [
            Schedule(schedule_id=1, user_id=7, room_id=100, start=_at(9), end=_at(17)),
            Schedule(schedule_id=2, user_id=8, room_id=200, start=_at(9, day=9), end=_at(12, day=9)),
            Schedule(
                schedule_id=3, user_id=7, room_id=100, start=_at(9, day=10), end=_at(12, day=10),
                status=ScheduleStatus.CANCELLED,
            ),
        ]
    )
    entries = InMemoryRoomEntryRepository(
        [
            RoomEntry(entry_id=1, user_id=7, room_id=100, started_at=_at(9, 5), ended_at=_at(16, 30)),
            RoomEntry(entry_id=2, user_id=8, room_id=200, started_at=_at(9, 30, day=9), ended_at=_at(12, day=9)),
        ]
    )
    notifier = NotificationChannel()
    events = []
    notifier.subscribe(TOPIC_RECONCILIATION_COMPLETED, lambda topic, payload: events.append(payload))
    svc = ReportService(
        schedules,
        entries,
        engine=ReconciliationEngine(calendar=cal),
        aggregator=Aggregator(cal),
        calendar=cal,
        notifier=notifier,
    )
    return svc, events


def test_summary_for_one_monitor():
    svc, events = _service()

    report = svc.summary(ReportFilters(date_from=date(2024, 1, 8), date_to=date(2024, 1, 9), user_id=7))

    assert report.assigned_hours == 8
    assert report.worked_hours == pytest.approx(7 + 25 / 60)
    assert report.late_arrivals_count == 0
    assert events[-1]["filters"]["user_id"] == 7
    assert events[-1]["overlaps"] == 1


def test_summary_for_everyone_counts_late_arrival():
    svc, events = _service()

    report = svc.summary(ReportFilters(date_from=date(2024, 1, 8), date_to=date(2024, 1, 9)))

    assert report.assigned_hours == 11
    assert report.late_arrivals_count == 1
    assert len(events) == 1


def test_assigned_hours_include_every_status_in_window():
    svc, _ = _service()

    report = svc.summary(ReportFilters(date_from=date(2024, 1, 10), date_to=date(2024, 1, 10)))

    assert report.assigned_hours == 3
    assert report.worked_hours == 0


def test_overlaps_and_turn_comparison_rows():
    svc, _ = _service()
    filters = ReportFilters(room_id=200)

    overlaps = svc.overlaps(filters)
    comparison = svc.turn_comparison(filters)

    assert [o.entry_id for o in overlaps] == [2]
    assert overlaps[0].overlap_hours == 2.5
    assert [c.status for c in comparison.rows] == [ArrivalStatus.LATE]
    assert comparison.summary.late == 1
    assert comparison.to_dict()["rows"][0]["difference_minutes"] == 30


def test_reconcile_exposes_raw_result():
    svc, _ = _service()

    result = svc.reconcile()

    assert len(result.comparisons) == 2
    assert result.skipped == ()


def _overnight_service():
    cal = CivilCalendar()
    schedules = InMemoryScheduleRepository(
        [Schedule(schedule_id=1, user_id=7, room_id=100, start=_at(22, day=7), end=_at(2, day=8))]
    )
    entries = InMemoryRoomEntryRepository(
        [RoomEntry(entry_id=1, user_id=7, room_id=100, started_at=_at(0, day=8), ended_at=_at(2, day=8))]
    )
    return ReportService(
        schedules, entries, engine=ReconciliationEngine(calendar=cal), aggregator=Aggregator(cal), calendar=cal
    )


def test_shift_starting_the_day_before_is_left_out_on_both_sides():
    report = _overnight_service().summary(ReportFilters(date_from=date(2024, 1, 8), date_to=date(2024, 1, 8)))

    assert report.assigned_hours == 0
    assert report.worked_hours == 0
    assert report.hours_by_schedule == {}


def test_shift_counted_on_the_day_it_starts():
    report = _overnight_service().summary(ReportFilters(date_from=date(2024, 1, 7), date_to=date(2024, 1, 8)))

    assert report.assigned_hours == 4
    assert report.worked_hours == 2
    assert report.hours_by_schedule == {1: 2}
