from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from room_monitor.attendance.model import RoomEntry
from room_monitor.core.enums import ArrivalStatus, PairingMode, ScheduleStatus
from room_monitor.reconciliation.engine import ReconciliationEngine
from room_monitor.schedules.model import Schedule

BOG = ZoneInfo("America/Bogota")


def _at(hour, minute=0, day=8):
    return datetime(2024, 1, day, hour, minute, tzinfo=BOG)


def _shift(schedule_id=1, user_id=7, room_id=100, start=None, end=None):
    return Schedule(schedule_id=schedule_id, user_id=user_id, room_id=room_id, start=start or _at(9), end=end or _at(17))


def _entry(entry_id, start, end=None, user_id=7, room_id=100):
    return RoomEntry(entry_id=entry_id, user_id=user_id, room_id=room_id, started_at=start, ended_at=end)


def test_monday_shift_overlap_and_boundary_arrival():
    result = ReconciliationEngine().reconcile([_shift()], [_entry(1, _at(9, 5), _at(16, 30))])

    assert len(result.overlaps) == 1
    overlap = result.overlaps[0]
    assert overlap.overlap_hours == pytest.approx(7.416666, rel=1e-6)
    assert overlap.entry_date == date(2024, 1, 8)
    assert overlap.entry_period == "2024-01-08 09:05 - 16:30"
    assert overlap.schedule_period == "2024-01-08 09:00 - 17:00"

    comparison = result.comparisons[0]
    assert comparison.status == ArrivalStatus.ON_TIME
    assert comparison.difference_minutes == 5
    assert result.late_arrivals == 0


def test_six_minutes_after_start_is_late():
    result = ReconciliationEngine().reconcile([_shift()], [_entry(1, _at(9, 6), _at(16, 30))])

    assert result.comparisons[0].status == ArrivalStatus.LATE
    assert result.late_arrivals == 1


def test_entry_outside_match_window_has_no_registration():
    result = ReconciliationEngine().reconcile([_shift()], [_entry(1, _at(11), _at(12))])

    comparison = result.comparisons[0]
    assert comparison.status == ArrivalStatus.NO_REGISTRATION
    assert comparison.schedule_id is None
    # The entry still overlaps the shift
    assert result.overlaps[0].overlap_hours == 1


def test_nearest_schedule_wins():
    morning = _shift(1, start=_at(8), end=_at(9))
    later = _shift(2, start=_at(9, 30), end=_at(12))

    result = ReconciliationEngine().reconcile([morning, later], [_entry(1, _at(9, 20), _at(11))])

    assert result.comparisons[0].schedule_id == 2
    assert result.comparisons[0].status == ArrivalStatus.EARLY


def test_user_pairing_ignores_other_monitors():
    result = ReconciliationEngine().reconcile([_shift()], [_entry(1, _at(9), _at(10), user_id=8)])

    assert result.overlaps == ()
    assert result.comparisons[0].status == ArrivalStatus.NO_REGISTRATION


def test_room_pairing_counts_any_monitor_in_the_room():
    entries = [_entry(1, _at(9), _at(10), user_id=8), _entry(2, _at(9), _at(10), room_id=200)]

    result = ReconciliationEngine().reconcile([_shift()], entries, pairing=PairingMode.ROOM)

    assert [o.entry_id for o in result.overlaps] == [1]


def test_open_entry_has_no_overlap_but_is_compared():
    result = ReconciliationEngine().reconcile([_shift()], [_entry(1, _at(9, 2))])

    assert result.overlaps == ()
    assert result.comparisons[0].status == ArrivalStatus.ON_TIME
    assert result.comparisons[0].entry_period == "2024-01-08 09:02 - ..."


def test_unusable_records_are_skipped_not_raised():
    naive = RoomEntry(entry_id=9, user_id=7, room_id=100, started_at=datetime(2024, 1, 8, 9, 0))
    backwards = _shift(5, start=_at(12), end=_at(11))

    result = ReconciliationEngine().reconcile([_shift(), backwards], [naive, _entry(1, _at(9), _at(10))])

    assert sorted((s.kind, s.record_id) for s in result.skipped) == [("entry", 9), ("schedule", 5)]
    assert len(result.overlaps) == 1


def test_reconcile_is_idempotent_and_order_independent():
    shifts = [_shift(1), _shift(2, start=_at(9, day=9), end=_at(12, day=9))]
    entries = [_entry(2, _at(9, 10, day=9), _at(11, day=9)), _entry(1, _at(8, 50), _at(17, 30))]
    engine = ReconciliationEngine()

    first = engine.reconcile(shifts, entries)
    second = engine.reconcile(list(reversed(shifts)), list(reversed(entries)))

    assert first == second
    assert [c.entry_id for c in first.comparisons] == [1, 2]


def test_overlap_never_exceeds_either_duration():
    shifts = [_shift(1, start=_at(9), end=_at(10)), _shift(2, start=_at(10), end=_at(18))]
    entries = [_entry(1, _at(8), _at(20))]

    result = ReconciliationEngine().reconcile(shifts, entries)

    for overlap, shift in zip(result.overlaps, shifts):
        assert 0 < overlap.overlap_hours <= shift.duration_hours()
    assert sum(o.overlap_hours for o in result.overlaps) == 9


def test_empty_input():
    result = ReconciliationEngine().reconcile([], [])

    assert result.overlaps == ()
    assert result.comparisons == ()
    assert result.late_arrivals == 0


def test_cancelled_shift_is_never_the_matched_schedule():
    cancelled = Schedule(
        schedule_id=3, user_id=7, room_id=100, start=_at(9), end=_at(17), status=ScheduleStatus.CANCELLED
    )
    completed = Schedule(
        schedule_id=4, user_id=7, room_id=100, start=_at(9, day=9), end=_at(12, day=9), status=ScheduleStatus.COMPLETED
    )

    result = ReconciliationEngine().reconcile(
        [cancelled, completed], [_entry(1, _at(9, 30), _at(12)), _entry(2, _at(9, 30, day=9), _at(12, day=9))]
    )

    assert [c.status for c in result.comparisons] == [ArrivalStatus.NO_REGISTRATION, ArrivalStatus.LATE]
    assert result.comparisons[1].schedule_id == 4
    assert result.late_arrivals == 1
