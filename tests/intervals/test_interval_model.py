from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from room_monitor.common.datetime_utils import CivilCalendar, FixedClock, parse_instant
from room_monitor.core.enums import WindowState
from room_monitor.core.exceptions import MalformedRecordError, ValidationError
from room_monitor.intervals.model import Interval, format_minutes, schedule_window_state

BOG = ZoneInfo("America/Bogota")


def _at(hour, minute=0, day=8):
    return datetime(2024, 1, day, hour, minute, tzinfo=BOG)


def test_duration_and_intersection():
    a = Interval(_at(9), _at(17))
    b = Interval(_at(9, 5), _at(16, 30))

    assert a.duration_hours() == 8
    assert a.intersect_hours(b) == pytest.approx(7 + 25 / 60)
    assert a.intersect_hours(b) == b.intersect_hours(a)


def test_touching_intervals_do_not_overlap():
    a = Interval(_at(9), _at(11))
    b = Interval(_at(11), _at(13))

    assert not a.overlaps(b)
    assert a.intersect_hours(b) == 0


def test_disjoint_intersection_is_zero_not_negative():
    a = Interval(_at(8), _at(9))
    b = Interval(_at(12), _at(13))

    assert a.intersect_hours(b) == 0.0


def test_intersection_bounded_by_shorter_interval():
    a = Interval(_at(6), _at(18))
    b = Interval(_at(10), _at(11, 30))

    assert a.intersect_hours(b) == pytest.approx(b.duration_hours())


def test_calendar_projects_utc_instant_to_bogota_date():
    cal = CivilCalendar()
    # 03:00 UTC on Jan 9 is still Jan 8 in Bogota (UTC-5)
    instant = datetime(2024, 1, 9, 3, 0, tzinfo=timezone.utc)

    assert cal.civil_date(instant) == date(2024, 1, 8)
    assert cal.weekday(instant) == 0
    assert cal.time_of_day(instant) == time(22, 0)


def test_calendar_combine_returns_utc_instant():
    cal = CivilCalendar()
    instant = cal.combine(date(2024, 1, 2), time(10, 0))

    assert instant == datetime(2024, 1, 2, 15, 0, tzinfo=timezone.utc)


def test_calendar_rejects_unknown_zone():
    with pytest.raises(ValidationError):
        CivilCalendar("Mars/Olympus")


def test_format_period_same_and_different_day():
    cal = CivilCalendar()

    assert cal.format_period(_at(9), _at(17)) == "2024-01-08 09:00 - 17:00"
    assert cal.format_period(_at(22), _at(2, day=9)) == "2024-01-08 22:00 - 2024-01-09 02:00"
    assert cal.format_period(_at(9), None) == "2024-01-08 09:00 - ..."


def test_parse_instant_accepts_z_suffix_and_offsets():
    assert parse_instant("2024-01-08T14:00:00Z") == datetime(2024, 1, 8, 14, 0, tzinfo=timezone.utc)
    assert parse_instant("2024-01-08T09:00:00-05:00") == datetime(2024, 1, 8, 14, 0, tzinfo=timezone.utc)


def test_parse_instant_naive_needs_zone():
    with pytest.raises(MalformedRecordError):
        parse_instant("2024-01-08T09:00:00")

    parsed = parse_instant("2024-01-08T09:00:00", default_zone=BOG)
    assert parsed == datetime(2024, 1, 8, 14, 0, tzinfo=timezone.utc)


def test_parse_instant_garbage():
    with pytest.raises(MalformedRecordError):
        parse_instant("yesterday-ish")
    with pytest.raises(MalformedRecordError):
        parse_instant(None)


def test_fixed_clock_advance():
    clock = FixedClock(_at(9))
    clock.advance(minutes=30)

    assert clock.now() == _at(9, 30)


def test_schedule_window_state():
    start, end = _at(9), _at(11)

    upcoming = schedule_window_state(start, end, _at(8, 15))
    assert upcoming.state == WindowState.UPCOMING
    assert upcoming.minutes_until_start == 45

    active = schedule_window_state(start, end, _at(10))
    assert active.state == WindowState.ACTIVE
    assert active.minutes_until_end == 60

    assert schedule_window_state(start, end, _at(12)).state == WindowState.EXPIRED
    assert schedule_window_state(end, start, _at(10)).state == WindowState.INVALID


def test_format_minutes():
    assert format_minutes(-1) == "Time is up"
    assert format_minutes(45) == "45 minutes"
    assert format_minutes(60) == "1 hour"
    assert format_minutes(125) == "2 hours and 5 minutes"
