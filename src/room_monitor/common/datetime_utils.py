from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DEFAULT_TIMEZONE, PERIOD_DATETIME_FORMAT, PERIOD_TIME_FORMAT, SECONDS_PER_HOUR
from ..core.exceptions import MalformedRecordError, ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_instant(value, *, default_zone: Optional[ZoneInfo] = None) -> datetime:
    """Parse an ISO 8601 timestamp (or datetime) into an aware UTC datetime.

    Naive values are interpreted in ``default_zone``; without one they are rejected,
    because a naive timestamp has no fixed position on the instant clock.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise MalformedRecordError(f"Unparseable timestamp: {value!r}")
    else:
        raise MalformedRecordError(f"Missing timestamp: {value!r}")

    if parsed.tzinfo is None:
        if default_zone is None:
            raise MalformedRecordError(f"Timestamp without offset: {value!r}")
        parsed = parsed.replace(tzinfo=default_zone)
    return parsed.astimezone(timezone.utc)


def is_aware(value) -> bool:
    return isinstance(value, datetime) and value.tzinfo is not None and value.utcoffset() is not None


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def iter_dates(start: date, end: date):
    """Yield every calendar date in [start, end]."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


class Clock(Protocol):
    def now(self) -> datetime:
        """Current instant as an aware datetime."""

        raise NotImplementedError


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass
class FixedClock:
    """Clock frozen at a given instant (tests, replays)."""

    instant: datetime

    def now(self) -> datetime:
        return self.instant

    def advance(self, **kwargs) -> None:
        self.instant = self.instant + timedelta(**kwargs)


@dataclass(frozen=True)
class CivilCalendar:
    """Projection of instants onto the civil calendar of one IANA zone.

    Business rules (past-date rejection, weekday matching, per-day grouping) are
    evaluated on this projection, never on the storage zone.
    """

    zone_name: str = DEFAULT_TIMEZONE
    zone: ZoneInfo = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            zone = ZoneInfo(self.zone_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValidationError(f"Unknown time zone: {self.zone_name}")
        object.__setattr__(self, "zone", zone)

    def to_local(self, instant: datetime) -> datetime:
        return instant.astimezone(self.zone)

    def civil_date(self, instant: datetime) -> date:
        return self.to_local(instant).date()

    def weekday(self, instant: datetime) -> int:
        """Monday is 0, as in ``date.weekday``."""
        return self.civil_date(instant).weekday()

    def time_of_day(self, instant: datetime) -> time:
        return self.to_local(instant).time().replace(tzinfo=None)

    def combine(self, day: date, at: time) -> datetime:
        """Local civil date + time-of-day -> aware UTC instant."""
        return datetime.combine(day, at, tzinfo=self.zone).astimezone(timezone.utc)

    def start_of_day(self, day: date) -> datetime:
        return self.combine(day, time(0, 0))

    def format(self, instant: datetime, fmt: str) -> str:
        return self.to_local(instant).strftime(fmt)

    def format_period(self, start: datetime, end: Optional[datetime]) -> str:
        """``YYYY-MM-DD HH:MM - HH:MM`` (end date repeated only when it differs)."""
        head = self.format(start, PERIOD_DATETIME_FORMAT)
        if end is None:
            return f"{head} - ..."
        if self.civil_date(start) == self.civil_date(end):
            return f"{head} - {self.format(end, PERIOD_TIME_FORMAT)}"
        return f"{head} - {self.format(end, PERIOD_DATETIME_FORMAT)}"
