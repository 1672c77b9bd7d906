from __future__ import annotations

from typing import Callable, Iterable, Optional

from ..attendance.model import RoomEntry
from ..common.datetime_utils import is_aware
from ..common.logging import get_logger
from ..common.records import SkippedRecord
from ..schedules.model import Schedule

logger = get_logger(__name__)


def schedule_problem(schedule: Schedule) -> Optional[str]:
    if not is_aware(schedule.start) or not is_aware(schedule.end):
        return "schedule timestamps must be timezone-aware"
    if schedule.end <= schedule.start:
        return "schedule ends before it starts"
    return None


def entry_problem(entry: RoomEntry) -> Optional[str]:
    if not is_aware(entry.started_at):
        return "entry start must be timezone-aware"
    if entry.ended_at is not None:
        if not is_aware(entry.ended_at):
            return "entry end must be timezone-aware"
        if entry.ended_at <= entry.started_at:
            return "entry ends before it starts"
    return None


def _usable(records: Iterable, check: Callable, kind: str, id_attr: str, skipped: list) -> list:
    out = []
    for record in records:
        try:
            problem = check(record)
        except (AttributeError, TypeError) as err:
            problem = f"unreadable record: {err}"
        if problem:
            record_id = getattr(record, id_attr, None)
            logger.warning("record_skipped", kind=kind, record_id=record_id, reason=problem)
            skipped.append(SkippedRecord(kind=kind, record_id=record_id, reason=problem))
            continue
        out.append(record)
    return out


def usable_schedules(schedules: Iterable[Schedule], skipped: list) -> list[Schedule]:
    return _usable(schedules, schedule_problem, "schedule", "schedule_id", skipped)


def usable_entries(entries: Iterable[RoomEntry], skipped: list) -> list[RoomEntry]:
    return _usable(entries, entry_problem, "entry", "entry_id", skipped)
