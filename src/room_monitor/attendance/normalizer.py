"""Ingestion boundary: map the record shapes returned by the various endpoints
onto canonical ``RoomEntry`` / ``Schedule`` objects.

Endpoints disagree on key names (``startedAt`` vs ``entry_time`` vs ``created_at``,
``room`` vs ``room_id`` vs ``roomId``...). Everything past this module only ever
sees the canonical shape. Naive timestamps are read in the civil time zone,
which is how the scheduling forms submit them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import CivilCalendar, parse_instant
from ..common.logging import get_logger
from ..common.records import SkippedRecord
from ..core.enums import ScheduleStatus
from ..core.exceptions import MalformedRecordError
from ..schedules.model import Schedule
from .model import RoomEntry

logger = get_logger(__name__)

ENTRY_START_KEYS = ("startedAt", "started_at", "entry_time", "created_at")
ENTRY_END_KEYS = ("endedAt", "ended_at", "exit_time")
SCHEDULE_START_KEYS = ("start_datetime", "start_time", "start")
SCHEDULE_END_KEYS = ("end_datetime", "end_time", "end")
USER_KEYS = ("user_id", "user", "userId")
ROOM_KEYS = ("room_id", "room", "roomId")
USER_NAME_KEYS = ("user_full_name", "user_name", "userName")
ROOM_NAME_KEYS = ("room_name", "roomName")


def _first(raw: Mapping[str, Any], keys: Iterable[str]):
    for key in keys:
        value = raw.get(key)
        if value not in (None, ""):
            return value
    return None


def _as_id(value, *, field_name: str, record_id) -> int:
    if isinstance(value, Mapping):
        value = value.get("id")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise MalformedRecordError(f"Missing or invalid {field_name}", record_id=record_id)
    if number <= 0:
        raise MalformedRecordError(f"Missing or invalid {field_name}", record_id=record_id)
    return number


@dataclass
class NormalizedBatch:
    records: list = field(default_factory=list)
    skipped: list[SkippedRecord] = field(default_factory=list)


class RecordNormalizer:
    def __init__(self, calendar: Optional[CivilCalendar] = None):
        self._calendar = calendar or CivilCalendar()

    def _instant(self, value, *, record_id, kind: str):
        try:
            return parse_instant(value, default_zone=self._calendar.zone)
        except MalformedRecordError as err:
            raise MalformedRecordError(str(err), record_id=record_id, kind=kind)

    def entry(self, raw: Mapping[str, Any]) -> RoomEntry:
        record_id = raw.get("id")
        started_at = self._instant(_first(raw, ENTRY_START_KEYS), record_id=record_id, kind="entry")

        ended_raw = _first(raw, ENTRY_END_KEYS)
        ended_at = None
        if ended_raw is not None:
            ended_at = self._instant(ended_raw, record_id=record_id, kind="entry")
            if ended_at <= started_at:
                raise MalformedRecordError("Entry ends before it starts", record_id=record_id, kind="entry")

        room_raw = _first(raw, ROOM_KEYS)
        room_name = _first(raw, ROOM_NAME_KEYS)
        if isinstance(room_raw, str) and not room_raw.strip().isdigit() and room_name is None:
            # Some endpoints put the room name in ``room``.
            room_name, room_raw = room_raw, raw.get("room_id") or raw.get("roomId")

        return RoomEntry(
            # 0 lets the store assign an id to a fresh check-in.
            entry_id=_as_id(record_id, field_name="id", record_id=record_id) if record_id not in (None, "") else 0,
            user_id=_as_id(_first(raw, USER_KEYS), field_name="user", record_id=record_id),
            room_id=_as_id(room_raw, field_name="room", record_id=record_id),
            started_at=started_at,
            ended_at=ended_at,
            user_name=_first(raw, USER_NAME_KEYS),
            room_name=room_name,
        )

    def schedule(self, raw: Mapping[str, Any]) -> Schedule:
        record_id = raw.get("id")
        start = self._instant(_first(raw, SCHEDULE_START_KEYS), record_id=record_id, kind="schedule")
        end = self._instant(_first(raw, SCHEDULE_END_KEYS), record_id=record_id, kind="schedule")

        status_raw = str(raw.get("status") or ScheduleStatus.ACTIVE.value).lower()
        try:
            status = ScheduleStatus(status_raw)
        except ValueError:
            raise MalformedRecordError(f"Unknown status {status_raw!r}", record_id=record_id, kind="schedule")

        user_details = raw.get("user_details") or {}
        room_details = raw.get("room_details") or {}
        return Schedule(
            schedule_id=_as_id(record_id, field_name="id", record_id=record_id) if record_id not in (None, "") else None,
            user_id=_as_id(_first(raw, USER_KEYS), field_name="user", record_id=record_id),
            room_id=_as_id(_first(raw, ROOM_KEYS), field_name="room", record_id=record_id),
            start=start,
            end=end,
            status=status,
            recurring=bool(raw.get("recurring", False)),
            notes=raw.get("notes") or None,
            user_name=_first(raw, USER_NAME_KEYS) or user_details.get("full_name"),
            room_name=_first(raw, ROOM_NAME_KEYS) or room_details.get("name"),
        )

    def entries(self, raws: Iterable[Mapping[str, Any]]) -> NormalizedBatch:
        return self._batch(raws, self.entry, "entry")

    def schedules(self, raws: Iterable[Mapping[str, Any]]) -> NormalizedBatch:
        return self._batch(raws, self.schedule, "schedule")

    @staticmethod
    def _batch(raws, convert, kind: str) -> NormalizedBatch:
        batch = NormalizedBatch()
        for raw in raws:
            record_id = raw.get("id") if isinstance(raw, Mapping) else None
            try:
                if not isinstance(raw, Mapping):
                    raise MalformedRecordError("Record is not an object")
                batch.records.append(convert(raw))
            except MalformedRecordError as err:
                logger.warning("record_skipped", kind=kind, record_id=record_id, reason=str(err))
                batch.skipped.append(SkippedRecord(kind=kind, record_id=record_id, reason=str(err)))
        return batch
