from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ConflictReason
from ..core.exceptions import NotFoundError, StoreConflictError
from .model import Schedule


class InMemoryScheduleRepository:
    """Process-local schedule store.

    Re-checks user/room double-booking on every write, so a candidate that passed
    a stale validation can still be rejected here.
    """

    def __init__(self, schedules: Sequence[Schedule] = ()):
        self._lock = threading.Lock()
        self._by_id: dict[int, Schedule] = {}
        self._next_id = 1
        for s in schedules:
            self._insert(s)

    def _insert(self, schedule: Schedule) -> Schedule:
        if schedule.schedule_id is None:
            schedule = replace(schedule, schedule_id=self._next_id)
        self._next_id = max(self._next_id, int(schedule.schedule_id)) + 1
        self._by_id[int(schedule.schedule_id)] = schedule
        return schedule

    def _enforce_no_overlap(self, schedule: Schedule) -> None:
        if not schedule.is_active:
            return
        for other in self._by_id.values():
            if other.schedule_id == schedule.schedule_id or not other.is_active:
                continue
            if not other.interval.overlaps(schedule.interval):
                continue
            if other.user_id == schedule.user_id:
                raise StoreConflictError(
                    "Monitor already has a shift in that period",
                    reason=ConflictReason.USER_CONFLICT,
                    conflicting_id=other.schedule_id,
                )
            if other.room_id == schedule.room_id:
                raise StoreConflictError(
                    "Room already has a shift in that period",
                    reason=ConflictReason.ROOM_CONFLICT,
                    conflicting_id=other.schedule_id,
                )

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        with self._lock:
            return self._by_id.get(int(schedule_id))

    def list_range(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        user_id: Optional[int] = None,
        room_id: Optional[int] = None,
    ) -> Sequence[Schedule]:
        with self._lock:
            items = list(self._by_id.values())

        out = []
        for s in items:
            if user_id is not None and s.user_id != user_id:
                continue
            if room_id is not None and s.room_id != room_id:
                continue
            if start is not None and s.end <= start:
                continue
            if end is not None and s.start >= end:
                continue
            out.append(s)
        out.sort(key=lambda s: (s.start, s.schedule_id))
        return tuple(out)

    def create(self, schedule: Schedule) -> Schedule:
        with self._lock:
            self._enforce_no_overlap(replace(schedule, schedule_id=None))
            return self._insert(replace(schedule, schedule_id=None))

    def update(self, schedule: Schedule) -> Schedule:
        with self._lock:
            if schedule.schedule_id not in self._by_id:
                raise NotFoundError("Schedule does not exist")
            self._enforce_no_overlap(schedule)
            self._by_id[int(schedule.schedule_id)] = schedule
            return schedule

    def delete(self, schedule_id: int) -> bool:
        with self._lock:
            return self._by_id.pop(int(schedule_id), None) is not None

    def delete_by_user(self, user_id: int) -> int:
        with self._lock:
            ids = [sid for sid, s in self._by_id.items() if s.user_id == user_id]
            for sid in ids:
                del self._by_id[sid]
            return len(ids)
