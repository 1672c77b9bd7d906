from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from .model import RoomEntry


class InMemoryRoomEntryRepository:
    def __init__(self, entries: Sequence[RoomEntry] = ()):
        self._lock = threading.Lock()
        self._by_id: dict[int, RoomEntry] = {}
        self._next_id = 1
        for e in entries:
            self.add(e)

    def add(self, entry: RoomEntry) -> RoomEntry:
        with self._lock:
            if not entry.entry_id:
                entry = replace(entry, entry_id=self._next_id)
            self._next_id = max(self._next_id, int(entry.entry_id)) + 1
            # Re-ingesting the same id replaces the record (e.g. a check-out update).
            self._by_id[int(entry.entry_id)] = entry
            return entry

    def list_range(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        user_id: Optional[int] = None,
        room_id: Optional[int] = None,
    ) -> Sequence[RoomEntry]:
        with self._lock:
            items = list(self._by_id.values())

        out = []
        for e in items:
            if user_id is not None and e.user_id != user_id:
                continue
            if room_id is not None and e.room_id != room_id:
                continue
            if start is not None and e.started_at < start:
                continue
            if end is not None and e.started_at >= end:
                continue
            out.append(e)
        out.sort(key=lambda e: (e.started_at, e.entry_id))
        return tuple(out)
