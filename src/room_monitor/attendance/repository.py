from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import RoomEntry


class RoomEntryRepository(Protocol):
    def list_range(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        user_id: Optional[int] = None,
        room_id: Optional[int] = None,
    ) -> Sequence[RoomEntry]:
        """Entries whose ``started_at`` falls in [start, end)."""

        raise NotImplementedError

    def add(self, entry: RoomEntry) -> RoomEntry:
        raise NotImplementedError
