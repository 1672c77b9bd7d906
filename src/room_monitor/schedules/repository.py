from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Schedule


class ScheduleRepository(Protocol):
    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        user_id: Optional[int] = None,
        room_id: Optional[int] = None,
    ) -> Sequence[Schedule]:
        """Schedules whose interval intersects [start, end) (open bounds when None)."""

        raise NotImplementedError

    def create(self, schedule: Schedule) -> Schedule:
        """Persist a new schedule and return it with its assigned id.

        Stores that enforce double-booking rules raise ``StoreConflictError``.
        """

        raise NotImplementedError

    def update(self, schedule: Schedule) -> Schedule:
        raise NotImplementedError

    def delete(self, schedule_id: int) -> bool:
        raise NotImplementedError

    def delete_by_user(self, user_id: int) -> int:
        """Delete every schedule of a monitor; returns the number deleted."""

        raise NotImplementedError
