from __future__ import annotations

from typing import Optional

from ...attendance.model import RoomEntry
from ...core.enums import ArrivalStatus
from ...schedules.model import Schedule
from .base import ArrivalDecision, ArrivalStrategy, minutes_after_start


class LateStrategy(ArrivalStrategy):
    """Late check-in."""

    def decide(self, *, entry: RoomEntry, schedule: Optional[Schedule]) -> ArrivalDecision:
        minutes = minutes_after_start(entry, schedule)
        return ArrivalDecision(status=ArrivalStatus.LATE, difference_minutes=minutes, note=f"{minutes} min late")
