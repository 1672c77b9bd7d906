from __future__ import annotations

from typing import Optional

from ...attendance.model import RoomEntry
from ...core.enums import ArrivalStatus
from ...schedules.model import Schedule
from .base import ArrivalDecision, ArrivalStrategy, minutes_after_start


class EarlyStrategy(ArrivalStrategy):
    """Check-in before the shift start ("over the hour")."""

    def decide(self, *, entry: RoomEntry, schedule: Optional[Schedule]) -> ArrivalDecision:
        minutes = minutes_after_start(entry, schedule)
        return ArrivalDecision(status=ArrivalStatus.EARLY, difference_minutes=minutes, note=f"{-minutes} min early")
