from __future__ import annotations

from typing import Optional

from ...attendance.model import RoomEntry
from ...core.enums import ArrivalStatus
from ...schedules.model import Schedule
from .base import ArrivalDecision, ArrivalStrategy, minutes_after_start


class OnTimeStrategy(ArrivalStrategy):
    """Check-in within the grace window around the shift start."""

    def decide(self, *, entry: RoomEntry, schedule: Optional[Schedule]) -> ArrivalDecision:
        return ArrivalDecision(status=ArrivalStatus.ON_TIME, difference_minutes=minutes_after_start(entry, schedule))
