from __future__ import annotations

from typing import Optional

from ...attendance.model import RoomEntry
from ...core.enums import ArrivalStatus
from ...schedules.model import Schedule
from .base import ArrivalDecision, ArrivalStrategy


class NoRegistrationStrategy(ArrivalStrategy):
    """No shift starts close enough to the check-in to compare against."""

    def decide(self, *, entry: RoomEntry, schedule: Optional[Schedule]) -> ArrivalDecision:
        return ArrivalDecision(status=ArrivalStatus.NO_REGISTRATION, note="No matching shift")
