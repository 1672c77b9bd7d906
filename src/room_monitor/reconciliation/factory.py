from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from ..attendance.model import RoomEntry
from ..core.constants import DEFAULT_EARLY_MARGIN_MINUTES, DEFAULT_LATE_GRACE_MINUTES
from ..schedules.model import Schedule
from .strategies.base import ArrivalStrategy
from .strategies.early_strategy import EarlyStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.no_registration_strategy import NoRegistrationStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class ArrivalStrategyFactory:
    """Factory Pattern: choose the arrival strategy from the grace rules."""

    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    early_margin_minutes: int = DEFAULT_EARLY_MARGIN_MINUTES

    def for_arrival(self, *, entry: RoomEntry, schedule: Optional[Schedule]) -> ArrivalStrategy:
        if not schedule:
            return NoRegistrationStrategy()

        delta = entry.started_at - schedule.start
        # Exactly on the grace boundary still counts as on time.
        if delta > timedelta(minutes=self.grace_minutes):
            return LateStrategy()
        if -delta > timedelta(minutes=self.early_margin_minutes):
            return EarlyStrategy()
        return OnTimeStrategy()
