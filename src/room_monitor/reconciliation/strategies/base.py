from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...attendance.model import RoomEntry
from ...core.enums import ArrivalStatus
from ...schedules.model import Schedule


@dataclass(frozen=True)
class ArrivalDecision:
    status: ArrivalStatus
    difference_minutes: Optional[int] = None
    note: Optional[str] = None


def minutes_after_start(entry: RoomEntry, schedule: Schedule) -> int:
    """Signed minutes between the check-in and the shift start, rounded."""
    return round((entry.started_at - schedule.start).total_seconds() / 60)


class ArrivalStrategy(ABC):
    """Strategy Pattern: encapsulate how an arrival is labelled."""

    @abstractmethod
    def decide(self, *, entry: RoomEntry, schedule: Optional[Schedule]) -> ArrivalDecision:
        raise NotImplementedError
