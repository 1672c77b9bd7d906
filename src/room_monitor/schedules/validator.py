from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import CivilCalendar, Clock, SystemClock
from ..core.constants import DEFAULT_MAX_SCHEDULE_HOURS
from ..core.enums import ConflictReason
from .model import Schedule, ScheduleConflict


@dataclass
class ConflictValidator:
    """Double-booking and creation-rule checks for a candidate schedule.

    Rule violations are returned as ``ScheduleConflict`` values; ``None`` means the
    candidate is accepted. Nothing is persisted here.
    """

    clock: Clock = field(default_factory=SystemClock)
    calendar: CivilCalendar = field(default_factory=CivilCalendar)
    max_hours: int = DEFAULT_MAX_SCHEDULE_HOURS

    def validate(self, candidate: Schedule, existing: Iterable[Schedule]) -> Optional[ScheduleConflict]:
        return self._check(candidate, existing, enforce_creation_rules=True)

    def validate_update(
        self,
        candidate: Schedule,
        existing: Iterable[Schedule],
        *,
        enforce_creation_rules: bool,
    ) -> Optional[ScheduleConflict]:
        """Same as ``validate`` but the duration/past-date rules are optional."""
        return self._check(candidate, existing, enforce_creation_rules=enforce_creation_rules)

    def _check(self, candidate: Schedule, existing: Iterable[Schedule], *, enforce_creation_rules: bool):
        if candidate.end <= candidate.start:
            return ScheduleConflict(
                reason=ConflictReason.INVALID_RANGE,
                message="The end of the shift must be after its start",
            )

        if enforce_creation_rules:
            if candidate.end - candidate.start > timedelta(hours=self.max_hours):
                return ScheduleConflict(
                    reason=ConflictReason.DURATION_EXCEEDED,
                    message=f"A shift cannot last more than {self.max_hours} hours",
                )

            now_local = self.calendar.to_local(self.clock.now())
            if self.calendar.to_local(candidate.start) < now_local:
                return ScheduleConflict(
                    reason=ConflictReason.PAST_DATE,
                    message="Shifts cannot be created in the past",
                )

        if not candidate.is_active:
            return None

        others = [
            s for s in existing
            if s.is_active and (candidate.schedule_id is None or s.schedule_id != candidate.schedule_id)
        ]

        for other in others:
            if other.user_id == candidate.user_id and other.interval.overlaps(candidate.interval):
                return self._conflict(ConflictReason.USER_CONFLICT, other)

        for other in others:
            if other.room_id == candidate.room_id and other.interval.overlaps(candidate.interval):
                return self._conflict(ConflictReason.ROOM_CONFLICT, other)

        return None

    def _conflict(self, reason: ConflictReason, other: Schedule) -> ScheduleConflict:
        period = self.calendar.format_period(other.start, other.end)
        if reason == ConflictReason.USER_CONFLICT:
            message = f"{other.monitor_label} already has a shift in {other.room_label} ({period})"
        else:
            message = f"{other.room_label} is already assigned to {other.monitor_label} ({period})"
        return ScheduleConflict(
            reason=reason,
            message=message,
            conflicting_schedule_id=other.schedule_id,
            monitor_name=other.monitor_label,
            room_name=other.room_label,
            period=period,
        )
