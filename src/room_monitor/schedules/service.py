from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

from ..common.logging import get_logger
from ..common.validators import clean_note, require_positive_id
from ..core.constants import TOPIC_SCHEDULES_CHANGED
from ..core.enums import ConflictReason, ScheduleStatus
from ..core.exceptions import NotFoundError, StoreConflictError
from ..notifications.channel import NotificationChannel
from .model import Schedule, ScheduleConflict
from .recurring import RecurringExpander
from .repository import ScheduleRepository
from .validator import ConflictValidator

logger = get_logger(__name__)

UNSET = object()


@dataclass(frozen=True)
class ScheduleOutcome:
    schedule: Optional[Schedule] = None
    conflict: Optional[ScheduleConflict] = None

    @property
    def accepted(self) -> bool:
        return self.conflict is None and self.schedule is not None


@dataclass
class RecurringCreationResult:
    """Per-candidate outcome of a recurring series; no rollback on partial failure."""

    created: list[Schedule] = field(default_factory=list)
    rejected: list[tuple[Schedule, ScheduleConflict]] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)


class ScheduleService:
    def __init__(
        self,
        schedules: ScheduleRepository,
        *,
        validator: ConflictValidator,
        expander: RecurringExpander,
        notifier: Optional[NotificationChannel] = None,
        revalidate_updates: bool = False,
    ):
        self._schedules = schedules
        self._validator = validator
        self._expander = expander
        self._notifier = notifier
        self._revalidate_updates = bool(revalidate_updates)

    def _neighbours(self, candidate: Schedule):
        # Only schedules intersecting the candidate can conflict with it.
        return self._schedules.list_range(start=candidate.start, end=candidate.end)

    def _notify(self, action: str, **payload) -> None:
        if self._notifier:
            self._notifier.publish(TOPIC_SCHEDULES_CHANGED, {"action": action, **payload})

    @staticmethod
    def _store_conflict(err: StoreConflictError) -> ScheduleConflict:
        reason = err.reason if isinstance(err.reason, ConflictReason) else ConflictReason.USER_CONFLICT
        return ScheduleConflict(reason=reason, message=str(err), conflicting_schedule_id=err.conflicting_id)

    def validate(self, candidate: Schedule) -> Optional[ScheduleConflict]:
        return self._validator.validate(candidate, self._neighbours(candidate))

    def _persist(self, candidate: Schedule) -> ScheduleOutcome:
        conflict = self.validate(candidate)
        if conflict:
            return ScheduleOutcome(conflict=conflict)
        try:
            created = self._schedules.create(candidate)
        except StoreConflictError as err:
            # Another writer got there first; a normal rejection, not a defect.
            logger.info("schedule_store_conflict", user_id=candidate.user_id, room_id=candidate.room_id, reason=str(err))
            return ScheduleOutcome(conflict=self._store_conflict(err))
        return ScheduleOutcome(schedule=created)

    def create(self, candidate: Schedule) -> ScheduleOutcome:
        candidate = replace(
            candidate,
            schedule_id=None,
            user_id=require_positive_id(candidate.user_id, "Monitor"),
            room_id=require_positive_id(candidate.room_id, "Room"),
            notes=clean_note(candidate.notes),
        )
        outcome = self._persist(candidate)
        if outcome.accepted:
            logger.info("schedule_created", schedule_id=outcome.schedule.schedule_id, user_id=candidate.user_id)
            self._notify("created", schedule_ids=[outcome.schedule.schedule_id])
        return outcome

    def create_recurring(self, base: Schedule, *, range_start: date, range_end: date) -> RecurringCreationResult:
        """Expand ``base`` over the range and write each candidate in turn.

        Every candidate is validated against the store as it is after the previous
        write, so instances created earlier in the series are taken into account.
        """
        base = replace(
            base,
            user_id=require_positive_id(base.user_id, "Monitor"),
            room_id=require_positive_id(base.room_id, "Room"),
            notes=clean_note(base.notes),
        )
        result = RecurringCreationResult()
        for candidate in self._expander.expand(base, range_start, range_end):
            outcome = self._persist(candidate)
            if outcome.accepted:
                result.created.append(outcome.schedule)
            else:
                result.rejected.append((candidate, outcome.conflict))

        logger.info(
            "recurring_schedules_created",
            user_id=base.user_id,
            room_id=base.room_id,
            created=result.created_count,
            rejected=result.rejected_count,
        )
        if result.created:
            self._notify("created", schedule_ids=[s.schedule_id for s in result.created])
        return result

    def update(
        self,
        schedule_id: int,
        *,
        user_id: Optional[int] = None,
        room_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[ScheduleStatus] = None,
        notes=UNSET,
    ) -> ScheduleOutcome:
        current = self._schedules.get_by_id(int(schedule_id))
        if not current:
            raise NotFoundError("Schedule does not exist")

        changes = {}
        if user_id is not None:
            changes["user_id"] = require_positive_id(user_id, "Monitor")
        if room_id is not None:
            changes["room_id"] = require_positive_id(room_id, "Room")
        if start is not None:
            changes["start"] = start
        if end is not None:
            changes["end"] = end
        if status is not None:
            changes["status"] = ScheduleStatus(status)
        if notes is not UNSET:
            changes["notes"] = clean_note(notes)
        updated = replace(current, **changes)

        conflict = self._validator.validate_update(
            updated,
            self._neighbours(updated),
            enforce_creation_rules=self._revalidate_updates,
        )
        if conflict:
            return ScheduleOutcome(conflict=conflict)

        try:
            saved = self._schedules.update(updated)
        except StoreConflictError as err:
            return ScheduleOutcome(conflict=self._store_conflict(err))

        self._notify("updated", schedule_ids=[saved.schedule_id])
        return ScheduleOutcome(schedule=saved)

    def delete(self, schedule_id: int) -> None:
        if not self._schedules.delete(int(schedule_id)):
            raise NotFoundError("Schedule does not exist")
        self._notify("deleted", schedule_ids=[int(schedule_id)])

    def delete_for_user(self, user_id: int) -> int:
        deleted = self._schedules.delete_by_user(require_positive_id(user_id, "Monitor"))
        logger.info("schedules_deleted_for_user", user_id=int(user_id), deleted=deleted)
        if deleted:
            self._notify("deleted", user_id=int(user_id), deleted=deleted)
        return deleted
