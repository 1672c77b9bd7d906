from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.memory_repository import InMemoryRoomEntryRepository
from .attendance.normalizer import RecordNormalizer
from .attendance.service import RoomEntryService
from .common.datetime_utils import CivilCalendar, Clock, SystemClock
from .core.settings import EngineSettings
from .notifications.channel import NotificationChannel
from .reconciliation.engine import ReconciliationEngine
from .reconciliation.factory import ArrivalStrategyFactory
from .reports.aggregator import Aggregator
from .reports.service import ReportService
from .schedules.memory_repository import InMemoryScheduleRepository
from .schedules.recurring import RecurringExpander
from .schedules.service import ScheduleService
from .schedules.validator import ConflictValidator


@dataclass(frozen=True)
class Container:
    settings: EngineSettings
    calendar: CivilCalendar
    clock: Clock
    notifier: NotificationChannel
    normalizer: RecordNormalizer

    schedules_repo: InMemoryScheduleRepository
    entries_repo: InMemoryRoomEntryRepository

    schedule_service: ScheduleService
    room_entry_service: RoomEntryService
    report_service: ReportService


def build_container(*, settings: Optional[EngineSettings] = None, clock: Optional[Clock] = None) -> Container:
    settings = settings or EngineSettings()
    clock = clock or SystemClock()
    calendar = CivilCalendar(settings.timezone)
    notifier = NotificationChannel()
    normalizer = RecordNormalizer(calendar)

    schedules_repo = InMemoryScheduleRepository()
    entries_repo = InMemoryRoomEntryRepository()

    schedule_service = ScheduleService(
        schedules_repo,
        validator=ConflictValidator(clock=clock, calendar=calendar, max_hours=settings.max_schedule_hours),
        expander=RecurringExpander(
            calendar=calendar,
            midnight_policy=settings.midnight_policy,
            max_range_days=settings.max_recurring_days,
        ),
        notifier=notifier,
        revalidate_updates=settings.revalidate_updates,
    )
    room_entry_service = RoomEntryService(entries_repo, normalizer=normalizer)
    report_service = ReportService(
        schedules_repo,
        entries_repo,
        engine=ReconciliationEngine(
            calendar=calendar,
            strategy_factory=ArrivalStrategyFactory(
                grace_minutes=settings.late_grace_minutes,
                early_margin_minutes=settings.early_margin_minutes,
            ),
            match_window_minutes=settings.match_window_minutes,
        ),
        aggregator=Aggregator(calendar),
        calendar=calendar,
        notifier=notifier,
    )

    return Container(
        settings=settings,
        calendar=calendar,
        clock=clock,
        notifier=notifier,
        normalizer=normalizer,
        schedules_repo=schedules_repo,
        entries_repo=entries_repo,
        schedule_service=schedule_service,
        room_entry_service=room_entry_service,
        report_service=report_service,
    )
