from datetime import datetime
from zoneinfo import ZoneInfo

from room_monitor.attendance.model import RoomEntry
from room_monitor.reconciliation.factory import ArrivalStrategyFactory
from room_monitor.reconciliation.strategies.early_strategy import EarlyStrategy
from room_monitor.reconciliation.strategies.late_strategy import LateStrategy
from room_monitor.reconciliation.strategies.no_registration_strategy import NoRegistrationStrategy
from room_monitor.reconciliation.strategies.on_time_strategy import OnTimeStrategy
from room_monitor.schedules.model import Schedule

BOG = ZoneInfo("America/Bogota")

SHIFT = Schedule(
    schedule_id=1,
    user_id=7,
    room_id=100,
    start=datetime(2024, 1, 8, 9, 0, tzinfo=BOG),
    end=datetime(2024, 1, 8, 17, 0, tzinfo=BOG),
)


def _entry(hour, minute, second=0):
    return RoomEntry(entry_id=1, user_id=7, room_id=100, started_at=datetime(2024, 1, 8, hour, minute, second, tzinfo=BOG))


def test_five_minutes_late_is_still_on_time():
    strategy = ArrivalStrategyFactory().for_arrival(entry=_entry(9, 5), schedule=SHIFT)

    assert isinstance(strategy, OnTimeStrategy)


def test_just_past_grace_is_late():
    strategy = ArrivalStrategyFactory().for_arrival(entry=_entry(9, 5, 1), schedule=SHIFT)

    assert isinstance(strategy, LateStrategy)


def test_well_before_start_is_early():
    factory = ArrivalStrategyFactory()

    assert isinstance(factory.for_arrival(entry=_entry(8, 54), schedule=SHIFT), EarlyStrategy)
    assert isinstance(factory.for_arrival(entry=_entry(8, 55), schedule=SHIFT), OnTimeStrategy)


def test_without_schedule_no_registration():
    strategy = ArrivalStrategyFactory().for_arrival(entry=_entry(9, 0), schedule=None)

    assert isinstance(strategy, NoRegistrationStrategy)


def test_decision_carries_signed_difference():
    late = LateStrategy().decide(entry=_entry(9, 20), schedule=SHIFT)
    early = EarlyStrategy().decide(entry=_entry(8, 40), schedule=SHIFT)

    assert late.difference_minutes == 20
    assert late.note == "20 min late"
    assert early.difference_minutes == -20
    assert early.note == "20 min early"
