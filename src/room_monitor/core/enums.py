from __future__ import annotations

from enum import Enum


class ScheduleStatus(str, Enum):
    """Lifecycle state of a monitor shift."""

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ArrivalStatus(str, Enum):
    """Outcome of comparing a room entry with the start of its shift."""

    ON_TIME = "ON_TIME"
    EARLY = "EARLY"
    LATE = "LATE"
    NO_REGISTRATION = "NO_REGISTRATION"


class ConflictReason(str, Enum):
    INVALID_RANGE = "INVALID_RANGE"
    DURATION_EXCEEDED = "DURATION_EXCEEDED"
    PAST_DATE = "PAST_DATE"
    USER_CONFLICT = "USER_CONFLICT"
    ROOM_CONFLICT = "ROOM_CONFLICT"


class MidnightPolicy(str, Enum):
    """How recurring expansion treats a shift whose end time-of-day is not after its start."""

    REJECT = "reject"
    ROLL_OVER = "roll_over"


class PairingMode(str, Enum):
    USER = "user"
    ROOM = "room"


class WorkedHoursSource(str, Enum):
    OVERLAP = "overlap"
    ENTRY_DURATION = "entry_duration"


class WindowState(str, Enum):
    ACTIVE = "ACTIVE"
    UPCOMING = "UPCOMING"
    EXPIRED = "EXPIRED"
    INVALID = "INVALID"
