from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    DEFAULT_EARLY_MARGIN_MINUTES,
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_MATCH_WINDOW_MINUTES,
    DEFAULT_MAX_RECURRING_DAYS,
    DEFAULT_MAX_SCHEDULE_HOURS,
    DEFAULT_TIMEZONE,
)
from .enums import MidnightPolicy
from .exceptions import ValidationError


@dataclass(frozen=True)
class EngineSettings:
    """Business-rule knobs shared by the validator, expander and reconciliation engine."""

    timezone: str = DEFAULT_TIMEZONE
    max_schedule_hours: int = DEFAULT_MAX_SCHEDULE_HOURS
    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    early_margin_minutes: int = DEFAULT_EARLY_MARGIN_MINUTES
    match_window_minutes: int = DEFAULT_MATCH_WINDOW_MINUTES
    max_recurring_days: int = DEFAULT_MAX_RECURRING_DAYS
    midnight_policy: MidnightPolicy = MidnightPolicy.REJECT
    revalidate_updates: bool = False

    @classmethod
    def from_module(cls, settings) -> "EngineSettings":
        """Build from a ``config.*`` settings module (missing names keep defaults)."""
        policy = getattr(settings, "MIDNIGHT_POLICY", MidnightPolicy.REJECT.value)
        try:
            midnight_policy = MidnightPolicy(str(policy).lower())
        except ValueError:
            raise ValidationError(f"Unknown MIDNIGHT_POLICY: {policy}")

        return cls(
            timezone=str(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)),
            max_schedule_hours=int(getattr(settings, "MAX_SCHEDULE_HOURS", DEFAULT_MAX_SCHEDULE_HOURS)),
            late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES)),
            early_margin_minutes=int(getattr(settings, "EARLY_MARGIN_MINUTES", DEFAULT_EARLY_MARGIN_MINUTES)),
            match_window_minutes=int(getattr(settings, "MATCH_WINDOW_MINUTES", DEFAULT_MATCH_WINDOW_MINUTES)),
            max_recurring_days=int(getattr(settings, "MAX_RECURRING_DAYS", DEFAULT_MAX_RECURRING_DAYS)),
            midnight_policy=midnight_policy,
            revalidate_updates=bool(getattr(settings, "REVALIDATE_UPDATES", False)),
        )
