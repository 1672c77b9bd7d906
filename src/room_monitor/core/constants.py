"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "America/Bogota"

DEFAULT_MAX_SCHEDULE_HOURS = 12
DEFAULT_LATE_GRACE_MINUTES = 5
DEFAULT_EARLY_MARGIN_MINUTES = 5
DEFAULT_MATCH_WINDOW_MINUTES = 120
DEFAULT_MAX_RECURRING_DAYS = 366

SECONDS_PER_HOUR = 3600

PERIOD_DATETIME_FORMAT = "%Y-%m-%d %H:%M"
PERIOD_TIME_FORMAT = "%H:%M"

TOPIC_SCHEDULES_CHANGED = "schedules.changed"
TOPIC_RECONCILIATION_COMPLETED = "reconciliation.completed"
