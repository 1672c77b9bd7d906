import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# Civil calendar used for past-date checks, weekday matching and per-day reports
TIMEZONE = os.getenv("TIMEZONE", "America/Bogota")

MAX_SCHEDULE_HOURS = int(os.getenv("MAX_SCHEDULE_HOURS", "12"))
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "5"))
EARLY_MARGIN_MINUTES = int(os.getenv("EARLY_MARGIN_MINUTES", "5"))
MATCH_WINDOW_MINUTES = int(os.getenv("MATCH_WINDOW_MINUTES", "120"))
MAX_RECURRING_DAYS = int(os.getenv("MAX_RECURRING_DAYS", "366"))

# reject | roll_over
MIDNIGHT_POLICY = os.getenv("MIDNIGHT_POLICY", "reject")
# If enabled, updates are also checked against the 12h / past-date creation rules
REVALIDATE_UPDATES = bool(int(os.getenv("REVALIDATE_UPDATES", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "0")))
