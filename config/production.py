import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

TIMEZONE = os.getenv("TIMEZONE", "America/Bogota")

MAX_SCHEDULE_HOURS = int(os.getenv("MAX_SCHEDULE_HOURS", "12"))
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "5"))
EARLY_MARGIN_MINUTES = int(os.getenv("EARLY_MARGIN_MINUTES", "5"))
MATCH_WINDOW_MINUTES = int(os.getenv("MATCH_WINDOW_MINUTES", "120"))
MAX_RECURRING_DAYS = int(os.getenv("MAX_RECURRING_DAYS", "366"))

MIDNIGHT_POLICY = os.getenv("MIDNIGHT_POLICY", "reject")
REVALIDATE_UPDATES = bool(int(os.getenv("REVALIDATE_UPDATES", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))
