import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

TIMEZONE = "America/Bogota"

MAX_SCHEDULE_HOURS = 12
LATE_GRACE_MINUTES = 5
EARLY_MARGIN_MINUTES = 5
MATCH_WINDOW_MINUTES = 120
MAX_RECURRING_DAYS = 366

MIDNIGHT_POLICY = os.getenv("MIDNIGHT_POLICY", "reject")
REVALIDATE_UPDATES = bool(int(os.getenv("REVALIDATE_UPDATES", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
LOG_JSON = False
