"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_DAY_START = time(9, 0)
DEFAULT_DAY_END = time(18, 0)

SUNDAY_DAY_START = time(10, 0)
SUNDAY_DAY_END = time(16, 0)

# Non-working days are stored as 00:00-00:00 with is_working=false.
DAY_OFF_TIME = time(0, 0)

LATE_GRACE_MINUTES = 15

DEFAULT_TIME_OFF_REASON = "Личные причины"

DEFAULT_SYNC_COOLDOWN_SECONDS = 2.0
DEFAULT_REQUEST_TIMEOUT = 10.0

TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%Y-%m-%d"
