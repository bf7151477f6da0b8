from __future__ import annotations

from enum import Enum, IntEnum


class WeekDay(IntEnum):
    """Canonical weekday code, Sunday-origin (0=Sunday ... 6=Saturday)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


# Monday first, Sunday last.
DISPLAY_ORDER = (
    WeekDay.MONDAY,
    WeekDay.TUESDAY,
    WeekDay.WEDNESDAY,
    WeekDay.THURSDAY,
    WeekDay.FRIDAY,
    WeekDay.SATURDAY,
    WeekDay.SUNDAY,
)


class EditState(str, Enum):
    """Lifecycle of one employee's schedule view."""

    VIEWING = "VIEWING"
    EDITING = "EDITING"


class SyncState(str, Enum):
    IDLE = "IDLE"
    SYNCING = "SYNCING"
    SETTLING = "SETTLING"


class ScheduleTemplate(str, Enum):
    """Named week templates that replace the whole week at once."""

    STANDARD = "standard"
    EVERY_DAY = "every_day"
    STANDARD_SHORT_SATURDAY = "standard_short_saturday"
