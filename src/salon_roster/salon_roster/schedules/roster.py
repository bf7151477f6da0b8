from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import List, Optional

from ..common.datetime_utils import iter_dates
from ..core.enums import WeekDay
from ..time_off.register import TimeOffRegister
from .daykeys import abbreviation, weekday_of
from .model import WeeklySchedule


@dataclass(frozen=True)
class RosterDay:
    """Weekly template projected onto one calendar date."""

    date: date
    weekday: WeekDay
    day_name: str
    is_working: bool
    start: Optional[time] = None
    end: Optional[time] = None
    time_off_reason: Optional[str] = None


def expand_roster(
    schedule: WeeklySchedule,
    time_off: TimeOffRegister,
    start: date,
    end: date,
    *,
    locale: str = "ru",
) -> List[RosterDay]:
    """One entry per date in [start, end]; a time-off date never works."""
    out: List[RosterDay] = []
    for day in iter_dates(start, end):
        weekday = weekday_of(day)
        reason = time_off.reason_for(day)
        hours = schedule.get(weekday)
        working = reason is None and schedule.is_working_day(weekday)
        out.append(
            RosterDay(
                date=day,
                weekday=weekday,
                day_name=abbreviation(weekday, locale),
                is_working=working,
                start=hours.start if working and hours else None,
                end=hours.end if working and hours else None,
                time_off_reason=reason,
            )
        )
    return out
