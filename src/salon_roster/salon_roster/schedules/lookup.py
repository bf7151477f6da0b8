from __future__ import annotations

from typing import Any, List, Mapping, Optional

from ..core.enums import WeekDay
from ..core.exceptions import InvalidDayHours, InvalidDayKey
from .daykeys import FULL_NAMES, is_numeric_key, normalize_day_key
from .model import DayHours


def resolve_day_hours(raw_working_hours: Any, day: WeekDay) -> Optional[DayHours]:
    """Working hours for `day` straight from unnormalized stored data.

    Numeric keys are tried first; when they give no working entry the full
    weekday name is tried next, since older records used names. Returns None
    when no working entry exists.
    """
    if not isinstance(raw_working_hours, Mapping):
        return None

    candidates: List[Any] = [
        key for key in raw_working_hours if is_numeric_key(key) and _matches(key, day)
    ]
    names = {names[day].casefold() for names in FULL_NAMES.values()}
    candidates += [
        key for key in raw_working_hours if isinstance(key, str) and key.strip().casefold() in names
    ]

    for key in candidates:
        try:
            hours = DayHours.from_payload(raw_working_hours[key])
        except InvalidDayHours:
            continue
        if hours.is_working:
            return hours
    return None


def _matches(key: Any, day: WeekDay) -> bool:
    try:
        return normalize_day_key(key) == day
    except InvalidDayKey:
        return False
