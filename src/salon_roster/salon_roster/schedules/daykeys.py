"""Day-key normalization.

Stored schedules mix several spellings of the same weekday: localized full names
("Понедельник", "Monday"), two-letter abbreviations ("Пн", "Mo") and numeric codes
where both 0 and 7 mean Sunday. Everything is folded into `WeekDay` once, at the
boundary, and nothing deeper in the package looks at raw keys again.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Union

from ..core.enums import WeekDay
from ..core.exceptions import InvalidDayKey

RawDayKey = Union[WeekDay, int, str]

FULL_NAMES: Dict[str, Dict[WeekDay, str]] = {
    "ru": {
        WeekDay.SUNDAY: "Воскресенье",
        WeekDay.MONDAY: "Понедельник",
        WeekDay.TUESDAY: "Вторник",
        WeekDay.WEDNESDAY: "Среда",
        WeekDay.THURSDAY: "Четверг",
        WeekDay.FRIDAY: "Пятница",
        WeekDay.SATURDAY: "Суббота",
    },
    "en": {
        WeekDay.SUNDAY: "Sunday",
        WeekDay.MONDAY: "Monday",
        WeekDay.TUESDAY: "Tuesday",
        WeekDay.WEDNESDAY: "Wednesday",
        WeekDay.THURSDAY: "Thursday",
        WeekDay.FRIDAY: "Friday",
        WeekDay.SATURDAY: "Saturday",
    },
}

ABBREVIATIONS: Dict[str, Dict[WeekDay, str]] = {
    "ru": {
        WeekDay.SUNDAY: "Вс",
        WeekDay.MONDAY: "Пн",
        WeekDay.TUESDAY: "Вт",
        WeekDay.WEDNESDAY: "Ср",
        WeekDay.THURSDAY: "Чт",
        WeekDay.FRIDAY: "Пт",
        WeekDay.SATURDAY: "Сб",
    },
    "en": {
        WeekDay.SUNDAY: "Su",
        WeekDay.MONDAY: "Mo",
        WeekDay.TUESDAY: "Tu",
        WeekDay.WEDNESDAY: "We",
        WeekDay.THURSDAY: "Th",
        WeekDay.FRIDAY: "Fr",
        WeekDay.SATURDAY: "Sa",
    },
}


def _build_name_index() -> Dict[str, WeekDay]:
    index: Dict[str, WeekDay] = {}
    for table in (FULL_NAMES, ABBREVIATIONS):
        for names in table.values():
            for day, name in names.items():
                index[name.casefold()] = day
    return index


_NAME_INDEX = _build_name_index()


def normalize_day_key(raw: RawDayKey) -> WeekDay:
    """Map any supported day identifier to its canonical `WeekDay`.

    Numeric codes 0-7 are accepted (7 folds to Sunday); strings may be digits,
    full names or abbreviations in any supported locale, case-insensitive.
    Raises InvalidDayKey for anything else.
    """
    if isinstance(raw, WeekDay):
        return raw
    if isinstance(raw, bool):
        raise InvalidDayKey(f"Unrecognized day key: {raw!r}")

    if isinstance(raw, int):
        return _from_number(raw, raw)

    if isinstance(raw, str):
        key = raw.strip()
        if key.isdigit():
            return _from_number(int(key), raw)
        day = _NAME_INDEX.get(key.casefold())
        if day is not None:
            return day

    raise InvalidDayKey(f"Unrecognized day key: {raw!r}")


def _from_number(value: int, raw: RawDayKey) -> WeekDay:
    if value < 0 or value > 7:
        raise InvalidDayKey(f"Day number out of range: {raw!r}")
    return WeekDay(value % 7)


def is_numeric_key(raw: RawDayKey) -> bool:
    if isinstance(raw, bool):
        return False
    if isinstance(raw, int):
        return True
    return isinstance(raw, str) and raw.strip().isdigit()


def weekday_of(day: date) -> WeekDay:
    """Weekday of a calendar date (Python's Monday=0 shifted to Sunday=0)."""
    return WeekDay((day.weekday() + 1) % 7)


def full_name(day: RawDayKey, locale: str = "ru") -> str:
    return FULL_NAMES[locale][normalize_day_key(day)]


def abbreviation(day: RawDayKey, locale: str = "ru") -> str:
    return ABBREVIATIONS[locale][normalize_day_key(day)]
