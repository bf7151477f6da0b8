from datetime import date

import pytest

from salon_roster.core.enums import WeekDay
from salon_roster.core.exceptions import InvalidDayKey
from salon_roster.schedules.daykeys import (
    abbreviation,
    full_name,
    is_numeric_key,
    normalize_day_key,
    weekday_of,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Понедельник", WeekDay.MONDAY),
        ("воскресенье", WeekDay.SUNDAY),
        ("Пт", WeekDay.FRIDAY),
        ("Saturday", WeekDay.SATURDAY),
        ("we", WeekDay.WEDNESDAY),
        (" 3 ", WeekDay.WEDNESDAY),
        (0, WeekDay.SUNDAY),
        (6, WeekDay.SATURDAY),
    ],
)
def test_normalize_known_keys(raw, expected):
    assert normalize_day_key(raw) == expected


def test_seven_folds_to_sunday():
    assert normalize_day_key(7) == normalize_day_key(0) == WeekDay.SUNDAY
    assert normalize_day_key("7") == WeekDay.SUNDAY


def test_every_valid_number_lands_in_range():
    for n in range(8):
        assert 0 <= int(normalize_day_key(n)) <= 6
        assert normalize_day_key(str(n)) == normalize_day_key(n)


def test_normalize_is_idempotent():
    for day in WeekDay:
        assert normalize_day_key(normalize_day_key(day)) is day
        assert normalize_day_key(int(day)) == day


@pytest.mark.parametrize("raw", [8, -1, "8", "Funday", "", True, None, 1.5])
def test_invalid_keys_fail_closed(raw):
    with pytest.raises(InvalidDayKey):
        normalize_day_key(raw)


def test_numeric_key_detection():
    assert is_numeric_key("0")
    assert is_numeric_key(5)
    assert not is_numeric_key("Пн")
    assert not is_numeric_key(False)


def test_weekday_of_calendar_dates():
    assert weekday_of(date(2026, 2, 1)) == WeekDay.SUNDAY
    assert weekday_of(date(2026, 2, 2)) == WeekDay.MONDAY
    assert weekday_of(date(2026, 2, 7)) == WeekDay.SATURDAY


def test_names_for_rendering():
    assert full_name(WeekDay.TUESDAY) == "Вторник"
    assert full_name("7", locale="en") == "Sunday"
    assert abbreviation(WeekDay.THURSDAY) == "Чт"
    assert abbreviation(1, locale="en") == "Mo"
