from __future__ import annotations

from datetime import time
from typing import Callable, Dict, Union

from ..core.constants import DEFAULT_DAY_END, DEFAULT_DAY_START
from ..core.enums import WeekDay, ScheduleTemplate
from ..core.exceptions import UnknownTemplate
from .model import DayHours

WEEKDAYS = (WeekDay.MONDAY, WeekDay.TUESDAY, WeekDay.WEDNESDAY, WeekDay.THURSDAY, WeekDay.FRIDAY)

SHORT_SATURDAY_START = time(10, 0)
SHORT_SATURDAY_END = time(16, 0)


def _standard() -> Dict[WeekDay, DayHours]:
    week = {day: DayHours.day_off() for day in WeekDay}
    for day in WEEKDAYS:
        week[day] = DayHours.working(DEFAULT_DAY_START, DEFAULT_DAY_END)
    return week


def _every_day() -> Dict[WeekDay, DayHours]:
    return {day: DayHours.working(DEFAULT_DAY_START, DEFAULT_DAY_END) for day in WeekDay}


def _standard_short_saturday() -> Dict[WeekDay, DayHours]:
    week = _standard()
    week[WeekDay.SATURDAY] = DayHours.working(SHORT_SATURDAY_START, SHORT_SATURDAY_END)
    return week


_BUILDERS: Dict[ScheduleTemplate, Callable[[], Dict[WeekDay, DayHours]]] = {
    ScheduleTemplate.STANDARD: _standard,
    ScheduleTemplate.EVERY_DAY: _every_day,
    ScheduleTemplate.STANDARD_SHORT_SATURDAY: _standard_short_saturday,
}


def build_template(name: Union[ScheduleTemplate, str]) -> Dict[WeekDay, DayHours]:
    """Fresh seven-day week for a named template.

    Every call returns new DayHours objects, one per weekday.
    """
    try:
        template = ScheduleTemplate(name)
    except ValueError:
        raise UnknownTemplate(f"Неизвестный шаблон расписания: {name!r}") from None

    week = _BUILDERS[template]()
    if set(week) != set(WeekDay):
        raise UnknownTemplate(f"Шаблон {template.value} не покрывает всю неделю")
    return week
