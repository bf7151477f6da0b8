"""In-memory weekly schedule of one employee, with an explicit edit-mode gate.

The store never talks to the backend itself; `ScheduleService` feeds it with
remote reads and commits it after a successful write.
"""

from __future__ import annotations

import logging
from datetime import time
from typing import Any, Optional, Union

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_employee_id
from ..core.constants import SUNDAY_DAY_END, SUNDAY_DAY_START
from ..core.enums import EditState, ScheduleTemplate, WeekDay
from ..core.exceptions import InvalidDayHours
from .daykeys import RawDayKey, normalize_day_key
from .model import DayHours, WeeklySchedule, parse_working_hours
from .templates import build_template

logger = logging.getLogger(__name__)

HOUR_FIELDS = ("start", "end")


class WeeklyScheduleStore:
    def __init__(self, employee_id: int):
        self.employee_id = require_employee_id(employee_id)
        self._saved = WeeklySchedule(employee_id=self.employee_id)
        self._current = self._saved.copy()
        self._state = EditState.VIEWING

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def is_editing(self) -> bool:
        return self._state == EditState.EDITING

    @property
    def schedule(self) -> WeeklySchedule:
        return self._current

    @property
    def saved(self) -> WeeklySchedule:
        return self._saved

    def load(self, raw_working_hours: Any, *, show_sunday: Optional[bool] = None) -> WeeklySchedule:
        """Replace the store with a fresh remote read.

        Invalid entries are dropped silently; the cleaned schedule becomes both
        the saved snapshot and the current state, and edit mode is left.
        """
        days, dropped = parse_working_hours(raw_working_hours)
        schedule = WeeklySchedule(
            employee_id=self.employee_id,
            days=days,
            show_sunday=True if show_sunday is None else bool(show_sunday),
        )
        self._saved = schedule
        self._current = schedule.copy()
        self._state = EditState.VIEWING
        logger.info(
            "Loaded schedule for employee %s: %d day(s) kept, %d dropped",
            self.employee_id,
            len(days),
            dropped,
        )
        return schedule.copy()

    def enter_edit(self) -> None:
        if self.is_editing:
            return
        self._current = self._saved.copy()
        self._state = EditState.EDITING

    def set_hours(self, day: RawDayKey, field: str, value: Union[str, time]) -> None:
        """Change start or end of one day.

        Outside edit mode this is a silent no-op. A day without an entry gets the
        default working hours first.
        """
        if not self.is_editing:
            return
        if field not in HOUR_FIELDS:
            raise InvalidDayHours(f"Unknown hours field: {field!r}")
        try:
            parsed = parse_hhmm(value)
        except ValueError as exc:
            raise InvalidDayHours(f"Некорректное время: {value!r}") from exc
        if parsed is None:
            raise InvalidDayHours("Время не задано")

        key = normalize_day_key(day)
        hours = self._current.days.get(key)
        if hours is None or not hours.is_working:
            hours = DayHours.working()
        if field == "start":
            hours = DayHours(start=parsed, end=hours.end, is_working=True)
        else:
            hours = DayHours(start=hours.start, end=parsed, is_working=True)
        self._current.days[key] = hours

    def set_working_day(self, day: RawDayKey, is_working: bool) -> None:
        if not self.is_editing:
            return
        key = normalize_day_key(day)
        if is_working:
            self._current.days[key] = DayHours.working()
        else:
            self._current.days[key] = DayHours.day_off()

    def toggle_sunday(self) -> None:
        if not self.is_editing:
            return
        if self._current.is_working_day(WeekDay.SUNDAY):
            self._current.days[WeekDay.SUNDAY] = DayHours.day_off()
            self._current.show_sunday = False
        else:
            self._current.days[WeekDay.SUNDAY] = DayHours.working(SUNDAY_DAY_START, SUNDAY_DAY_END)
            self._current.show_sunday = True

    def copy_hours(self, from_day: RawDayKey, to_day: RawDayKey) -> None:
        if not self.is_editing:
            return
        source = self._current.days.get(normalize_day_key(from_day))
        if source is None:
            return
        self._current.days[normalize_day_key(to_day)] = source.copy()

    def apply_template(self, name: Union[ScheduleTemplate, str]) -> None:
        """Replace the whole week; on any error the current week is untouched."""
        if not self.is_editing:
            return
        week = build_template(name)
        self._current.days = week

    def save(self) -> WeeklySchedule:
        """Cleaned copy of the current week, ready to be written remotely.

        Entries that break the start-before-end rule are stripped. The store itself is not
        changed until `mark_saved` confirms the remote write.
        """
        cleaned = self._current.copy()
        for day, hours in list(cleaned.days.items()):
            if not hours.is_valid():
                logger.warning(
                    "Stripping invalid hours for employee %s on %s: %s-%s",
                    self.employee_id,
                    day.name,
                    hours.start,
                    hours.end,
                )
                del cleaned.days[day]
        return cleaned

    def mark_saved(self, schedule: WeeklySchedule) -> None:
        self._saved = schedule.copy()
        self._current = schedule.copy()
        self._state = EditState.VIEWING

    def cancel(self) -> None:
        self._current = self._saved.copy()
        self._state = EditState.VIEWING
