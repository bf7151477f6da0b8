from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import time
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..common.datetime_utils import format_hhmm, parse_hhmm
from ..core.constants import DAY_OFF_TIME, DEFAULT_DAY_END, DEFAULT_DAY_START
from ..core.enums import DISPLAY_ORDER, WeekDay
from ..core.exceptions import InvalidDayHours, InvalidDayKey
from .daykeys import is_numeric_key, normalize_day_key

logger = logging.getLogger(__name__)

OFF_FLAGS = frozenset({"false", "0", "no"})


def is_day_off_flag(value: Any) -> bool:
    """Stored `is_working` may arrive as bool, 0/1 or a string."""
    if isinstance(value, str):
        return value.strip().lower() in OFF_FLAGS
    return value is False or (type(value) is int and value == 0)


@dataclass(frozen=True)
class DayHours:
    """One weekday's working-hours entry."""

    start: Optional[time]
    end: Optional[time]
    is_working: bool = True

    @classmethod
    def working(cls, start: time = DEFAULT_DAY_START, end: time = DEFAULT_DAY_END) -> "DayHours":
        return cls(start=start, end=end, is_working=True)

    @classmethod
    def day_off(cls) -> "DayHours":
        return cls(start=DAY_OFF_TIME, end=DAY_OFF_TIME, is_working=False)

    def is_valid(self) -> bool:
        if self.start is None or self.end is None:
            return False
        if self.is_working:
            return self.start < self.end
        return True

    def copy(self) -> "DayHours":
        return replace(self)

    def to_payload(self) -> Dict[str, Any]:
        if self.start is None or self.end is None:
            raise InvalidDayHours("Не заданы время начала и окончания")
        return {
            "start": format_hhmm(self.start),
            "end": format_hhmm(self.end),
            "is_working": self.is_working,
        }

    @classmethod
    def from_payload(cls, raw: Any) -> "DayHours":
        """Parse one stored entry; raises InvalidDayHours when it is unusable.

        A missing `is_working` means a working day. Non-working entries still
        need both times present and are folded into the 00:00-00:00 sentinel.
        """
        if not isinstance(raw, Mapping):
            raise InvalidDayHours(f"Entry is not an object: {raw!r}")

        try:
            start = parse_hhmm(raw.get("start"))
            end = parse_hhmm(raw.get("end"))
        except ValueError as exc:
            raise InvalidDayHours(str(exc)) from exc

        if start is None or end is None:
            raise InvalidDayHours("Missing start or end")

        if is_day_off_flag(raw.get("is_working")):
            return cls.day_off()

        if start >= end:
            raise InvalidDayHours(f"Start {format_hhmm(start)} is not before end {format_hhmm(end)}")
        return cls(start=start, end=end, is_working=True)


@dataclass
class WeeklySchedule:
    """Per-employee map of weekday -> hours plus the Sunday display preference."""

    employee_id: int
    days: Dict[WeekDay, DayHours] = field(default_factory=dict)
    show_sunday: bool = True

    def get(self, day: WeekDay) -> Optional[DayHours]:
        return self.days.get(day)

    def is_working_day(self, day: WeekDay) -> bool:
        hours = self.days.get(day)
        return bool(hours and hours.is_working and hours.is_valid())

    def visible_days(self, *, editing: bool = False) -> List[Tuple[WeekDay, DayHours]]:
        """Working days in display order (Monday first).

        Sunday is hidden outside edit mode when `show_sunday` is off; the stored
        entry itself is left alone.
        """
        out: List[Tuple[WeekDay, DayHours]] = []
        for day in DISPLAY_ORDER:
            if not self.is_working_day(day):
                continue
            if day == WeekDay.SUNDAY and not editing and not self.show_sunday:
                continue
            out.append((day, self.days[day]))
        return out

    def copy(self) -> "WeeklySchedule":
        return WeeklySchedule(
            employee_id=self.employee_id,
            days={day: hours.copy() for day, hours in self.days.items()},
            show_sunday=self.show_sunday,
        )

    def working_hours_payload(self) -> Dict[str, Dict[str, Any]]:
        return encode_working_hours(self.days)


def parse_working_hours(raw: Any) -> Tuple[Dict[WeekDay, DayHours], int]:
    """Lenient read of a stored `working_hours` object.

    Returns (days, dropped). Bad keys and bad entries are dropped, never raised.
    Numeric keys are considered before name keys, and the first valid entry per
    weekday wins.
    """
    if not isinstance(raw, Mapping):
        return {}, len(raw) if isinstance(raw, (list, tuple)) else 0

    numeric = [(k, v) for k, v in raw.items() if is_numeric_key(k)]
    named = [(k, v) for k, v in raw.items() if not is_numeric_key(k)]

    days: Dict[WeekDay, DayHours] = {}
    dropped = 0
    for key, value in numeric + named:
        try:
            day = normalize_day_key(key)
            hours = DayHours.from_payload(value)
        except (InvalidDayKey, InvalidDayHours) as exc:
            logger.debug("Dropping working-hours entry %r: %s", key, exc)
            dropped += 1
            continue

        if day in days:
            logger.debug("Dropping duplicate entry %r for %s", key, day.name)
            dropped += 1
            continue
        days[day] = hours

    return days, dropped


def encode_working_hours(days: Mapping[WeekDay, DayHours]) -> Dict[str, Dict[str, Any]]:
    """Strict encoder for the PUT body: any invalid entry aborts the write."""
    out: Dict[str, Dict[str, Any]] = {}
    for day in sorted(days):
        hours = days[day]
        if not hours.is_valid():
            raise InvalidDayHours(f"Некорректное рабочее время: {WeekDay(day).name}")
        out[str(int(day))] = hours.to_payload()
    return out
