"""Compact one-line text for a weekly schedule, and the reverse parser.

Format: "Пн-Пт: 09:00-18:00, Сб: 10:00-16:00, Вс: выходной". Runs of three or
more consecutive days collapse into a dash range.
"""

from __future__ import annotations

import logging
import re
from datetime import time
from typing import Any, Dict, List, Optional, Tuple

from ..common.datetime_utils import format_hhmm, parse_hhmm
from ..core.enums import DISPLAY_ORDER, ScheduleTemplate, WeekDay
from ..core.exceptions import InvalidDayKey
from .daykeys import abbreviation, normalize_day_key
from .model import DayHours, WeeklySchedule, encode_working_hours
from .templates import build_template

logger = logging.getLogger(__name__)

NO_DATA = "Нет данных"
DAY_OFF_LABEL = "выходной"
EVERY_DAY_LABEL = "Ежедневно"

_PART_RE = re.compile(
    r"^(?P<days>[^:]+?)\s*:\s*(?:(?P<start>\d{1,2}:\d{2})\s*-\s*(?P<end>\d{1,2}:\d{2})|(?P<off>" + DAY_OFF_LABEL + r"))$",
    re.IGNORECASE,
)

_POSITION = {day: i for i, day in enumerate(DISPLAY_ORDER)}


def _format_days(days: List[WeekDay], locale: str) -> str:
    days = sorted(days, key=_POSITION.__getitem__)
    chunks: List[str] = []
    run: List[WeekDay] = []

    def flush() -> None:
        if len(run) > 2:
            chunks.append(f"{abbreviation(run[0], locale)}-{abbreviation(run[-1], locale)}")
        else:
            chunks.extend(abbreviation(d, locale) for d in run)

    for day in days:
        if run and _POSITION[day] != _POSITION[run[-1]] + 1:
            flush()
            run = []
        run.append(day)
    if run:
        flush()
    return ", ".join(chunks)


def summarize(schedule: WeeklySchedule, *, locale: str = "ru") -> str:
    groups: Dict[Tuple[time, time], List[WeekDay]] = {}
    closed: List[WeekDay] = []
    for day in DISPLAY_ORDER:
        hours = schedule.get(day)
        if hours is None or not hours.is_valid():
            continue
        if not hours.is_working:
            closed.append(day)
            continue
        groups.setdefault((hours.start, hours.end), []).append(day)

    parts = [
        f"{_format_days(days, locale)}: {format_hhmm(start)}-{format_hhmm(end)}"
        for (start, end), days in groups.items()
    ]
    if closed:
        parts.append(f"{_format_days(closed, locale)}: {DAY_OFF_LABEL}")
    return ", ".join(parts) if parts else NO_DATA


def working_days_label(schedule: WeeklySchedule, *, locale: str = "ru") -> str:
    working = [day for day in DISPLAY_ORDER if schedule.is_working_day(day)]
    if not working:
        return NO_DATA
    if len(working) == 7:
        return EVERY_DAY_LABEL
    if working == list(DISPLAY_ORDER[:5]):
        return f"{abbreviation(WeekDay.MONDAY, locale)}-{abbreviation(WeekDay.FRIDAY, locale)}"
    return ", ".join(abbreviation(day, locale) for day in working)


def _expand_days(text: str) -> List[WeekDay]:
    out: List[WeekDay] = []
    for token in (t.strip() for t in text.split(",")):
        if not token:
            continue
        if "-" in token:
            first, last = (normalize_day_key(t.strip()) for t in token.split("-", 1))
            lo, hi = _POSITION[first], _POSITION[last]
            if lo > hi:
                raise InvalidDayKey(f"Reversed day range: {token!r}")
            out.extend(DISPLAY_ORDER[lo : hi + 1])
        else:
            out.append(normalize_day_key(token))
    return out


def parse_summary(text: str) -> Dict[str, Dict[str, Any]]:
    """Read summary text back into a raw `working_hours` mapping.

    Starts from the standard-plus-short-Saturday week; unreadable parts are
    skipped. Day lists without hours ("Пн, Ср: ...") carry over to the next
    part that has them.
    """
    week = build_template(ScheduleTemplate.STANDARD_SHORT_SATURDAY)
    schedule = WeeklySchedule(employee_id=1, days=week)

    pending: List[str] = []
    for part in (p.strip() for p in (text or "").split(",")):
        if not part:
            continue
        match = _PART_RE.match(part)
        if not match:
            try:
                _expand_days(part)
            except InvalidDayKey:
                logger.debug("Skipping schedule part %r", part)
                continue
            pending.append(part)
            continue

        day_text = ", ".join(pending + [match.group("days")])
        pending = []
        try:
            days = _expand_days(day_text)
            start: Optional[time] = parse_hhmm(match.group("start"))
            end: Optional[time] = parse_hhmm(match.group("end"))
        except (InvalidDayKey, ValueError) as exc:
            logger.debug("Skipping schedule part %r: %s", part, exc)
            continue

        for day in days:
            if match.group("off"):
                schedule.days[day] = DayHours.day_off()
            elif start is not None and end is not None and start < end:
                schedule.days[day] = DayHours.working(start, end)

    return encode_working_hours(schedule.days)
