from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional, Tuple, Union

from ..core.constants import DATE_FORMAT, TIME_FORMAT


def parse_iso_date(value: Union[str, date]) -> date:
    """Parse YYYY-MM-DD string into date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value.strip()[:10], DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_hhmm(value: Union[str, time, None]) -> Optional[time]:
    """Parse 'H:MM', 'HH:MM' or 'HH:MM:SS' into a time.

    Returns None for empty values; raises ValueError for malformed ones.
    """
    if value is None:
        return None
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str):
        raise ValueError(f"Invalid time value: {value!r}")

    v = value.strip()
    if not v:
        return None

    parts = v.split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid time string: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    return time(hour=hours, minute=minutes)


def format_hhmm(value: time) -> str:
    return value.strftime(TIME_FORMAT)


def parse_iso_datetime(value: Union[str, datetime]) -> datetime:
    """Parse an ISO-8601 timestamp; a trailing 'Z' is read as UTC."""
    if isinstance(value, datetime):
        return value
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    return datetime.fromisoformat(v)


def week_bounds(day: date) -> Tuple[date, date]:
    """Monday..Sunday week containing `day`."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
