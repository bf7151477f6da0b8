from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union

from ..common.datetime_utils import parse_iso_date
from ..core.constants import DEFAULT_TIME_OFF_REASON
from .model import TimeOffException

logger = logging.getLogger(__name__)


class TimeOffRegister:
    """Per-employee list of exact-date exceptions.

    Matching is by date equality only, never by weekday. Duplicate dates are
    kept as separate entries; the first one answers `reason_for`.
    """

    def __init__(self, entries: Iterable[TimeOffException] = ()):
        self._entries: List[TimeOffException] = list(entries)

    @classmethod
    def from_payload(cls, raw: Any) -> "TimeOffRegister":
        entries: List[TimeOffException] = []
        if not isinstance(raw, list):
            return cls(entries)

        for item in raw:
            try:
                day = parse_iso_date(item["date"])
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.debug("Dropping time-off entry %r", item)
                continue
            reason = item.get("reason") if isinstance(item.get("reason"), str) else None
            entries.append(TimeOffException(date=day, reason=(reason or "").strip() or DEFAULT_TIME_OFF_REASON))
        return cls(entries)

    @property
    def entries(self) -> List[TimeOffException]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def is_day_off(self, day: Union[date, str]) -> bool:
        day = parse_iso_date(day)
        return any(e.date == day for e in self._entries)

    def reason_for(self, day: Union[date, str]) -> Optional[str]:
        day = parse_iso_date(day)
        for e in self._entries:
            if e.date == day:
                return e.reason
        return None

    def add(self, day: Union[date, str], reason: Optional[str] = None) -> TimeOffException:
        entry = TimeOffException(
            date=parse_iso_date(day),
            reason=(reason or "").strip() or DEFAULT_TIME_OFF_REASON,
        )
        self._entries.append(entry)
        return entry

    def remove(self, day: Union[date, str]) -> int:
        """Drop every exception on the date; returns how many were removed."""
        day = parse_iso_date(day)
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.date != day]
        return before - len(self._entries)

    def between(self, start: date, end: date) -> List[TimeOffException]:
        return sorted((e for e in self._entries if start <= e.date <= end), key=lambda e: e.date)

    def copy(self) -> "TimeOffRegister":
        return TimeOffRegister(self._entries)

    def to_payload(self) -> List[Dict[str, Any]]:
        return [e.to_payload() for e in self._entries]
