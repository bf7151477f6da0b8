from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..core.constants import LATE_GRACE_MINUTES
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    The grace window is fixed; check-in exactly at start + grace is on time.
    """

    def for_checkin(self, *, now: datetime, work_date: date, scheduled_start: time) -> AttendanceStrategy:
        start = datetime.combine(work_date, scheduled_start, tzinfo=now.tzinfo)
        if now <= start + timedelta(minutes=LATE_GRACE_MINUTES):
            return OnTimeStrategy()
        return LateStrategy()
