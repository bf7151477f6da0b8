from __future__ import annotations

from datetime import date, datetime, time

from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """Check-in within the grace window."""

    def decide_checkin(self, *, now: datetime, work_date: date, scheduled_start: time) -> StatusDecision:
        return StatusDecision(is_late=False, note="Вовремя")
