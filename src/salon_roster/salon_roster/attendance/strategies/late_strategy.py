from __future__ import annotations

from datetime import date, datetime, time

from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, now: datetime, work_date: date, scheduled_start: time) -> StatusDecision:
        start = datetime.combine(work_date, scheduled_start, tzinfo=now.tzinfo)
        minutes = int((now - start).total_seconds() // 60)
        return StatusDecision(is_late=True, note=f"Опоздание {minutes} мин.")
