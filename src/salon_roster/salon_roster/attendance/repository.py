from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import CheckInResult, EmployeeScheduleRow


class AttendanceRepository(Protocol):
    async def list_schedules(
        self,
        *,
        start_date: date,
        end_date: date,
        salon_id: Optional[int] = None,
    ) -> Sequence[EmployeeScheduleRow]:
        """Per-employee schedule projected on dates, with check-in marks."""

        raise NotImplementedError

    async def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        checkin_time: datetime,
    ) -> CheckInResult:
        raise NotImplementedError
