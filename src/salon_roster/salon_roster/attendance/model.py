from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in of one employee on one date.

    Created once by a successful check-in and never edited afterwards.
    """

    employee_id: int
    work_date: date
    checkin_time: datetime
    is_late: bool


@dataclass(frozen=True)
class AttendanceDay:
    """Read-model row of the attendance view (schedule joined with check-ins)."""

    employee_id: int
    work_date: date
    day_name: str
    is_working: bool
    start_time: Optional[time]
    end_time: Optional[time]
    checked_in: bool
    checkin_time: Optional[datetime]
    is_late: bool

    def to_record(self) -> Optional[AttendanceRecord]:
        if not self.checked_in or self.checkin_time is None:
            return None
        return AttendanceRecord(
            employee_id=self.employee_id,
            work_date=self.work_date,
            checkin_time=self.checkin_time,
            is_late=self.is_late,
        )


@dataclass(frozen=True)
class EmployeeScheduleRow:
    """One employee in the attendance overview, keyed by employee_id."""

    employee_id: int
    employee_name: str = ""
    position: Optional[str] = None
    salon_id: Optional[int] = None
    salon_name: Optional[str] = None
    days: tuple[AttendanceDay, ...] = ()


@dataclass(frozen=True)
class CheckInResult:
    success: bool
    checkin_time: datetime
    is_late: Optional[bool] = None
