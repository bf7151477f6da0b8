from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import date, datetime
from typing import AsyncIterator, Dict, List, Optional, Tuple, Union

from ..common.datetime_utils import iter_dates, now_local, parse_iso_date
from ..common.validators import require_employee_id
from ..core.exceptions import AlreadyCheckedIn, NotScheduled, RemoteFailure
from ..schedules.daykeys import normalize_day_key, weekday_of
from ..schedules.lookup import resolve_day_hours
from ..schedules.repository import ScheduleRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceDay, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

DayKey = Tuple[int, date]


class AttendanceTracker:
    """Records check-ins against the declared weekly schedule.

    Records are immutable once created. Check-ins for the same (employee, date)
    are serialized, so a second one, even an overlapping one, is rejected.
    The last attendance view read from the backend is cached per day.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        schedules: ScheduleRepository,
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._schedules = schedules
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._records: Dict[DayKey, AttendanceRecord] = {}
        self._views: Dict[DayKey, AttendanceDay] = {}
        self._locks: Dict[DayKey, asyncio.Lock] = {}
        self._pending: Dict[DayKey, int] = {}

    async def get_record(self, employee_id: int, work_date: Union[date, str]) -> Optional[AttendanceRecord]:
        """Known check-in for the date, local first, then the remote view."""
        employee_id = require_employee_id(employee_id)
        work_date = parse_iso_date(work_date)

        local = self._records.get((employee_id, work_date))
        if local is not None:
            return local

        for day in await self.attendance_days(employee_id, work_date, work_date):
            record = day.to_record()
            if record is not None:
                return record
        return None

    async def check_in(
        self,
        employee_id: int,
        work_date: Union[date, str],
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        employee_id = require_employee_id(employee_id)
        work_date = parse_iso_date(work_date)
        now = now or now_local()

        async with self._exclusive((employee_id, work_date)):
            return await self._check_in(employee_id, work_date, now)

    async def _check_in(self, employee_id: int, work_date: date, now: datetime) -> AttendanceRecord:
        if await self.get_record(employee_id, work_date) is not None:
            raise AlreadyCheckedIn("Сотрудник уже отметился в этот день")

        weekday = normalize_day_key(weekday_of(work_date))
        raw = await self._schedules.fetch(employee_id=employee_id, start_date=work_date, end_date=work_date)
        hours = resolve_day_hours(raw.working_hours, weekday)
        if hours is None or hours.start is None:
            raise NotScheduled("Сотрудник не назначен на работу в этот день")

        strategy = self._factory.for_checkin(now=now, work_date=work_date, scheduled_start=hours.start)
        decision = strategy.decide_checkin(now=now, work_date=work_date, scheduled_start=hours.start)

        result = await self._attendance.create_checkin(employee_id=employee_id, work_date=work_date, checkin_time=now)
        if result.is_late is not None and result.is_late != decision.is_late:
            logger.warning(
                "Backend lateness for employee %s on %s disagrees (local=%s, remote=%s)",
                employee_id,
                work_date,
                decision.is_late,
                result.is_late,
            )

        record = self._records.setdefault(
            (employee_id, work_date),
            AttendanceRecord(
                employee_id=employee_id,
                work_date=work_date,
                checkin_time=now,
                is_late=decision.is_late,
            ),
        )
        logger.info(
            "Employee %s checked in on %s %s (%s)",
            employee_id,
            work_date,
            "late" if record.is_late else "on time",
            decision.note,
        )

        await self._refresh(employee_id, work_date)
        return record

    async def attendance_days(self, employee_id: int, start: date, end: date) -> List[AttendanceDay]:
        """Remote attendance view for one employee, overlaid with local check-ins.

        Every read replaces the cached view for the dates it returns.
        """
        rows = await self._attendance.list_schedules(start_date=start, end_date=end)
        days: List[AttendanceDay] = []
        for row in rows:
            if row.employee_id != employee_id:
                continue
            for day in row.days:
                self._views[(day.employee_id, day.work_date)] = day
                days.append(self._overlay(day))
        return days

    def cached_days(self, employee_id: int, start: date, end: date) -> List[AttendanceDay]:
        """Last attendance view read from the backend, without a new request."""
        out: List[AttendanceDay] = []
        for day in iter_dates(start, end):
            cached = self._views.get((int(employee_id), day))
            if cached is not None:
                out.append(self._overlay(cached))
        return out

    async def _refresh(self, employee_id: int, work_date: date) -> None:
        # Write and read are not atomic on the backend; a failed read keeps the previous view.
        try:
            days = await self.attendance_days(employee_id, work_date, work_date)
        except RemoteFailure as exc:
            logger.warning("Attendance refresh for employee %s failed: %s", employee_id, exc)
            return
        logger.debug("Attendance view for employee %s refreshed (%d day(s))", employee_id, len(days))

    def _overlay(self, day: AttendanceDay) -> AttendanceDay:
        local = self._records.get((day.employee_id, day.work_date))
        if local is None or day.checked_in:
            return day
        return replace(day, checked_in=True, checkin_time=local.checkin_time, is_late=local.is_late)

    @asynccontextmanager
    async def _exclusive(self, key: DayKey) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._pending[key] = self._pending.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._pending[key] -= 1
            if not self._pending[key]:
                del self._pending[key]
                del self._locks[key]
