from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, List, Optional, Sequence

from ..api.client import ApiClient
from ..common.datetime_utils import format_iso_date, parse_hhmm, parse_iso_date, parse_iso_datetime
from ..core.exceptions import RemoteFailure
from ..schedules.model import is_day_off_flag
from .model import AttendanceDay, CheckInResult, EmployeeScheduleRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class HttpAttendanceRepository(AttendanceRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    async def list_schedules(
        self,
        *,
        start_date: date,
        end_date: date,
        salon_id: Optional[int] = None,
    ) -> Sequence[EmployeeScheduleRow]:
        data = await self._api.get_json(
            "/statistics/employee-schedules",
            params={
                "startDate": format_iso_date(start_date),
                "endDate": format_iso_date(end_date),
                "salonId": salon_id,
            },
        )
        if not isinstance(data, list):
            raise RemoteFailure("Некорректный ответ сервера", path="/statistics/employee-schedules")

        rows: List[EmployeeScheduleRow] = []
        for item in data:
            row = _to_row(item)
            if row is not None:
                rows.append(row)
        return rows

    async def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        checkin_time: datetime,
    ) -> CheckInResult:
        data = await self._api.post_json(
            "/statistics/checkin",
            {
                "employeeId": int(employee_id),
                "date": format_iso_date(work_date),
                "checkinTime": checkin_time.isoformat(),
            },
        )
        if not isinstance(data, dict):
            data = {}
        if data.get("success") is False:
            raise RemoteFailure(str(data.get("message") or "Отметка не сохранена"), path="/statistics/checkin")

        stored = checkin_time
        raw_time = data.get("checkin_time") or (data.get("data") or {}).get("checkin_time")
        if raw_time:
            try:
                stored = parse_iso_datetime(raw_time)
            except (TypeError, ValueError):
                logger.debug("Ignoring unreadable checkin_time %r", raw_time)

        is_late = data.get("is_late")
        return CheckInResult(
            success=True,
            checkin_time=stored,
            is_late=is_late if isinstance(is_late, bool) else None,
        )


def _to_row(item: Any) -> Optional[EmployeeScheduleRow]:
    if not isinstance(item, dict):
        return None
    try:
        employee_id = int(item["employee_id"])
    except (KeyError, TypeError, ValueError):
        logger.debug("Dropping schedule row without employee_id: %r", item)
        return None

    days = []
    for entry in item.get("schedule") or []:
        day = _to_day(employee_id, entry)
        if day is not None:
            days.append(day)

    salon_id = item.get("salon_id")
    return EmployeeScheduleRow(
        employee_id=employee_id,
        employee_name=str(item.get("employee_name") or ""),
        position=item.get("position"),
        salon_id=int(salon_id) if isinstance(salon_id, (int, str)) and str(salon_id).isdigit() else None,
        salon_name=item.get("salon_name"),
        days=tuple(days),
    )


def _to_day(employee_id: int, entry: Any) -> Optional[AttendanceDay]:
    if not isinstance(entry, dict):
        return None
    try:
        work_date = parse_iso_date(entry["date"])
        start = parse_hhmm(entry.get("start_time") or None)
        end = parse_hhmm(entry.get("end_time") or None)
        checkin_time = parse_iso_datetime(entry["checkin_time"]) if entry.get("checkin_time") else None
    except (KeyError, TypeError, ValueError):
        logger.debug("Dropping attendance day %r", entry)
        return None

    return AttendanceDay(
        employee_id=employee_id,
        work_date=work_date,
        day_name=str(entry.get("day_name") or ""),
        is_working=bool(entry.get("is_working")) and not is_day_off_flag(entry.get("is_working")),
        start_time=start,
        end_time=end,
        checked_in=bool(entry.get("checked_in")),
        checkin_time=checkin_time,
        is_late=bool(entry.get("is_late")),
    )
