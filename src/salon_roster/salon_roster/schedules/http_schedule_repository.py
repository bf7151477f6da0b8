from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from ..api.client import ApiClient
from ..common.datetime_utils import format_iso_date
from .repository import RawSchedule, ScheduleRepository


class HttpScheduleRepository(ScheduleRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    async def fetch(
        self,
        *,
        employee_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> RawSchedule:
        data = await self._api.get_json(
            f"/employees/{int(employee_id)}/schedule",
            params={
                "start_date": format_iso_date(start_date) if start_date else None,
                "end_date": format_iso_date(end_date) if end_date else None,
            },
        )
        return _to_raw(int(employee_id), data)

    async def replace(
        self,
        *,
        employee_id: int,
        working_hours: Dict[str, Dict[str, Any]],
        time_off: List[Dict[str, Any]],
        show_sunday: bool = True,
    ) -> RawSchedule:
        body = {
            "employee_id": int(employee_id),
            "working_hours": working_hours,
            "time_off": time_off,
            "showSunday": bool(show_sunday),
        }
        data = await self._api.put_json(f"/employees/{int(employee_id)}/schedule", body)
        if not isinstance(data, dict) or "working_hours" not in data:
            # Backend answered without echoing the schedule; what was sent is what is stored.
            data = body
        return _to_raw(int(employee_id), data)


def _to_raw(employee_id: int, data: Any) -> RawSchedule:
    if not isinstance(data, dict):
        data = {}
    working_hours = data.get("working_hours")
    time_off = data.get("time_off")
    show_sunday = data.get("showSunday", data.get("show_sunday"))
    return RawSchedule(
        employee_id=employee_id,
        working_hours=working_hours if isinstance(working_hours, dict) else {},
        time_off=time_off if isinstance(time_off, list) else [],
        show_sunday=show_sunday if isinstance(show_sunday, bool) else None,
    )
