from __future__ import annotations

import json
from datetime import date, datetime, time, timezone
from decimal import Decimal

import httpx
import pytest

from salon_roster.api.client import ApiClient, ApiConfig
from salon_roster.attendance.http_attendance_repository import HttpAttendanceRepository
from salon_roster.core.exceptions import RemoteFailure
from salon_roster.earnings.http_earnings_repository import HttpEarningsRepository
from salon_roster.schedules.http_schedule_repository import HttpScheduleRepository


def _client(handler) -> ApiClient:
    return ApiClient(ApiConfig(base_url="http://testserver/api", token="secret"), transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_schedule_fetch_sends_range_and_token():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "working_hours": {"1": {"start": "09:00", "end": "18:00"}},
                "time_off": [{"date": "2026-02-03", "reason": "Отпуск"}],
                "showSunday": False,
            },
        )

    async with _client(handler) as api:
        raw = await HttpScheduleRepository(api).fetch(
            employee_id=5, start_date=date(2026, 2, 2), end_date=date(2026, 2, 8)
        )

    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/api/employees/5/schedule"
    assert request.url.params["start_date"] == "2026-02-02"
    assert request.url.params["end_date"] == "2026-02-08"
    assert request.headers["Authorization"] == "Bearer secret"
    assert raw.working_hours == {"1": {"start": "09:00", "end": "18:00"}}
    assert raw.time_off == [{"date": "2026-02-03", "reason": "Отпуск"}]
    assert raw.show_sunday is False


@pytest.mark.asyncio
async def test_schedule_fetch_without_range_and_with_empty_body():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"working_hours": None})

    async with _client(handler) as api:
        raw = await HttpScheduleRepository(api).fetch(employee_id=5)

    assert "start_date" not in seen[0].url.params
    assert raw.working_hours == {}
    assert raw.time_off == []
    assert raw.show_sunday is None


@pytest.mark.asyncio
async def test_schedule_replace_puts_whole_document():
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"success": True})

    working_hours = {"1": {"start": "09:00", "end": "18:00", "is_working": True}}
    async with _client(handler) as api:
        raw = await HttpScheduleRepository(api).replace(
            employee_id=5,
            working_hours=working_hours,
            time_off=[{"date": "2026-02-03", "reason": "Отпуск"}],
            show_sunday=False,
        )

    assert bodies == [
        {
            "employee_id": 5,
            "working_hours": working_hours,
            "time_off": [{"date": "2026-02-03", "reason": "Отпуск"}],
            "showSunday": False,
        }
    ]
    assert raw.working_hours == working_hours
    assert raw.show_sunday is False


@pytest.mark.asyncio
async def test_http_error_becomes_remote_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"message": "Ошибка базы данных"})

    async with _client(handler) as api:
        with pytest.raises(RemoteFailure) as exc:
            await HttpScheduleRepository(api).fetch(employee_id=5)

    assert exc.value.status_code == 500
    assert str(exc.value) == "Ошибка базы данных"
    assert exc.value.path == "/employees/5/schedule"


@pytest.mark.asyncio
async def test_transport_error_becomes_remote_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as api:
        with pytest.raises(RemoteFailure) as exc:
            await HttpEarningsRepository(api).list_earnings(start_date=date(2026, 2, 1), end_date=date(2026, 2, 28))

    assert exc.value.status_code is None


@pytest.mark.asyncio
async def test_non_json_body_becomes_remote_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    async with _client(handler) as api:
        with pytest.raises(RemoteFailure):
            await HttpScheduleRepository(api).fetch(employee_id=5)


@pytest.mark.asyncio
async def test_checkin_posts_employee_date_and_time():
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/statistics/checkin"
        bodies.append(json.loads(request.content))
        return httpx.Response(
            200,
            json={"success": True, "checkin_time": "2026-02-02T09:10:00.000Z", "is_late": False},
        )

    async with _client(handler) as api:
        result = await HttpAttendanceRepository(api).create_checkin(
            employee_id=5, work_date=date(2026, 2, 2), checkin_time=datetime(2026, 2, 2, 9, 10)
        )

    assert bodies == [{"employeeId": 5, "date": "2026-02-02", "checkinTime": "2026-02-02T09:10:00"}]
    assert result.success is True
    assert result.is_late is False
    assert result.checkin_time == datetime(2026, 2, 2, 9, 10, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_checkin_rejected_by_backend():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False, "message": "Отметка уже есть"})

    async with _client(handler) as api:
        with pytest.raises(RemoteFailure, match="Отметка уже есть"):
            await HttpAttendanceRepository(api).create_checkin(
                employee_id=5, work_date=date(2026, 2, 2), checkin_time=datetime(2026, 2, 2, 9, 10)
            )


@pytest.mark.asyncio
async def test_employee_schedules_are_parsed():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {
                    "employee_id": 5,
                    "employee_name": "Анна",
                    "position": "Мастер",
                    "salon_id": 2,
                    "salon_name": "Центр",
                    "schedule": [
                        {
                            "date": "2026-02-02",
                            "day_name": "Понедельник",
                            "is_working": True,
                            "start_time": "09:00",
                            "end_time": "18:00",
                            "checked_in": False,
                            "checkin_time": None,
                            "is_late": False,
                        },
                        {"date": "garbage"},
                    ],
                },
                {"employee_name": "без id"},
            ],
        )

    async with _client(handler) as api:
        rows = await HttpAttendanceRepository(api).list_schedules(
            start_date=date(2026, 2, 2), end_date=date(2026, 2, 8), salon_id=2
        )

    assert seen[0].url.params["startDate"] == "2026-02-02"
    assert seen[0].url.params["salonId"] == "2"
    assert len(rows) == 1
    row = rows[0]
    assert (row.employee_id, row.employee_name, row.salon_id, row.salon_name) == (5, "Анна", 2, "Центр")
    assert len(row.days) == 1
    assert row.days[0].start_time == time(9, 0)
    assert row.days[0].checked_in is False


@pytest.mark.asyncio
async def test_earnings_accept_null_and_string_amounts():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {"employee_id": 1, "employee_name": "Анна", "total_earnings": "1250.50", "appointments_count": "3"},
                {"employee_id": 2, "total_earnings": None, "appointments_count": None},
                {"total_earnings": "10"},
            ],
        )

    async with _client(handler) as api:
        rows = await HttpEarningsRepository(api).list_earnings(start_date=date(2026, 2, 1), end_date=date(2026, 2, 28))

    assert "salonId" not in seen[0].url.params
    assert [r.employee_id for r in rows] == [1, 2]
    assert rows[0].total_earnings == Decimal("1250.50")
    assert rows[0].appointments_count == 3
    assert rows[1].total_earnings == Decimal("0")
    assert rows[1].appointments_count == 0


@pytest.mark.asyncio
async def test_employee_schedule_day_with_string_off_flag_is_not_working():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[
                {
                    "employee_id": 5,
                    "schedule": [
                        {"date": "2026-02-07", "is_working": "false", "start_time": "00:00", "end_time": "00:00"},
                        {"date": "2026-02-08", "is_working": 1, "start_time": "10:00", "end_time": "16:00"},
                    ],
                }
            ],
        )

    async with _client(handler) as api:
        rows = await HttpAttendanceRepository(api).list_schedules(start_date=date(2026, 2, 7), end_date=date(2026, 2, 8))

    assert [d.is_working for d in rows[0].days] == [False, True]
