from __future__ import annotations

import json
from datetime import date, datetime

import httpx
import pytest

from salon_roster.config import get_settings_module
from salon_roster.core.enums import WeekDay
from salon_roster.main import create_container


@pytest.mark.parametrize(
    "env, module",
    [
        ("production", "salon_roster.config.production"),
        ("prod", "salon_roster.config.production"),
        ("TESTING", "salon_roster.config.testing"),
        ("anything", "salon_roster.config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == module


class FakeBackend:
    def __init__(self):
        self.schedules: dict[int, dict] = {
            5: {"working_hours": {"1": {"start": "09:00", "end": "18:00"}}, "time_off": [], "showSunday": True}
        }
        self.checkins: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/api/employees/5/schedule" and request.method == "GET":
            return httpx.Response(200, json=self.schedules[5])
        if path == "/api/employees/5/schedule" and request.method == "PUT":
            body = json.loads(request.content)
            self.schedules[5] = body
            return httpx.Response(200, json={"success": True})
        if path == "/api/statistics/checkin":
            self.checkins.append(json.loads(request.content))
            return httpx.Response(200, json={"success": True})
        if path == "/api/statistics/employee-schedules":
            return httpx.Response(200, json=[])
        return httpx.Response(404, json={"message": "not found"})


@pytest.mark.asyncio
async def test_container_wires_save_refresh_and_checkin(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    backend = FakeBackend()
    container = create_container(transport=httpx.MockTransport(backend))

    try:
        view = await container.schedule_service.open(5, start_date=date(2026, 2, 2), end_date=date(2026, 2, 8))
        container.schedule_service.edit(5)
        view.store.set_working_day(WeekDay.TUESDAY, True)
        await container.schedule_service.save(5)
        await container.roster_sync.guard.wait_idle()

        assert set(backend.schedules[5]["working_hours"]) == {"1", "2"}
        cached = container.roster_sync.cached(5)
        assert cached is not None
        assert cached.is_working_day(WeekDay.TUESDAY)

        record = await container.attendance_tracker.check_in(5, date(2026, 2, 3), now=datetime(2026, 2, 3, 9, 5))
        assert record.is_late is False
        assert backend.checkins[0]["employeeId"] == 5
    finally:
        await container.aclose()
