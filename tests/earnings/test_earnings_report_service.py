from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from salon_roster.attendance.model import EmployeeScheduleRow
from salon_roster.earnings.model import EarningsSummary
from salon_roster.earnings.service import EarningsReportService


class FakeAttendanceRepo:
    def __init__(self, rows):
        self._rows = rows
        self.last_args = None

    async def list_schedules(self, *, start_date: date, end_date: date, salon_id=None):
        self.last_args = {"start_date": start_date, "end_date": end_date, "salon_id": salon_id}
        return self._rows

    async def create_checkin(self, **kwargs):
        raise NotImplementedError


class FakeEarningsRepo:
    def __init__(self, rows):
        self._rows = rows
        self.last_args = None

    async def list_earnings(self, *, start_date: date, end_date: date, salon_id=None):
        self.last_args = {"start_date": start_date, "end_date": end_date, "salon_id": salon_id}
        return self._rows


@pytest.mark.asyncio
async def test_report_totals():
    attendance = FakeAttendanceRepo(
        [
            EmployeeScheduleRow(employee_id=1, employee_name="Анна"),
            EmployeeScheduleRow(employee_id=2, employee_name="Ольга"),
        ]
    )
    earnings = FakeEarningsRepo(
        [
            EarningsSummary(employee_id=1, total_earnings=Decimal("1000.50"), appointments_count=2),
            EarningsSummary(employee_id=2, total_earnings=Decimal("499.50"), appointments_count=1),
        ]
    )

    report = await EarningsReportService(attendance, earnings).build(start=date(2026, 2, 1), end=date(2026, 2, 28))

    assert report.total_earnings == Decimal("1500.00")
    assert report.appointments_count == 3
    assert report.totals == {"total_earnings": Decimal("1500.00"), "appointments_count": 3}


@pytest.mark.asyncio
async def test_report_forwards_salon_filter():
    attendance = FakeAttendanceRepo([])
    earnings = FakeEarningsRepo([])
    svc = EarningsReportService(attendance, earnings)

    report = await svc.build(start=date(2026, 2, 1), end=date(2026, 2, 28), salon_id=7)

    assert report.rows == []
    assert attendance.last_args["salon_id"] == 7
    assert earnings.last_args == {"start_date": date(2026, 2, 1), "end_date": date(2026, 2, 28), "salon_id": 7}
