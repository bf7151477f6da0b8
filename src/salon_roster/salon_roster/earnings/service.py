from __future__ import annotations

import asyncio
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from .model import EarningsReport
from .reconciler import EarningsReconciler
from .repository import EarningsRepository


class EarningsReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        earnings: EarningsRepository,
        *,
        reconciler: Optional[EarningsReconciler] = None,
    ):
        self._attendance = attendance
        self._earnings = earnings
        self._reconciler = reconciler or EarningsReconciler()

    async def build(self, *, start: date, end: date, salon_id: Optional[int] = None) -> EarningsReport:
        schedules, earnings = await asyncio.gather(
            self._attendance.list_schedules(start_date=start, end_date=end, salon_id=salon_id),
            self._earnings.list_earnings(start_date=start, end_date=end, salon_id=salon_id),
        )
        return EarningsReport(rows=self._reconciler.reconcile(schedules, earnings))
