from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from .api.client import ApiClient, ApiConfig
from .attendance.factory import AttendanceStrategyFactory
from .attendance.http_attendance_repository import HttpAttendanceRepository
from .attendance.service import AttendanceTracker
from .common.validators import require_non_empty
from .core.constants import DEFAULT_REQUEST_TIMEOUT, DEFAULT_SYNC_COOLDOWN_SECONDS
from .earnings.http_earnings_repository import HttpEarningsRepository
from .earnings.reconciler import EarningsReconciler
from .earnings.service import EarningsReportService
from .schedules.http_schedule_repository import HttpScheduleRepository
from .schedules.service import ScheduleService
from .sync.guard import SyncGuard
from .sync.service import RosterSyncService


@dataclass(frozen=True)
class Container:
    api: ApiClient

    schedules_repo: HttpScheduleRepository
    attendance_repo: HttpAttendanceRepository
    earnings_repo: HttpEarningsRepository

    roster_sync: RosterSyncService
    schedule_service: ScheduleService
    attendance_tracker: AttendanceTracker
    earnings_report_service: EarningsReportService

    async def aclose(self) -> None:
        await self.roster_sync.aclose()
        await self.api.aclose()


def build_container(*, settings: Any, transport: Optional[httpx.AsyncBaseTransport] = None) -> Container:
    config = ApiConfig(
        base_url=require_non_empty(str(getattr(settings, "API_BASE_URL", "") or ""), "API_BASE_URL"),
        token=getattr(settings, "API_TOKEN", None),
        timeout=float(getattr(settings, "REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)),
    )
    api = ApiClient(config, transport=transport)

    schedules_repo = HttpScheduleRepository(api)
    attendance_repo = HttpAttendanceRepository(api)
    earnings_repo = HttpEarningsRepository(api)

    guard = SyncGuard(
        name="roster",
        cooldown=float(getattr(settings, "SYNC_COOLDOWN_SECONDS", DEFAULT_SYNC_COOLDOWN_SECONDS)),
    )
    roster_sync = RosterSyncService(schedules_repo, guard)
    schedule_service = ScheduleService(schedules_repo, on_saved=roster_sync.on_schedule_saved)
    attendance_tracker = AttendanceTracker(
        attendance_repo,
        schedules_repo,
        strategy_factory=AttendanceStrategyFactory(),
    )
    earnings_report_service = EarningsReportService(
        attendance_repo,
        earnings_repo,
        reconciler=EarningsReconciler(),
    )

    return Container(
        api=api,
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        earnings_repo=earnings_repo,
        roster_sync=roster_sync,
        schedule_service=schedule_service,
        attendance_tracker=attendance_tracker,
        earnings_report_service=earnings_report_service,
    )
