from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, List, Optional

from ..core.exceptions import RemoteFailure
from ..schedules.model import WeeklySchedule, parse_working_hours
from ..schedules.repository import ScheduleRepository
from .guard import SyncGuard

logger = logging.getLogger(__name__)


class RosterSyncService:
    """Keeps a cached weekly schedule for every tracked employee.

    Refresh passes go through a SyncGuard, so a burst of triggers (for example
    one per saved schedule) results in a single pass.
    """

    def __init__(self, schedules: ScheduleRepository, guard: SyncGuard):
        self._schedules = schedules
        self._guard = guard
        self._tracked: List[int] = []
        self._cache: Dict[int, WeeklySchedule] = {}

    @property
    def guard(self) -> SyncGuard:
        return self._guard

    def track(self, employee_ids: Iterable[int]) -> None:
        for employee_id in employee_ids:
            if int(employee_id) not in self._tracked:
                self._tracked.append(int(employee_id))

    def cached(self, employee_id: int) -> Optional[WeeklySchedule]:
        return self._cache.get(int(employee_id))

    async def aclose(self) -> None:
        await self._guard.aclose()

    async def refresh(self, employee_ids: Optional[Iterable[int]] = None) -> bool:
        ids = [int(i) for i in employee_ids] if employee_ids is not None else list(self._tracked)
        return await self._guard.run(lambda: self._refresh_all(ids))

    async def on_schedule_saved(self, employee_id: int) -> bool:
        self.track([employee_id])
        return await self.refresh()

    async def _refresh_all(self, employee_ids: List[int]) -> None:
        results = await asyncio.gather(
            *(self._schedules.fetch(employee_id=i) for i in employee_ids),
            return_exceptions=True,
        )
        failed = 0
        for employee_id, result in zip(employee_ids, results):
            if isinstance(result, RemoteFailure):
                failed += 1
                logger.warning("Roster refresh for employee %s failed: %s", employee_id, result)
                continue
            if isinstance(result, BaseException):
                raise result
            days, _ = parse_working_hours(result.working_hours)
            self._cache[employee_id] = WeeklySchedule(
                employee_id=employee_id,
                days=days,
                show_sunday=True if result.show_sunday is None else result.show_sunday,
            )
        logger.info("Roster refreshed for %d employee(s), %d failed", len(employee_ids) - failed, failed)
