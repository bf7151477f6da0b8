from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import AsyncIterator, Awaitable, Callable, Dict, List, Optional

from ..common.datetime_utils import now_local, week_bounds
from ..common.validators import require_employee_id
from ..core.exceptions import DomainError, StaleResponse
from ..time_off.register import TimeOffRegister
from .model import WeeklySchedule, encode_working_hours
from .repository import RawSchedule, ScheduleRepository
from .roster import RosterDay, expand_roster
from .store import WeeklyScheduleStore

logger = logging.getLogger(__name__)

SavedHook = Callable[[int], Awaitable[object]]


@dataclass
class ScheduleView:
    """Everything one opened schedule screen works on."""

    store: WeeklyScheduleStore
    time_off: TimeOffRegister
    start_date: date
    end_date: date
    saved_time_off: TimeOffRegister = field(default_factory=TimeOffRegister)

    @property
    def employee_id(self) -> int:
        return self.store.employee_id

    def roster(self) -> List[RosterDay]:
        return expand_roster(self.store.schedule, self.time_off, self.start_date, self.end_date)


class ScheduleService:
    """Loads, edits and saves employee schedules against the backend.

    Per employee, a save and a load never overlap, and a load that finishes after
    its view was closed or reopened is discarded.
    """

    def __init__(self, schedules: ScheduleRepository, *, on_saved: Optional[SavedHook] = None):
        self._schedules = schedules
        self._on_saved = on_saved
        self._views: Dict[int, ScheduleView] = {}
        self._locks: Dict[int, asyncio.Lock] = {}
        self._generations: Dict[int, int] = {}
        self._pending: Dict[int, int] = {}

    @asynccontextmanager
    async def _exclusive(self, employee_id: int) -> AsyncIterator[None]:
        lock = self._locks.setdefault(employee_id, asyncio.Lock())
        self._pending[employee_id] = self._pending.get(employee_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._pending[employee_id] -= 1
            if not self._pending[employee_id]:
                del self._pending[employee_id]
                if employee_id not in self._views:
                    self._forget(employee_id)

    def _bump(self, employee_id: int) -> int:
        generation = self._generations.get(employee_id, 0) + 1
        self._generations[employee_id] = generation
        return generation

    def view(self, employee_id: int) -> Optional[ScheduleView]:
        return self._views.get(int(employee_id))

    async def open(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> ScheduleView:
        employee_id = require_employee_id(employee_id)
        if start_date is None or end_date is None:
            start_date, end_date = week_bounds(now_local().date())

        generation = self._bump(employee_id)
        async with self._exclusive(employee_id):
            raw = await self._schedules.fetch(employee_id=employee_id, start_date=start_date, end_date=end_date)
            if self._generations.get(employee_id) != generation:
                logger.info("Discarding stale schedule load for employee %s", employee_id)
                raise StaleResponse(f"Schedule view for employee {employee_id} changed during load")
            view = self._apply(employee_id, raw, start_date, end_date)
            self._views[employee_id] = view
            return view

    async def reload(self, employee_id: int) -> ScheduleView:
        current = self.view(employee_id)
        if current is None:
            return await self.open(employee_id)
        return await self.open(employee_id, start_date=current.start_date, end_date=current.end_date)

    def close(self, employee_id: int) -> None:
        """Forget the view; a load or save still in flight for it is discarded."""
        employee_id = int(employee_id)
        self._views.pop(employee_id, None)
        if self._pending.get(employee_id):
            self._bump(employee_id)
            return
        self._forget(employee_id)

    def _forget(self, employee_id: int) -> None:
        self._generations.pop(employee_id, None)
        self._locks.pop(employee_id, None)

    def edit(self, employee_id: int) -> ScheduleView:
        view = self._require_view(employee_id)
        view.store.enter_edit()
        return view

    def cancel(self, employee_id: int) -> ScheduleView:
        view = self._require_view(employee_id)
        view.store.cancel()
        view.time_off = view.saved_time_off.copy()
        return view

    async def save(self, employee_id: int) -> WeeklySchedule:
        """Write the edited week and time off, replacing the remote copy.

        On RemoteFailure nothing local changes and edit mode stays on.
        """
        employee_id = int(employee_id)
        async with self._exclusive(employee_id):
            view = self._require_view(employee_id)
            if not view.store.is_editing:
                return view.store.schedule.copy()

            generation = self._generations.get(employee_id)
            cleaned = view.store.save()
            time_off = view.time_off.copy()
            await self._schedules.replace(
                employee_id=employee_id,
                working_hours=encode_working_hours(cleaned.days),
                time_off=time_off.to_payload(),
                show_sunday=cleaned.show_sunday,
            )
            logger.info("Saved schedule for employee %s (%d day(s))", employee_id, len(cleaned.days))

            if self._generations.get(employee_id) == generation:
                view.store.mark_saved(cleaned)
                view.saved_time_off = time_off.copy()
            else:
                logger.info("Schedule view for employee %s closed during save", employee_id)

        await self._notify_saved(employee_id)
        return cleaned

    async def _notify_saved(self, employee_id: int) -> None:
        if self._on_saved is None:
            return
        try:
            await self._on_saved(employee_id)
        except DomainError as exc:
            logger.warning("Post-save refresh for employee %s failed: %s", employee_id, exc)

    def _require_view(self, employee_id: int) -> ScheduleView:
        view = self._views.get(int(employee_id))
        if view is None:
            raise DomainError(f"Расписание сотрудника #{employee_id} не открыто")
        return view

    @staticmethod
    def _apply(employee_id: int, raw: RawSchedule, start_date: date, end_date: date) -> ScheduleView:
        store = WeeklyScheduleStore(employee_id)
        store.load(raw.working_hours, show_sunday=raw.show_sunday)
        time_off = TimeOffRegister.from_payload(raw.time_off)
        return ScheduleView(
            store=store,
            time_off=time_off,
            start_date=start_date,
            end_date=end_date,
            saved_time_off=time_off.copy(),
        )
