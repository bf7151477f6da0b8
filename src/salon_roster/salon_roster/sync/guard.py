"""Non-reentrant guard for bulk refresh passes.

While a pass runs, or while it is settling afterwards, new triggers are
suppressed. Settling ends on an explicit `settle()` or after the cooldown,
whichever comes first.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from ..core.constants import DEFAULT_SYNC_COOLDOWN_SECONDS
from ..core.enums import SyncState

logger = logging.getLogger(__name__)


class SyncGuard:
    def __init__(self, *, name: str = "sync", cooldown: float = DEFAULT_SYNC_COOLDOWN_SECONDS):
        self._name = name
        self._cooldown = float(cooldown)
        self._state = SyncState.IDLE
        self._settled = asyncio.Event()
        self._release_task: Optional[asyncio.Task] = None

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return self._state == SyncState.IDLE

    async def run(self, job: Callable[[], Awaitable[Any]]) -> bool:
        """Run `job` unless a pass is already in flight; returns whether it ran."""
        if self._state != SyncState.IDLE:
            logger.info("%s pass suppressed (state=%s)", self._name, self._state.value)
            return False

        self._state = SyncState.SYNCING
        self._settled.clear()
        try:
            await job()
        finally:
            self._state = SyncState.SETTLING
            self._release_task = asyncio.create_task(self._release())
        return True

    def settle(self) -> None:
        self._settled.set()

    async def wait_idle(self) -> None:
        if self._release_task is not None:
            await self._release_task

    async def aclose(self) -> None:
        """Settle immediately and wait for the release task to finish."""
        self.settle()
        await self.wait_idle()
        self._release_task = None

    async def _release(self) -> None:
        try:
            await asyncio.wait_for(self._settled.wait(), timeout=self._cooldown)
        except asyncio.TimeoutError:
            logger.debug("%s settled by cooldown after %.1fs", self._name, self._cooldown)
        finally:
            self._state = SyncState.IDLE
