from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Protocol


@dataclass(frozen=True)
class RawSchedule:
    """Schedule payload exactly as stored remotely (keys not normalized)."""

    employee_id: int
    working_hours: Dict[str, Any] = field(default_factory=dict)
    time_off: List[Dict[str, Any]] = field(default_factory=list)
    show_sunday: Optional[bool] = None


class ScheduleRepository(Protocol):
    async def fetch(
        self,
        *,
        employee_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> RawSchedule:
        raise NotImplementedError

    async def replace(
        self,
        *,
        employee_id: int,
        working_hours: Dict[str, Dict[str, Any]],
        time_off: List[Dict[str, Any]],
        show_sunday: bool = True,
    ) -> RawSchedule:
        """Overwrite the whole remote schedule; returns what the backend stored."""

        raise NotImplementedError
