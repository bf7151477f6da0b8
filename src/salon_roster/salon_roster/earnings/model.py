from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from ..attendance.model import AttendanceDay


@dataclass(frozen=True)
class EarningsSummary:
    employee_id: int
    total_earnings: Decimal = Decimal("0")
    appointments_count: int = 0
    employee_name: Optional[str] = None


@dataclass(frozen=True)
class CombinedRecord:
    """Schedule row joined with its earnings; never persisted."""

    employee_id: int
    total_earnings: Decimal
    appointments_count: int
    employee_name: str = ""
    salon_name: Optional[str] = None
    days: tuple[AttendanceDay, ...] = ()

    @property
    def working_days(self) -> int:
        return sum(1 for d in self.days if d.is_working)

    @property
    def late_checkins(self) -> int:
        return sum(1 for d in self.days if d.checked_in and d.is_late)


@dataclass(frozen=True)
class EarningsReport:
    rows: List[CombinedRecord] = field(default_factory=list)

    @property
    def total_earnings(self) -> Decimal:
        return sum((r.total_earnings for r in self.rows), Decimal("0"))

    @property
    def appointments_count(self) -> int:
        return sum(r.appointments_count for r in self.rows)

    @property
    def totals(self) -> dict:
        return {"total_earnings": self.total_earnings, "appointments_count": self.appointments_count}


def to_amount(value: Any) -> Decimal:
    """Currency value from the feed; SQL SUM over no rows arrives as null."""
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {value!r}") from None


def to_count(value: Any) -> int:
    if value is None or value == "":
        return 0
    return int(value)
