from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import EarningsSummary


class EarningsRepository(Protocol):
    async def list_earnings(
        self,
        *,
        start_date: date,
        end_date: date,
        salon_id: Optional[int] = None,
    ) -> Sequence[EarningsSummary]:
        raise NotImplementedError
