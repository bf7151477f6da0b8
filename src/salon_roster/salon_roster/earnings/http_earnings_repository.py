from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence

from ..api.client import ApiClient
from ..common.datetime_utils import format_iso_date
from ..core.exceptions import RemoteFailure
from .model import EarningsSummary, to_amount, to_count
from .repository import EarningsRepository

logger = logging.getLogger(__name__)


class HttpEarningsRepository(EarningsRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    async def list_earnings(
        self,
        *,
        start_date: date,
        end_date: date,
        salon_id: Optional[int] = None,
    ) -> Sequence[EarningsSummary]:
        path = "/statistics/employee-earnings"
        data = await self._api.get_json(
            path,
            params={
                "startDate": format_iso_date(start_date),
                "endDate": format_iso_date(end_date),
                "salonId": salon_id,
            },
        )
        if not isinstance(data, list):
            raise RemoteFailure("Некорректный ответ сервера", path=path)

        out: List[EarningsSummary] = []
        for item in data:
            try:
                out.append(
                    EarningsSummary(
                        employee_id=int(item["employee_id"]),
                        total_earnings=to_amount(item.get("total_earnings")),
                        appointments_count=to_count(item.get("appointments_count")),
                        employee_name=item.get("employee_name"),
                    )
                )
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.debug("Dropping earnings row %r", item)
        return out
