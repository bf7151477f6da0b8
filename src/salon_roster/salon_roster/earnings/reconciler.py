from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List

from ..attendance.model import EmployeeScheduleRow
from .model import CombinedRecord, EarningsSummary

logger = logging.getLogger(__name__)


class EarningsReconciler:
    """Left outer join of schedule rows with earnings, keyed by employee_id.

    Schedules drive the result: their order and count are kept, earnings without
    a schedule row are dropped, and a missing match counts as zero.
    """

    def reconcile(
        self,
        schedules: Iterable[EmployeeScheduleRow],
        earnings: Iterable[EarningsSummary],
    ) -> List[CombinedRecord]:
        by_id: Dict[int, EarningsSummary] = {}
        for e in earnings:
            by_id.setdefault(e.employee_id, e)

        out: List[CombinedRecord] = []
        for row in schedules:
            match = by_id.get(row.employee_id)
            out.append(
                CombinedRecord(
                    employee_id=row.employee_id,
                    total_earnings=match.total_earnings if match else Decimal("0"),
                    appointments_count=match.appointments_count if match else 0,
                    employee_name=row.employee_name,
                    salon_name=row.salon_name,
                    days=row.days,
                )
            )

        logger.debug("Reconciled %d schedule row(s) with %d earnings row(s)", len(out), len(by_id))
        return out
