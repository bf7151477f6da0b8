from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict

from ..common.datetime_utils import format_iso_date
from ..core.constants import DEFAULT_TIME_OFF_REASON


@dataclass(frozen=True)
class TimeOffException:
    """A specific calendar date on which the employee does not work."""

    date: date
    reason: str = DEFAULT_TIME_OFF_REASON

    def to_payload(self) -> Dict[str, Any]:
        return {"date": format_iso_date(self.date), "reason": self.reason}
