from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import date_range, dates_in_month
from ..common.validators import require_iso_date, require_month_year, require_non_empty
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ProcessRequest:
    """Month mode (``monthYear``) or range mode (``startDate``/``endDate``).

    Range mode wins when both are supplied.
    """

    branch_id: str
    month_year: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    employee_ids: Optional[frozenset[str]] = None

    @property
    def is_range(self) -> bool:
        return self.start_date is not None and self.end_date is not None

    @property
    def display_range(self) -> str:
        if self.is_range:
            return f"{self.start_date.isoformat()} to {self.end_date.isoformat()}"
        return str(self.month_year)

    def dates(self) -> list[date]:
        if self.is_range:
            return date_range(self.start_date, self.end_date)
        return dates_in_month(self.month_year)

    def years(self) -> list[int]:
        return sorted({d.year for d in self.dates()})

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "ProcessRequest":
        payload = payload or {}
        branch_id = require_non_empty(payload.get("branchId"), "branchId")

        start_raw, end_raw = payload.get("startDate"), payload.get("endDate")
        month_raw = payload.get("monthYear")

        employee_ids = None
        raw_ids = payload.get("employeeIds")
        if raw_ids:
            if not isinstance(raw_ids, (list, tuple)):
                raise ValidationError("employeeIds must be a list")
            employee_ids = frozenset(str(i) for i in raw_ids)

        if start_raw and end_raw:
            start = require_iso_date(start_raw, "startDate")
            end = require_iso_date(end_raw, "endDate")
            if end < start:
                raise ValidationError("endDate must not be before startDate")
            return cls(branch_id=branch_id, start_date=start, end_date=end, employee_ids=employee_ids)

        if month_raw:
            return cls(branch_id=branch_id, month_year=require_month_year(month_raw), employee_ids=employee_ids)

        raise ValidationError("Either monthYear or both startDate and endDate are required")
