from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Employment:
    shift_id: Optional[str] = None
    salary_amount: float = 0

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Employment":
        if not isinstance(data, Mapping):
            return cls()
        shift_id = data.get("shiftId")
        return cls(
            shift_id=str(shift_id) if shift_id not in (None, "") else None,
            salary_amount=float(data.get("salaryAmount") or 0),
        )


@dataclass(frozen=True)
class Employee:
    """Read-only roster entry; ``attendance`` is keyed by ``MM-YYYY`` then ``YYYY-MM-DD``."""

    employee_id: str
    employment: Employment = Employment()
    attendance: Mapping[str, Mapping[str, Mapping[str, Any]]] = field(default_factory=dict)

    def prior_record(self, month_year: str, iso_date: str) -> Mapping[str, Any]:
        month = self.attendance.get(month_year) or {}
        return month.get(iso_date) or {}

    @classmethod
    def from_dict(cls, employee_id: str, data: Mapping[str, Any]) -> "Employee":
        return cls(
            employee_id=str(employee_id),
            employment=Employment.from_dict(data.get("employment")),
            attendance=data.get("attendance") or {},
        )


def roster_from_dict(data: Mapping[str, Mapping[str, Any]]) -> dict[str, Employee]:
    return {str(eid): Employee.from_dict(eid, e) for eid, e in (data or {}).items()}
