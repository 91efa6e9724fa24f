from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from ..employees.model import Employee
from ..holidays.model import Holiday
from ..rules.model import AttendanceRules
from ..shifts.model import ShiftSchedule
from .model import DayAttendanceRecord


class EmployeeRepository(Protocol):
    def list_for_branch(self, branch_id: str) -> Mapping[str, Employee]:
        raise NotImplementedError

    def get(self, branch_id: str, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError


class SettingsRepository(Protocol):
    def get_shift_schedules(self) -> Sequence[ShiftSchedule]:
        raise NotImplementedError


class RulesRepository(Protocol):
    def get_attendance_rules(self, branch_id: str) -> AttendanceRules:
        raise NotImplementedError


class HolidayRepository(Protocol):
    def list_for_year(self, year: int) -> Sequence[Holiday]:
        raise NotImplementedError


class AttendanceRepository(Protocol):
    def save_processed(
        self,
        branch_id: str,
        month_year: str,
        data: Mapping[str, Mapping[str, DayAttendanceRecord]],
    ) -> None:
        """Merge records into each employee's ``attendance[month_year]`` bucket.

        Dates not present in ``data`` must be left untouched.
        """

        raise NotImplementedError
