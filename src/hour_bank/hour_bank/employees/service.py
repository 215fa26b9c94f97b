from __future__ import annotations

import uuid
from dataclasses import fields, replace
from datetime import date
from typing import List, Optional

from ..common.validators import optional_weekday, require_int, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..records.calculator.base import DailyStatsCalculator
from ..records.calculator.segmented_calculator import SegmentedStatsCalculator
from ..records.model import DailyRecord
from ..records.service import with_stats
from ..storage.collection import Collection
from .model import Employee

_EDITABLE_FIELDS = {f.name for f in fields(Employee)} - {"id"}


class EmployeeService:
    """Use case: manage employees (manager screens)."""

    def __init__(
        self,
        employees: Collection[Employee],
        records: Collection[DailyRecord],
        *,
        calculator: Optional[DailyStatsCalculator] = None,
    ):
        self._employees = employees
        self._records = records
        self._calculator = calculator or SegmentedStatsCalculator()

    def list_employees(self) -> List[Employee]:
        return self._employees.get()

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        employee_id = str(employee_id)
        return next((e for e in self._employees.get() if e.id == employee_id), None)

    def require_employee(self, employee_id: str) -> Employee:
        employee = self.get_employee(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def add_employee(
        self,
        *,
        name: str,
        role: str = "",
        pin: str = "",
        active: bool = True,
        short_day_of_week: Optional[int] = None,
        standard_daily_minutes: Optional[int] = None,
        ledger_start_date: Optional[date] = None,
    ) -> Employee:
        employee = Employee(
            id=uuid.uuid4().hex,
            name=require_non_empty(name, "Name"),
            role=(role or "").strip(),
            pin=str(pin or ""),
            active=bool(active),
            short_day_of_week=optional_weekday(short_day_of_week, "Short day"),
            standard_daily_minutes=self._daily_minutes(standard_daily_minutes),
            ledger_start_date=ledger_start_date,
        )
        employees = self._employees.get()
        employees.append(employee)
        self._employees.put(employees)
        return employee

    def update_employee(self, employee_id: str, **changes) -> Employee:
        """Overlay the given fields on the stored employee."""
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown employee fields: {', '.join(sorted(unknown))}")

        if "name" in changes:
            changes["name"] = require_non_empty(changes["name"], "Name")
        if "short_day_of_week" in changes:
            changes["short_day_of_week"] = optional_weekday(changes["short_day_of_week"], "Short day")
        if "standard_daily_minutes" in changes:
            changes["standard_daily_minutes"] = self._daily_minutes(changes["standard_daily_minutes"])

        employees = self._employees.get()
        for i, e in enumerate(employees):
            if e.id == str(employee_id):
                updated = replace(e, **changes)
                employees[i] = updated
                self._employees.put(employees)
                if _schedule(updated) != _schedule(e):
                    self._recompute_records(updated)
                return updated
        raise NotFoundError("Employee not found")

    def delete_employee(self, employee_id: str) -> bool:
        """Remove the employee and cascade to their daily records."""
        employee_id = str(employee_id)
        employees = self._employees.get()
        remaining = [e for e in employees if e.id != employee_id]
        if len(remaining) == len(employees):
            return False

        self._employees.put(remaining)
        self._records.put([r for r in self._records.get() if r.employee_id != employee_id])
        return True

    def _recompute_records(self, employee: Employee) -> None:
        # Stored totals are derived from the schedule, refresh them.
        records = [
            with_stats(r, employee, self._calculator) if r.employee_id == employee.id else r
            for r in self._records.get()
        ]
        self._records.put(records)

    @staticmethod
    def _daily_minutes(value) -> Optional[int]:
        if value is None or value == "":
            return None
        minutes = require_int(value, "Daily minutes")
        if minutes < 0:
            raise ValidationError("Daily minutes cannot be negative")
        return minutes


def _schedule(employee: Employee) -> tuple:
    return (employee.effective_short_day, employee.effective_daily_minutes)
