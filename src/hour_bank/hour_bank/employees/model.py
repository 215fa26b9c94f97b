from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Mapping, Optional

from ..core.constants import DEFAULT_SHORT_DAY_OF_WEEK, DEFAULT_STANDARD_DAILY_MINUTES


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Schedule fields are optional; ``None`` means "use the default".
    """

    id: str
    name: str
    role: str = ""
    pin: str = ""
    active: bool = True
    short_day_of_week: Optional[int] = None
    standard_daily_minutes: Optional[int] = None
    ledger_start_date: Optional[date] = None

    @property
    def effective_short_day(self) -> int:
        if self.short_day_of_week is None:
            return DEFAULT_SHORT_DAY_OF_WEEK
        return self.short_day_of_week

    @property
    def effective_daily_minutes(self) -> int:
        if self.standard_daily_minutes is None:
            return DEFAULT_STANDARD_DAILY_MINUTES
        return self.standard_daily_minutes


@dataclass(frozen=True)
class EmployeePatch:
    """Partial employee from a remote row: only the fields the row carried."""

    id: str
    changes: Mapping[str, Any] = field(default_factory=dict)

    def apply_to(self, current: Optional[Employee]) -> Employee:
        return replace(current or Employee(id=self.id, name=""), **self.changes)
