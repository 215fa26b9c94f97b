from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import PunchType

PUNCH_FIELDS = tuple(p.field_name for p in PunchType)


@dataclass(frozen=True)
class DailyRecord:
    """Domain entity: one employee's punches for one calendar day.

    Punches are canonical ``HH:MM`` strings or ``None``. ``total_minutes`` and
    ``balance_minutes`` are derived and recomputed on every mutation.
    """

    work_date: date
    employee_id: str
    entry: Optional[str] = None
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None
    snack_start: Optional[str] = None
    snack_end: Optional[str] = None
    exit: Optional[str] = None
    total_minutes: int = 0
    balance_minutes: int = 0
    location: Optional[str] = None

    @property
    def key(self) -> tuple[date, str]:
        return (self.work_date, self.employee_id)

    def punch(self, punch_type: PunchType) -> Optional[str]:
        return getattr(self, punch_type.field_name)

    def has_punches(self) -> bool:
        return any(getattr(self, f) for f in PUNCH_FIELDS)


@dataclass(frozen=True)
class DailyStats:
    total: int
    balance: int
