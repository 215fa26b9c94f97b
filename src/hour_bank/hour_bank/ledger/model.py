from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List

from ..records.model import DailyRecord


@dataclass(frozen=True)
class StatementLine:
    """One calendar day of a monthly statement (read-model)."""

    work_date: date
    record: DailyRecord
    persisted: bool
    target_minutes: int
    worked_minutes: int
    balance_minutes: int
    short_day: bool


@dataclass(frozen=True)
class MonthlyStatement:
    employee_id: str
    year: int
    month: int
    lines: List[StatementLine]
    worked_minutes: int
    target_minutes: int
    balance_minutes: int
