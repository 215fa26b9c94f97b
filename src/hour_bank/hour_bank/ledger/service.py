from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

from ..common.datetime_utils import first_day_of_month, iter_days, last_day_of_month, today_local
from ..employees.model import Employee
from ..records.calculator.base import DailyStatsCalculator
from ..records.calculator.segmented_calculator import SegmentedStatsCalculator
from ..records.model import DailyRecord
from ..schedules.resolver import is_short_day, target_minutes
from ..storage.collection import Collection
from ..transactions.model import BankTransaction
from .model import MonthlyStatement, StatementLine


class BankLedgerService:
    """Use case: bank-of-hours balance and monthly statements.

    Everything is recomputed from the full history on each call; nothing is
    cached between calls.
    """

    def __init__(
        self,
        employees: Collection[Employee],
        records: Collection[DailyRecord],
        transactions: Collection[BankTransaction],
        *,
        calculator: Optional[DailyStatsCalculator] = None,
    ):
        self._employees = employees
        self._records = records
        self._transactions = transactions
        self._calculator = calculator or SegmentedStatsCalculator()

    def _employee(self, employee_id: str) -> Optional[Employee]:
        return next((e for e in self._employees.get() if e.id == str(employee_id)), None)

    def _records_by_date(self, employee_id: str) -> dict[date, DailyRecord]:
        return {r.work_date: r for r in self._records.get() if r.employee_id == str(employee_id)}

    @staticmethod
    def ledger_epoch(employee: Employee, today: date) -> date:
        return employee.ledger_start_date or first_day_of_month(today)

    def bank_balance(self, employee_id: str, *, today: Optional[date] = None) -> int:
        """Signed bank-of-hours balance in minutes."""
        employee = self._employee(employee_id)
        if not employee:
            return 0

        today = today or today_local()
        epoch = self.ledger_epoch(employee, today)
        if epoch > today:
            return 0

        short_day = employee.effective_short_day
        daily_minutes = employee.effective_daily_minutes
        records = self._records_by_date(employee.id)

        total = 0
        for day in iter_days(epoch, today):
            record = records.get(day)
            if record:
                total += self._calculator.daily_stats(record, short_day, daily_minutes).balance
            elif day < today:
                # No punches at all on a past day: full debit.
                total -= target_minutes(day, short_day, daily_minutes)

        # All transactions count, including ones dated before the epoch.
        total += sum(t.amount_minutes for t in self._transactions.get() if t.employee_id == employee.id)
        return total

    def statement(self, employee_id: str, year: int, month: int, *, today: Optional[date] = None) -> MonthlyStatement:
        """Day-by-day view of one month, with missing days synthesized (not persisted)."""
        employee = self._employee(employee_id) or Employee(id=str(employee_id), name="")
        today = today or today_local()
        short_day = employee.effective_short_day
        daily_minutes = employee.effective_daily_minutes
        records = self._records_by_date(employee.id)

        first = date(year, month, 1)
        lines: list[StatementLine] = []
        for day in iter_days(first, last_day_of_month(first)):
            target = target_minutes(day, short_day, daily_minutes)
            record = records.get(day)
            if record:
                stats = self._calculator.daily_stats(record, short_day, daily_minutes)
                record = replace(record, total_minutes=stats.total, balance_minutes=stats.balance)
                worked, balance = stats.total, stats.balance
            else:
                record = DailyRecord(work_date=day, employee_id=employee.id)
                worked = 0
                balance = -target if day < today else 0
            lines.append(
                StatementLine(
                    work_date=day,
                    record=record,
                    persisted=day in records,
                    target_minutes=target,
                    worked_minutes=worked,
                    balance_minutes=balance,
                    short_day=is_short_day(target),
                )
            )

        return MonthlyStatement(
            employee_id=employee.id,
            year=year,
            month=month,
            lines=lines,
            worked_minutes=sum(line.worked_minutes for line in lines),
            target_minutes=sum(line.target_minutes for line in lines if line.work_date <= today),
            balance_minutes=sum(line.balance_minutes for line in lines),
        )

    def reset_balance(self, employee_id: str, *, today: Optional[date] = None) -> Optional[Employee]:
        """Restart accumulation today by moving the ledger start date."""
        today = today or today_local()
        employees = self._employees.get()
        for i, e in enumerate(employees):
            if e.id == str(employee_id):
                employees[i] = replace(e, ledger_start_date=today)
                self._employees.put(employees)
                return employees[i]
        return None
