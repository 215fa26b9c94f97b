"""Folding remotely fetched snapshots into the local collections.

All three merges are idempotent: applying the same external snapshot twice
leaves the same state as applying it once.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..employees.model import Employee, EmployeePatch
from ..records.calculator.base import DailyStatsCalculator
from ..records.calculator.segmented_calculator import SegmentedStatsCalculator
from ..records.model import PUNCH_FIELDS, DailyRecord
from ..records.service import sort_for_display, with_stats
from ..storage.collection import Collection
from ..transactions.model import BankTransaction


def merge_record_lists(
    local: Iterable[DailyRecord],
    external: Iterable[DailyRecord],
    employees: Dict[str, Employee],
    calculator: DailyStatsCalculator,
) -> List[DailyRecord]:
    merged: Dict[tuple, DailyRecord] = {r.key: r for r in local}

    for ext in external:
        current = merged.get(ext.key)
        if current:
            # Remote is the base, but a blank remote punch never erases a local one.
            punches = {f: getattr(ext, f) or getattr(current, f) for f in PUNCH_FIELDS}
            candidate = replace(ext, **punches, location=ext.location or current.location)
        else:
            candidate = ext
        merged[ext.key] = with_stats(candidate, employees.get(ext.employee_id), calculator)

    return sort_for_display(merged.values())


def merge_employee_lists(local: Iterable[Employee], external: Iterable[EmployeePatch]) -> List[Employee]:
    merged: Dict[str, Employee] = {e.id: e for e in local}
    # Only the fields a remote row carried are overlaid on the local employee.
    for patch in external:
        merged[patch.id] = patch.apply_to(merged.get(patch.id))
    return list(merged.values())


def merge_transaction_lists(local: Iterable[BankTransaction], external: Iterable[BankTransaction]) -> List[BankTransaction]:
    merged: Dict[str, BankTransaction] = {t.id: t for t in local}
    for ext in external:
        merged[ext.id] = ext
    return list(merged.values())


class ReconciliationService:
    """Use case: merge external snapshots into the local collections."""

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

    def merge_records(self, external: Sequence[DailyRecord]) -> List[DailyRecord]:
        employees = {e.id: e for e in self._employees.get()}
        merged = merge_record_lists(self._records.get(), external, employees, self._calculator)
        self._records.put(merged)
        return merged

    def merge_employees(self, external: Sequence[EmployeePatch]) -> List[Employee]:
        if not external:
            return self._employees.get()

        local = self._employees.get()
        merged = merge_employee_lists(local, external)
        self._employees.put(merged)

        changed = _schedule_changes(local, merged)
        if changed:
            self._recompute_records(changed, {e.id: e for e in merged})
        return merged

    def merge_transactions(self, external: Sequence[BankTransaction]) -> List[BankTransaction]:
        merged = merge_transaction_lists(self._transactions.get(), external)
        self._transactions.put(merged)
        return merged

    def _recompute_records(self, employee_ids: Set[str], employees: Dict[str, Employee]) -> None:
        records = [
            with_stats(r, employees.get(r.employee_id), self._calculator) if r.employee_id in employee_ids else r
            for r in self._records.get()
        ]
        self._records.put(records)


def _schedule_changes(before: Iterable[Employee], after: Iterable[Employee]) -> Set[str]:
    old = {e.id: (e.effective_short_day, e.effective_daily_minutes) for e in before}
    return {e.id for e in after if old.get(e.id, (None, None)) != (e.effective_short_day, e.effective_daily_minutes)}
