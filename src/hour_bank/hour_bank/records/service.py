from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import PunchType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..punches.normalizer import minutes_to_punch, normalize_punch
from ..settings.service import SettingsService
from ..storage.collection import Collection
from .calculator.base import DailyStatsCalculator
from .calculator.segmented_calculator import SegmentedStatsCalculator
from .model import PUNCH_FIELDS, DailyRecord


def with_stats(record: DailyRecord, employee: Optional[Employee], calculator: DailyStatsCalculator) -> DailyRecord:
    """Return ``record`` with canonical punches and freshly derived totals."""
    record = replace(record, **{f: normalize_punch(getattr(record, f)) for f in PUNCH_FIELDS})
    if employee:
        stats = calculator.daily_stats(record, employee.effective_short_day, employee.effective_daily_minutes)
    else:
        stats = calculator.daily_stats(record)
    return replace(record, total_minutes=stats.total, balance_minutes=stats.balance)


def sort_for_display(records: Iterable[DailyRecord]) -> List[DailyRecord]:
    # Newest first; order carries no meaning beyond display.
    return sorted(records, key=lambda r: (r.work_date, r.employee_id), reverse=True)


class RecordService:
    """Use case: read and mutate daily attendance records."""

    def __init__(
        self,
        records: Collection[DailyRecord],
        employees: Collection[Employee],
        settings: Optional[SettingsService] = None,
        *,
        calculator: Optional[DailyStatsCalculator] = None,
    ):
        self._records = records
        self._employees = employees
        self._settings = settings
        self._calculator = calculator or SegmentedStatsCalculator()

    def _employee(self, employee_id: str) -> Optional[Employee]:
        return next((e for e in self._employees.get() if e.id == str(employee_id)), None)

    def get_all_records(self) -> List[DailyRecord]:
        return self._records.get()

    def get_records(self, employee_id: str) -> List[DailyRecord]:
        employee_id = str(employee_id)
        return [r for r in self._records.get() if r.employee_id == employee_id]

    def get_day_record(self, employee_id: str, work_date: date) -> DailyRecord:
        """Stored record for the day, or a transient empty one (not persisted)."""
        for r in self.get_records(employee_id):
            if r.work_date == work_date:
                return r
        return DailyRecord(work_date=work_date, employee_id=str(employee_id))

    def update_record(self, record: DailyRecord) -> DailyRecord:
        """Recompute stats and upsert by (date, employee)."""
        final = with_stats(record, self._employee(record.employee_id), self._calculator)

        records = [r for r in self._records.get() if r.key != final.key]
        records.append(final)
        self._records.put(sort_for_display(records))
        return final

    def register_punch(
        self,
        employee_id: str,
        punch_type: PunchType | str | None = None,
        *,
        now: Optional[datetime] = None,
        location: Optional[str] = None,
    ) -> DailyRecord:
        """Punch the current time into today's record.

        Without ``punch_type`` the next empty event of the day is used.
        """
        if not self._employee(employee_id):
            raise NotFoundError("Employee not found")

        now = now or now_local()
        current = self.get_day_record(employee_id, now.date())

        if punch_type is None:
            punch_type = next((p for p in PunchType if not current.punch(p)), None)
            if punch_type is None:
                raise ValidationError("All punches for today are already registered")
        else:
            try:
                punch_type = PunchType.parse(punch_type)
            except ValueError as e:
                raise ValidationError(str(e))

        if current.punch(punch_type):
            raise ValidationError(f"{punch_type.value} already registered today")

        if location is None and self._settings:
            loc = self._settings.get_location_config()
            if loc.use_fixed and loc.fixed_name:
                location = loc.fixed_name

        updated = replace(
            current,
            **{punch_type.field_name: minutes_to_punch(now.hour * 60 + now.minute)},
            location=location or current.location,
        )
        return self.update_record(updated)

    def replace_all_records(self, records: Sequence[DailyRecord]) -> List[DailyRecord]:
        """Hard sync: drop local records and keep only ``records``."""
        by_id = {e.id: e for e in self._employees.get()}
        deduped = {}
        for r in records:
            deduped[r.key] = with_stats(r, by_id.get(r.employee_id), self._calculator)
        final = sort_for_display(deduped.values())
        self._records.put(final)
        return final

    def recompute(self, employee_ids: Iterable[str]) -> int:
        """Re-derive totals for the given employees' records, e.g. after a schedule change."""
        wanted = {str(i) for i in employee_ids}
        if not wanted:
            return 0

        by_id = {e.id: e for e in self._employees.get()}
        changed = 0
        records = []
        for r in self._records.get():
            if r.employee_id in wanted:
                fresh = with_stats(r, by_id.get(r.employee_id), self._calculator)
                changed += fresh != r
                r = fresh
            records.append(r)
        if changed:
            self._records.put(records)
        return changed
