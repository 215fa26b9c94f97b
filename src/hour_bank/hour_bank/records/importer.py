from __future__ import annotations

import re
from typing import List, Optional, Sequence

from ..core.exceptions import ValidationError
from ..punches.normalizer import normalize_date, normalize_punch
from ..sync.merger import ReconciliationService
from .model import DailyRecord

_LINE_SPLIT_RE = re.compile(r"\r?\n")


def _cell(parts: Sequence[str], index: int) -> Optional[str]:
    return normalize_punch(parts[index]) if index < len(parts) else None


def parse_pasted_rows(employee_id: str, text: str) -> List[DailyRecord]:
    """Parse rows copied from a spreadsheet (tab or ``;`` separated).

    Columns: date, entry, lunch start, lunch end, [snack start, snack end,] exit.
    Rows without a recognizable date are skipped.
    """
    records: List[DailyRecord] = []
    for line in _LINE_SPLIT_RE.split(text or ""):
        if not line.strip():
            continue
        parts = [p.strip() for p in (line.split("\t") if "\t" in line else line.split(";"))]
        if len(parts) < 2:
            continue

        work_date = normalize_date(parts[0])
        if work_date is None:
            continue

        snack_start = snack_end = exit_ = None
        if len(parts) >= 7:
            snack_start, snack_end, exit_ = _cell(parts, 4), _cell(parts, 5), _cell(parts, 6)
        elif len(parts) >= 5:
            p4, p5 = _cell(parts, 4), _cell(parts, 5)
            if p4 and not p5:
                # Sheet without snack columns: the fourth time is the exit.
                exit_ = p4
            else:
                snack_start, snack_end = p4, p5

        if not exit_:
            exit_ = next((t for t in (_cell(parts, i) for i in range(len(parts) - 1, 3, -1)) if t), None)
            if exit_ and exit_ == snack_end:
                snack_end = None
            if exit_ and exit_ == snack_start:
                snack_start = None

        records.append(
            DailyRecord(
                work_date=work_date,
                employee_id=str(employee_id),
                entry=_cell(parts, 1),
                lunch_start=_cell(parts, 2),
                lunch_end=_cell(parts, 3),
                snack_start=snack_start,
                snack_end=snack_end,
                exit=exit_,
            )
        )
    return records


class RecordImportService:
    """Use case: import a pasted backup through the regular record merge."""

    def __init__(self, reconciliation: ReconciliationService):
        self._reconciliation = reconciliation

    def import_rows(self, employee_id: str, text: str) -> int:
        records = parse_pasted_rows(employee_id, text)
        if not records:
            raise ValidationError("No row with a valid date was found")
        self._reconciliation.merge_records(records)
        return len(records)
