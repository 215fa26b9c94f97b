"""Parse/validate boundary for remote payloads, and outbound payload builders."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, TypeVar

from ..employees.model import Employee, EmployeePatch
from ..punches.normalizer import minutes_to_hhmm
from ..records.model import DailyRecord
from ..storage.codecs import (
    employee_patch_from_dict,
    employee_to_dict,
    record_from_dict,
    record_to_dict,
    transaction_from_dict,
    transaction_to_dict,
)
from ..transactions.model import BankTransaction

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _parse_list(data: Any, decode: Callable[[Any], Optional[T]], kind: str) -> Optional[List[T]]:
    if not isinstance(data, list):
        return None
    items: List[T] = []
    for raw in data:
        item = decode(raw)
        if item is None:
            logger.debug("skipping remote %s without a usable key: %r", kind, raw)
            continue
        items.append(item)
    return items


def parse_employees(data: Any) -> Optional[List[EmployeePatch]]:
    return _parse_list(data, employee_patch_from_dict, "employee")


def parse_records(data: Any) -> Optional[List[DailyRecord]]:
    return _parse_list(data, record_from_dict, "record")


def parse_transactions(data: Any) -> Optional[List[BankTransaction]]:
    return _parse_list(data, transaction_from_dict, "transaction")


def record_payload(record: DailyRecord, *, employee: Optional[Employee], current_total_balance: int) -> dict:
    """``syncRow`` data: raw minutes plus preformatted strings for the sheet."""
    payload = record_to_dict(record)
    payload.update(
        {
            "employeeName": employee.name if employee else "",
            "currentTotalBalance": minutes_to_hhmm(current_total_balance),
            "totalFormatted": minutes_to_hhmm(record.total_minutes),
            "balanceFormatted": minutes_to_hhmm(record.balance_minutes),
            "standardDailyMinutes": employee.effective_daily_minutes if employee else 480,
            "shortDayOfWeek": employee.effective_short_day if employee else 6,
        }
    )
    return payload


def employee_payload(employee: Employee) -> dict:
    return employee_to_dict(employee)


def transaction_payload(transaction: BankTransaction) -> dict:
    return transaction_to_dict(transaction)
