"""Conversion between entities and the JSON-like dicts used on disk and on the wire.

Decoders are lenient: ids become strings, numeric-looking fields become ints,
punches go through the normalizer and dates through ``normalize_date``.
Entries that cannot be keyed decode to ``None``.
"""

from __future__ import annotations

import math
from datetime import datetime, time
from typing import Any, Mapping, Optional

from ..core.enums import TransactionType
from ..employees.model import Employee, EmployeePatch
from ..punches.normalizer import normalize_date, normalize_punch
from ..records.model import DailyRecord
from ..settings.model import LocationConfig, SyncConfig
from ..transactions.model import BankTransaction

_FALSE_STRINGS = {"false", "0", "no", "n", "off"}


def as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if math.isfinite(number) else None


def as_bool(value: Any, default: bool) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def _as_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    text = as_str(value)
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


# Employees

def employee_from_dict(raw: Any) -> Optional[Employee]:
    if not isinstance(raw, Mapping):
        return None
    emp_id = as_str(raw.get("id"))
    if not emp_id:
        return None

    short_day = as_int(raw.get("shortDayOfWeek"))
    if short_day is not None and not 1 <= short_day <= 6:
        short_day = None
    daily_minutes = as_int(raw.get("standardDailyMinutes"))
    if daily_minutes is not None and daily_minutes < 0:
        daily_minutes = None

    return Employee(
        id=emp_id,
        name=as_str(raw.get("name")),
        role=as_str(raw.get("role")),
        pin=as_str(raw.get("pin")),
        active=as_bool(raw.get("active"), True),
        short_day_of_week=short_day,
        standard_daily_minutes=daily_minutes,
        ledger_start_date=normalize_date(raw.get("bankStartDate")),
    )


_EMPLOYEE_KEYS = (
    ("name", "name"),
    ("role", "role"),
    ("pin", "pin"),
    ("active", "active"),
    ("shortDayOfWeek", "short_day_of_week"),
    ("standardDailyMinutes", "standard_daily_minutes"),
    ("bankStartDate", "ledger_start_date"),
)
_SCHEDULE_FIELDS = {"short_day_of_week", "standard_daily_minutes", "ledger_start_date"}


def employee_patch_from_dict(raw: Any) -> Optional[EmployeePatch]:
    """Decode a remote row keeping only the keys it actually has.

    Blank or invalid schedule values are left out so they never replace a
    local schedule.
    """
    employee = employee_from_dict(raw)
    if employee is None:
        return None

    changes = {}
    for key, name in _EMPLOYEE_KEYS:
        if key not in raw:
            continue
        value = getattr(employee, name)
        if name in _SCHEDULE_FIELDS and value is None:
            continue
        changes[name] = value
    return EmployeePatch(id=employee.id, changes=changes)


def employee_to_dict(e: Employee) -> dict:
    return {
        "id": str(e.id),
        "name": e.name,
        "role": e.role,
        "pin": str(e.pin or ""),
        "active": e.active,
        "shortDayOfWeek": e.short_day_of_week,
        "standardDailyMinutes": e.standard_daily_minutes,
        "bankStartDate": e.ledger_start_date.isoformat() if e.ledger_start_date else "",
    }


# Daily records

def record_from_dict(raw: Any) -> Optional[DailyRecord]:
    if not isinstance(raw, Mapping):
        return None
    work_date = normalize_date(raw.get("date"))
    employee_id = as_str(raw.get("employeeId"))
    if work_date is None or not employee_id:
        return None

    return DailyRecord(
        work_date=work_date,
        employee_id=employee_id,
        entry=normalize_punch(raw.get("entry")),
        lunch_start=normalize_punch(raw.get("lunchStart")),
        lunch_end=normalize_punch(raw.get("lunchEnd")),
        snack_start=normalize_punch(raw.get("snackStart")),
        snack_end=normalize_punch(raw.get("snackEnd")),
        exit=normalize_punch(raw.get("exit")),
        total_minutes=max(as_int(raw.get("totalMinutes")) or 0, 0),
        balance_minutes=as_int(raw.get("balanceMinutes")) or 0,
        location=as_str(raw.get("location")) or None,
    )


def record_to_dict(r: DailyRecord) -> dict:
    return {
        "date": r.work_date.isoformat(),
        "employeeId": str(r.employee_id),
        "entry": r.entry or "",
        "lunchStart": r.lunch_start or "",
        "lunchEnd": r.lunch_end or "",
        "snackStart": r.snack_start or "",
        "snackEnd": r.snack_end or "",
        "exit": r.exit or "",
        "totalMinutes": r.total_minutes,
        "balanceMinutes": r.balance_minutes,
        "location": r.location or "",
    }


# Bank transactions

def transaction_from_dict(raw: Any) -> Optional[BankTransaction]:
    if not isinstance(raw, Mapping):
        return None
    tx_id = as_str(raw.get("id"))
    employee_id = as_str(raw.get("employeeId"))
    if not tx_id or not employee_id:
        return None

    created_at = _as_datetime(raw.get("createdAt"))
    tx_date = normalize_date(raw.get("date"))
    if tx_date is None and created_at is not None:
        tx_date = created_at.date()
    if tx_date is None:
        return None
    if created_at is None:
        created_at = datetime.combine(tx_date, time())

    try:
        tx_type = TransactionType(as_str(raw.get("type")).upper())
    except ValueError:
        tx_type = TransactionType.ADJUSTMENT

    return BankTransaction(
        id=tx_id,
        employee_id=employee_id,
        tx_date=tx_date,
        type=tx_type,
        amount_minutes=as_int(raw.get("amountMinutes")) or 0,
        description=as_str(raw.get("description")),
        created_at=created_at,
    )


def transaction_to_dict(t: BankTransaction) -> dict:
    return {
        "id": str(t.id),
        "employeeId": str(t.employee_id),
        "date": t.tx_date.isoformat(),
        "type": t.type.value,
        "amountMinutes": t.amount_minutes,
        "description": t.description,
        "createdAt": t.created_at.isoformat(),
    }


# Settings

def settings_from_dict(raw: Any):
    if not isinstance(raw, Mapping):
        return None
    kind = raw.get("kind")
    if kind == "sync":
        return SyncConfig(script_url=as_str(raw.get("scriptUrl")), enabled=as_bool(raw.get("enabled"), False))
    if kind == "location":
        return LocationConfig(use_fixed=as_bool(raw.get("useFixed"), False), fixed_name=as_str(raw.get("fixedName")))
    return None


def settings_to_dict(item) -> dict:
    if isinstance(item, SyncConfig):
        return {"kind": "sync", "scriptUrl": item.script_url, "enabled": item.enabled}
    return {"kind": "location", "useFixed": item.use_fixed, "fixedName": item.fixed_name}
