from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..core.enums import TransactionType


@dataclass(frozen=True)
class BankTransaction:
    """Domain entity: a manual bank-of-hours entry (immutable ledger fact)."""

    id: str
    employee_id: str
    tx_date: date
    type: TransactionType
    amount_minutes: int
    description: str
    created_at: datetime
