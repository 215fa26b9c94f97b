from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import List, Optional

from ..common.datetime_utils import now_local
from ..core.enums import TransactionType
from ..storage.collection import Collection
from .model import BankTransaction


class TransactionLedger:
    """Use case: manual bank-of-hours entries (append / delete by id)."""

    def __init__(self, transactions: Collection[BankTransaction]):
        self._transactions = transactions

    def get_all_transactions(self) -> List[BankTransaction]:
        return self._transactions.get()

    def get_transactions(self, employee_id: str) -> List[BankTransaction]:
        employee_id = str(employee_id)
        items = [t for t in self._transactions.get() if t.employee_id == employee_id]
        items.sort(key=lambda t: (t.tx_date, t.created_at.isoformat()), reverse=True)
        return items

    def add_transaction(
        self,
        *,
        employee_id: str,
        tx_date: date,
        type: TransactionType,
        amount_minutes: int,
        description: str = "",
        now: Optional[datetime] = None,
    ) -> BankTransaction:
        tx = BankTransaction(
            id=uuid.uuid4().hex,
            employee_id=str(employee_id),
            tx_date=tx_date,
            type=TransactionType(type),
            amount_minutes=int(amount_minutes),
            description=description or "",
            created_at=now or now_local(),
        )
        items = self._transactions.get()
        items.append(tx)
        self._transactions.put(items)
        return tx

    def delete_transaction(self, tx_id: str) -> Optional[BankTransaction]:
        """Remove by id. Unknown ids are a no-op (returns None)."""
        items = self._transactions.get()
        removed = next((t for t in items if t.id == str(tx_id)), None)
        if removed is None:
            return None
        self._transactions.put([t for t in items if t.id != removed.id])
        return removed
