from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Optional

from ..core.constants import DEFAULT_SYNC_LOCK_SECONDS
from ..core.enums import RemoteAction
from ..employees.model import Employee
from ..ledger.service import BankLedgerService
from ..records.model import DailyRecord
from ..settings.service import SettingsService
from ..transactions.model import BankTransaction
from .merger import ReconciliationService
from .payloads import (
    employee_payload,
    parse_employees,
    parse_records,
    parse_transactions,
    record_payload,
    transaction_payload,
)
from .remote import SheetsClient

logger = logging.getLogger(__name__)

_READS = (RemoteAction.GET_EMPLOYEES, RemoteAction.GET_RECORDS, RemoteAction.GET_TRANSACTIONS)


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one pull cycle. ``None`` counts mean the category was not merged."""

    skipped: bool = False
    reason: str = ""
    employees: Optional[int] = None
    records: Optional[int] = None
    transactions: Optional[int] = None


class SyncService:
    """Use case: pull remote snapshots and push local writes.

    Reads of the three categories run concurrently and independently. Pushes
    are fire-and-forget: the returned future is never awaited here.
    """

    def __init__(
        self,
        settings: SettingsService,
        reconciliation: ReconciliationService,
        ledger: BankLedgerService,
        *,
        client_factory: Callable[[str], SheetsClient] = SheetsClient,
        executor: Optional[Executor] = None,
        lock_seconds: float = DEFAULT_SYNC_LOCK_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._settings = settings
        self._reconciliation = reconciliation
        self._ledger = ledger
        self._client_factory = client_factory
        self._executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix="hour-bank-sync")
        self._lock_seconds = float(lock_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._last_started: Optional[float] = None

    def _client(self) -> Optional[SheetsClient]:
        config = self._settings.get_sync_config()
        if not config.is_active:
            return None
        return self._client_factory(config.script_url)

    def _try_start(self, force: bool) -> bool:
        with self._lock:
            now = self._clock()
            if not force and self._last_started is not None and now - self._last_started < self._lock_seconds:
                return False
            self._last_started = now
            return True

    def sync(self, *, force: bool = False) -> SyncResult:
        client = self._client()
        if client is None:
            return SyncResult(skipped=True, reason="sync disabled")
        if not self._try_start(force):
            logger.debug("sync skipped: previous cycle started less than %ss ago", self._lock_seconds)
            return SyncResult(skipped=True, reason="sync already running")

        futures = {action: self._executor.submit(client.fetch, action) for action in _READS}
        raw: Dict[RemoteAction, Any] = {}
        for action, fut in futures.items():
            try:
                raw[action] = fut.result()
            except Exception:
                logger.exception("remote %s crashed, skipping this category", action.value)
                raw[action] = None

        employees = parse_employees(raw[RemoteAction.GET_EMPLOYEES])
        records = parse_records(raw[RemoteAction.GET_RECORDS])
        transactions = parse_transactions(raw[RemoteAction.GET_TRANSACTIONS])

        # Employees first so merged records are recomputed under fresh schedules.
        if employees:
            self._reconciliation.merge_employees(employees)
        if records is not None:
            self._reconciliation.merge_records(records)
        if transactions is not None:
            self._reconciliation.merge_transactions(transactions)

        result = SyncResult(
            employees=len(employees) if employees else None,
            records=len(records) if records is not None else None,
            transactions=len(transactions) if transactions is not None else None,
        )
        logger.info(
            "sync done: employees=%s records=%s transactions=%s",
            result.employees,
            result.records,
            result.transactions,
        )
        return result

    def _push(self, action: RemoteAction, data: dict) -> Optional[Future]:
        client = self._client()
        if client is None:
            return None
        future = self._executor.submit(client.push, action, data)
        future.add_done_callback(partial(_log_push_failure, action))
        return future

    def publish_record(self, record: DailyRecord, employee: Optional[Employee] = None) -> Optional[Future]:
        if self._client() is None:
            return None
        balance = self._ledger.bank_balance(record.employee_id)
        payload = record_payload(record, employee=employee, current_total_balance=balance)
        return self._push(RemoteAction.SYNC_ROW, payload)

    def publish_employee(self, employee: Employee) -> Optional[Future]:
        return self._push(RemoteAction.SYNC_EMPLOYEE, employee_payload(employee))

    def publish_transaction(self, transaction: BankTransaction) -> Optional[Future]:
        return self._push(RemoteAction.SYNC_TRANSACTION, transaction_payload(transaction))

    def publish_transaction_deletion(self, tx_id: str) -> Optional[Future]:
        return self._push(RemoteAction.DELETE_TRANSACTION, {"id": str(tx_id)})

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)


def _log_push_failure(action: RemoteAction, future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("push %s crashed", action.value, exc_info=exc)
