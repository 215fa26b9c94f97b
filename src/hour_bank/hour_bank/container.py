from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from .core.constants import DEFAULT_REMOTE_TIMEOUT_SECONDS, DEFAULT_SYNC_LOCK_SECONDS
from .database.bootstrap import ensure_schema
from .database.connection import DatabaseConnection, DBConfig
from .employees.model import Employee
from .employees.service import EmployeeService
from .ledger.service import BankLedgerService
from .records.importer import RecordImportService
from .records.model import DailyRecord
from .records.service import RecordService
from .settings.service import SettingsItem, SettingsService
from .storage import codecs
from .storage.collection import Collection, InMemoryCollection
from .storage.mysql_collection import MySQLCollection
from .sync.merger import ReconciliationService
from .sync.remote import SheetsClient
from .sync.service import SyncService
from .transactions.model import BankTransaction
from .transactions.service import TransactionLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Collections:
    employees: Collection[Employee]
    records: Collection[DailyRecord]
    transactions: Collection[BankTransaction]
    settings: Collection[SettingsItem]


@dataclass(frozen=True)
class Container:
    collections: Collections

    employee_service: EmployeeService
    record_service: RecordService
    transaction_ledger: TransactionLedger
    ledger_service: BankLedgerService
    settings_service: SettingsService
    reconciliation_service: ReconciliationService
    import_service: RecordImportService
    sync_service: SyncService


def memory_collections() -> Collections:
    return Collections(
        employees=InMemoryCollection(),
        records=InMemoryCollection(),
        transactions=InMemoryCollection(),
        settings=InMemoryCollection(),
    )


def mysql_collections(db_config: dict, *, auto_init_db: bool = False) -> Collections:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    if auto_init_db:
        ensure_schema(conn)

    return Collections(
        employees=MySQLCollection(conn, "employees", encode=codecs.employee_to_dict, decode=codecs.employee_from_dict),
        records=MySQLCollection(conn, "records", encode=codecs.record_to_dict, decode=codecs.record_from_dict),
        transactions=MySQLCollection(
            conn, "transactions", encode=codecs.transaction_to_dict, decode=codecs.transaction_from_dict
        ),
        settings=MySQLCollection(conn, "settings", encode=codecs.settings_to_dict, decode=codecs.settings_from_dict),
    )


def build_container(
    *,
    storage_backend: str = "memory",
    db_config: Optional[dict] = None,
    auto_init_db: bool = False,
    script_url: str = "",
    remote_timeout: float = DEFAULT_REMOTE_TIMEOUT_SECONDS,
    sync_lock_seconds: float = DEFAULT_SYNC_LOCK_SECONDS,
    collections: Optional[Collections] = None,
    session: Optional[requests.Session] = None,
) -> Container:
    if collections is None:
        if storage_backend == "mysql":
            collections = mysql_collections(db_config or {}, auto_init_db=auto_init_db)
        else:
            collections = memory_collections()
    logger.info("storage backend: %s", storage_backend)

    session = session or requests.Session()

    def client_factory(url: str) -> SheetsClient:
        return SheetsClient(url, session=session, timeout=remote_timeout)

    settings_service = SettingsService(collections.settings, default_script_url=script_url)
    employee_service = EmployeeService(collections.employees, collections.records)
    record_service = RecordService(collections.records, collections.employees, settings_service)
    transaction_ledger = TransactionLedger(collections.transactions)
    ledger_service = BankLedgerService(collections.employees, collections.records, collections.transactions)
    reconciliation_service = ReconciliationService(
        collections.employees, collections.records, collections.transactions
    )
    import_service = RecordImportService(reconciliation_service)
    sync_service = SyncService(
        settings_service,
        reconciliation_service,
        ledger_service,
        client_factory=client_factory,
        lock_seconds=sync_lock_seconds,
    )

    return Container(
        collections=collections,
        employee_service=employee_service,
        record_service=record_service,
        transaction_ledger=transaction_ledger,
        ledger_service=ledger_service,
        settings_service=settings_service,
        reconciliation_service=reconciliation_service,
        import_service=import_service,
        sync_service=sync_service,
    )
