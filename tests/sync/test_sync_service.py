from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime

import pytest

from src.hour_bank.hour_bank.core.enums import RemoteAction, TransactionType
from src.hour_bank.hour_bank.employees.model import Employee
from src.hour_bank.hour_bank.ledger.service import BankLedgerService
from src.hour_bank.hour_bank.records.model import DailyRecord
from src.hour_bank.hour_bank.settings.service import SettingsService
from src.hour_bank.hour_bank.storage.collection import InMemoryCollection
from src.hour_bank.hour_bank.sync.merger import ReconciliationService
from src.hour_bank.hour_bank.sync.service import SyncService
from src.hour_bank.hour_bank.transactions.model import BankTransaction

URL = "https://script.example.com/exec"


class FakeClient:
    def __init__(self, responses):
        self.responses = responses
        self.pushed = []

    def fetch(self, action):
        value = self.responses.get(action)
        if isinstance(value, Exception):
            raise value
        return value

    def push(self, action, data):
        self.pushed.append((action, data))


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def executor():
    ex = ThreadPoolExecutor(max_workers=3)
    yield ex
    ex.shutdown(wait=True)


def _build(executor, responses, *, script_url=URL, employees=(), records=(), transactions=()):
    emp_col = InMemoryCollection(list(employees))
    rec_col = InMemoryCollection(list(records))
    tx_col = InMemoryCollection(list(transactions))
    client = FakeClient(responses)
    clock = FakeClock()
    svc = SyncService(
        SettingsService(InMemoryCollection(), default_script_url=script_url),
        ReconciliationService(emp_col, rec_col, tx_col),
        BankLedgerService(emp_col, rec_col, tx_col),
        client_factory=lambda url: client,
        executor=executor,
        lock_seconds=10,
        clock=clock,
    )
    return svc, client, clock, (emp_col, rec_col, tx_col)


def test_sync_merges_all_categories(executor):
    responses = {
        RemoteAction.GET_EMPLOYEES: [{"id": "e1", "name": "Ana"}],
        RemoteAction.GET_RECORDS: [{"date": "2024-03-04", "employeeId": "e1", "entry": "09:00", "exit": "17:00"}],
        RemoteAction.GET_TRANSACTIONS: [
            {"id": "t1", "employeeId": "e1", "date": "2024-03-04", "type": "BONUS", "amountMinutes": 30}
        ],
    }
    svc, _, _, (employees, records, transactions) = _build(executor, responses)

    result = svc.sync()

    assert not result.skipped
    assert (result.employees, result.records, result.transactions) == (1, 1, 1)
    assert employees.get()[0].name == "Ana"
    assert records.get()[0].total_minutes == 480
    assert transactions.get()[0].amount_minutes == 30


def test_failed_category_does_not_block_others(executor):
    local = DailyRecord(work_date=date(2024, 3, 4), employee_id="e1", entry="09:00")
    responses = {
        RemoteAction.GET_EMPLOYEES: [{"id": "e1", "name": "Ana"}],
        RemoteAction.GET_RECORDS: None,
        RemoteAction.GET_TRANSACTIONS: RuntimeError("boom"),
    }
    svc, _, _, (employees, records, _) = _build(executor, responses, records=[local])

    result = svc.sync()

    assert result.employees == 1
    assert result.records is None
    assert result.transactions is None
    assert records.get() == [local]
    assert len(employees.get()) == 1


def test_sync_is_skipped_inside_lock_window(executor):
    svc, _, clock, _ = _build(executor, {})

    assert not svc.sync().skipped
    clock.now += 5
    second = svc.sync()
    assert second.skipped
    assert second.reason == "sync already running"

    assert not svc.sync(force=True).skipped
    clock.now += 11
    assert not svc.sync().skipped


def test_sync_disabled_without_script_url(executor):
    svc, _, _, _ = _build(executor, {}, script_url="")

    result = svc.sync()

    assert result.skipped
    assert result.reason == "sync disabled"
    assert svc.publish_employee(Employee(id="e1", name="Ana")) is None


def test_publish_record_includes_bank_balance(executor):
    employee = Employee(id="e1", name="Ana", ledger_start_date=date(2999, 1, 1))
    record = DailyRecord(work_date=date(2024, 3, 4), employee_id="e1", entry="09:00")
    svc, client, _, _ = _build(executor, {}, employees=[employee])

    svc.publish_record(record, employee).result()

    ((action, data),) = client.pushed
    assert action is RemoteAction.SYNC_ROW
    assert data["employeeName"] == "Ana"
    assert data["currentTotalBalance"] == "00:00"


def test_publish_transaction_and_deletion(executor):
    tx = BankTransaction(
        id="t1",
        employee_id="e1",
        tx_date=date(2024, 3, 4),
        type=TransactionType.PAYMENT,
        amount_minutes=-60,
        description="paid out",
        created_at=datetime(2024, 3, 4, 9, 0),
    )
    svc, client, _, _ = _build(executor, {})

    svc.publish_transaction(tx).result()
    svc.publish_transaction_deletion("t1").result()

    assert [a for a, _ in client.pushed] == [RemoteAction.SYNC_TRANSACTION, RemoteAction.DELETE_TRANSACTION]
    assert client.pushed[0][1]["amountMinutes"] == -60
    assert client.pushed[1][1] == {"id": "t1"}


class BrokenPushClient(FakeClient):
    def push(self, action, data):
        raise TypeError("payload is not serializable")


def test_push_crash_is_logged(caplog):
    ex = ThreadPoolExecutor(max_workers=1)
    client = BrokenPushClient({})
    svc = SyncService(
        SettingsService(InMemoryCollection(), default_script_url=URL),
        ReconciliationService(InMemoryCollection(), InMemoryCollection(), InMemoryCollection()),
        BankLedgerService(InMemoryCollection(), InMemoryCollection(), InMemoryCollection()),
        client_factory=lambda url: client,
        executor=ex,
    )

    future = svc.publish_transaction_deletion("t1")
    with pytest.raises(TypeError):
        future.result()
    # Joining the worker guarantees the done-callback has run.
    ex.shutdown(wait=True)

    assert any("push deleteTransaction crashed" in r.getMessage() for r in caplog.records)
