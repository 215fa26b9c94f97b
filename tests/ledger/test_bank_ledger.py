from datetime import date, datetime, timedelta

from src.hour_bank.hour_bank.core.enums import TransactionType
from src.hour_bank.hour_bank.employees.model import Employee
from src.hour_bank.hour_bank.ledger.service import BankLedgerService
from src.hour_bank.hour_bank.records.model import DailyRecord
from src.hour_bank.hour_bank.storage.collection import InMemoryCollection
from src.hour_bank.hour_bank.transactions.service import TransactionLedger

# Saturday, 2024-03-09. Monday 2024-03-04 is five calendar days earlier.
TODAY = date(2024, 3, 9)
MONDAY = date(2024, 3, 4)


def _full_day(day, employee_id="e1"):
    return DailyRecord(
        work_date=day,
        employee_id=employee_id,
        entry="09:00",
        lunch_start="12:00",
        lunch_end="13:00",
        exit="18:00",
    )


def _setup(employee, records=(), transactions=()):
    employees = InMemoryCollection([employee])
    txs = InMemoryCollection(list(transactions))
    ledger = BankLedgerService(employees, InMemoryCollection(list(records)), txs)
    return ledger, TransactionLedger(txs), employees


def test_missing_past_days_are_debited():
    employee = Employee(id="e1", name="Ana", ledger_start_date=MONDAY)
    records = [_full_day(MONDAY), _full_day(MONDAY + timedelta(days=1))]
    ledger, _, _ = _setup(employee, records)

    # Wed, Thu and Fri have no record; today (Saturday) is never debited.
    assert ledger.bank_balance("e1", today=TODAY) == -3 * 480


def test_deleting_transaction_reverses_its_amount():
    employee = Employee(id="e1", name="Ana", ledger_start_date=TODAY)
    ledger, txs, _ = _setup(employee)
    tx = txs.add_transaction(
        employee_id="e1",
        tx_date=TODAY,
        type=TransactionType.BONUS,
        amount_minutes=120,
        now=datetime(2024, 3, 9, 10, 0),
    )
    with_tx = ledger.bank_balance("e1", today=TODAY)

    txs.delete_transaction(tx.id)

    assert ledger.bank_balance("e1", today=TODAY) == with_tx - 120


def test_epoch_in_future_gives_zero():
    employee = Employee(id="e1", name="Ana", ledger_start_date=TODAY + timedelta(days=1))
    ledger, txs, _ = _setup(employee)
    txs.add_transaction(employee_id="e1", tx_date=TODAY, type=TransactionType.BONUS, amount_minutes=60)

    assert ledger.bank_balance("e1", today=TODAY) == 0


def test_transactions_before_epoch_still_count():
    employee = Employee(id="e1", name="Ana", ledger_start_date=TODAY)
    ledger, txs, _ = _setup(employee)
    txs.add_transaction(
        employee_id="e1", tx_date=date(2023, 1, 1), type=TransactionType.PAYMENT, amount_minutes=-90
    )
    txs.add_transaction(employee_id="other", tx_date=TODAY, type=TransactionType.BONUS, amount_minutes=500)

    assert ledger.bank_balance("e1", today=TODAY) == -90


def test_default_epoch_is_first_day_of_month():
    ledger, _, _ = _setup(Employee(id="e1", name="Ana"))

    # Fri 1st, Sat 2nd (short day), Sun 3rd (off), Mon 4th .. Fri 8th.
    assert ledger.bank_balance("e1", today=TODAY) == -480 - 240 - 5 * 480


def test_open_day_today_contributes_nothing():
    employee = Employee(id="e1", name="Ana", ledger_start_date=TODAY)
    ledger, _, _ = _setup(employee, [DailyRecord(work_date=TODAY, employee_id="e1", entry="08:00")])

    assert ledger.bank_balance("e1", today=TODAY) == 0


def test_unknown_employee_balance_is_zero():
    ledger, _, _ = _setup(Employee(id="e1", name="Ana"))
    assert ledger.bank_balance("ghost", today=TODAY) == 0


def test_monthly_statement():
    ledger, _, _ = _setup(Employee(id="e1", name="Ana"), [_full_day(MONDAY)])

    st = ledger.statement("e1", 2024, 3, today=TODAY)

    assert len(st.lines) == 31
    assert st.lines[0].balance_minutes == -480
    assert st.lines[1].short_day
    assert st.lines[1].target_minutes == 240
    assert st.lines[2].target_minutes == 0
    assert st.lines[3].persisted
    assert st.lines[3].worked_minutes == 480
    assert not st.lines[4].persisted
    assert st.lines[8].balance_minutes == 0
    assert st.lines[20].balance_minutes == 0
    assert st.worked_minutes == 480
    assert st.target_minutes == 480 + 240 + 5 * 480 + 240
    assert st.balance_minutes == -480 - 240 - 4 * 480


def test_reset_balance_moves_epoch_and_keeps_records():
    employee = Employee(id="e1", name="Ana", ledger_start_date=MONDAY)
    records = InMemoryCollection([_full_day(MONDAY)])
    employees = InMemoryCollection([employee])
    ledger = BankLedgerService(employees, records, InMemoryCollection())

    updated = ledger.reset_balance("e1", today=TODAY)

    assert updated.ledger_start_date == TODAY
    assert employees.get()[0].ledger_start_date == TODAY
    assert ledger.bank_balance("e1", today=TODAY) == 0
    assert len(records.get()) == 1
    assert ledger.reset_balance("ghost", today=TODAY) is None


def test_transactions_listed_newest_first():
    txs = TransactionLedger(InMemoryCollection())
    old = txs.add_transaction(
        employee_id="e1", tx_date=date(2024, 3, 1), type=TransactionType.ADJUSTMENT, amount_minutes=10
    )
    new = txs.add_transaction(
        employee_id="e1", tx_date=date(2024, 3, 5), type=TransactionType.CERTIFICATE, amount_minutes=480
    )

    assert [t.id for t in txs.get_transactions("e1")] == [new.id, old.id]
    assert txs.delete_transaction("missing") is None
