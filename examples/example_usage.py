"""Example: use the service layer directly (no Flask).

Goal: controllers are a thin layer, the ledger logic lives in services.
"""

from datetime import date, datetime, timedelta

from src.hour_bank.hour_bank.container import build_container
from src.hour_bank.hour_bank.core.enums import PunchType, TransactionType


def main():
    container = build_container(storage_backend="memory")
    today = date.today()

    employee = container.employee_service.add_employee(
        name="Ana",
        role="Cashier",
        ledger_start_date=today - timedelta(days=3),
    )

    start = datetime.combine(today, datetime.min.time())
    for punch_type, hour in ((PunchType.ENTRY, 9), (PunchType.LUNCH_START, 12), (PunchType.LUNCH_END, 13)):
        container.record_service.register_punch(employee.id, punch_type, now=start.replace(hour=hour))

    container.transaction_ledger.add_transaction(
        employee_id=employee.id,
        tx_date=today,
        type=TransactionType.BONUS,
        amount_minutes=60,
        description="Inventory night",
    )

    print(container.ledger_service.bank_balance(employee.id))


if __name__ == "__main__":
    main()
