from datetime import date

import pytest

from src.hour_bank.hour_bank.core.exceptions import NotFoundError, ValidationError
from src.hour_bank.hour_bank.employees.service import EmployeeService
from src.hour_bank.hour_bank.records.model import DailyRecord
from src.hour_bank.hour_bank.storage.collection import InMemoryCollection


def _service():
    records = InMemoryCollection()
    return EmployeeService(InMemoryCollection(), records), records


def test_add_employee_validates_input():
    svc, _ = _service()

    with pytest.raises(ValidationError):
        svc.add_employee(name="  ")
    with pytest.raises(ValidationError):
        svc.add_employee(name="Ana", short_day_of_week=7)
    with pytest.raises(ValidationError):
        svc.add_employee(name="Ana", standard_daily_minutes=-1)

    emp = svc.add_employee(name=" Ana ", short_day_of_week="3", standard_daily_minutes="420")
    assert emp.name == "Ana"
    assert emp.short_day_of_week == 3
    assert emp.standard_daily_minutes == 420
    assert svc.list_employees() == [emp]


def test_update_employee():
    svc, _ = _service()
    emp = svc.add_employee(name="Ana")

    updated = svc.update_employee(emp.id, role="Cashier", ledger_start_date=date(2024, 3, 1))

    assert updated.role == "Cashier"
    assert svc.require_employee(emp.id).ledger_start_date == date(2024, 3, 1)
    with pytest.raises(ValidationError):
        svc.update_employee(emp.id, salary=10)
    with pytest.raises(NotFoundError):
        svc.update_employee("ghost", role="x")


def test_delete_employee_cascades_records():
    svc, records = _service()
    ana = svc.add_employee(name="Ana")
    bia = svc.add_employee(name="Bia")
    records.put(
        [
            DailyRecord(work_date=date(2024, 3, 4), employee_id=ana.id, entry="08:00"),
            DailyRecord(work_date=date(2024, 3, 4), employee_id=bia.id, entry="08:00"),
        ]
    )

    assert svc.delete_employee(ana.id)
    assert [e.id for e in svc.list_employees()] == [bia.id]
    assert [r.employee_id for r in records.get()] == [bia.id]
    assert not svc.delete_employee(ana.id)
    with pytest.raises(NotFoundError):
        svc.require_employee(ana.id)


def test_schedule_change_refreshes_stored_records():
    svc, records = _service()
    ana = svc.add_employee(name="Ana")
    bia = svc.add_employee(name="Bia")
    monday = date(2024, 3, 4)
    records.put(
        [
            DailyRecord(work_date=monday, employee_id=ana.id, entry="09:00", exit="17:00", total_minutes=480),
            DailyRecord(work_date=monday, employee_id=bia.id, entry="09:00", exit="17:00", total_minutes=480),
        ]
    )

    svc.update_employee(ana.id, standard_daily_minutes=420)

    by_employee = {r.employee_id: r for r in records.get()}
    assert by_employee[ana.id].balance_minutes == 60
    assert by_employee[bia.id].balance_minutes == 0
