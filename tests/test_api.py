import pytest

from src.hour_bank.hour_bank.main import create_app


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.delenv("SCRIPT_URL", raising=False)
    monkeypatch.delenv("GOOGLE_SCRIPT_URL", raising=False)
    app = create_app()
    return app.test_client()


def _add_employee(client, **extra):
    resp = client.post("/api/employees", json={"name": "Ana", "role": "Cashier", **extra})
    assert resp.status_code == 201
    return resp.get_json()


def test_employee_crud(client):
    emp = _add_employee(client, shortDayOfWeek=3)
    assert emp["shortDayOfWeek"] == 3

    assert [e["id"] for e in client.get("/api/employees").get_json()] == [emp["id"]]

    resp = client.put(f"/api/employees/{emp['id']}", json={"role": "Manager", "bankStartDate": "2024-03-01"})
    assert resp.get_json()["role"] == "Manager"
    assert resp.get_json()["bankStartDate"] == "2024-03-01"

    assert client.delete(f"/api/employees/{emp['id']}").status_code == 200
    assert client.get(f"/api/employees/{emp['id']}").status_code == 404


def test_validation_errors(client):
    assert client.post("/api/employees", json={}).status_code == 400
    assert client.post("/api/employees", data="nope").status_code == 400
    assert client.post("/api/employees", json={"name": "Ana", "shortDayOfWeek": 9}).status_code == 400


def test_punch_and_records(client):
    emp = _add_employee(client)

    resp = client.post(f"/api/employees/{emp['id']}/punches", json={})
    assert resp.status_code == 201
    assert resp.get_json()["entry"] != ""

    assert client.post(f"/api/employees/{emp['id']}/punches", json={"type": "entry"}).status_code == 400
    assert client.post("/api/employees/ghost/punches", json={}).status_code == 404
    assert len(client.get(f"/api/employees/{emp['id']}/records").get_json()) == 1


def test_update_record_and_day_view(client):
    emp = _add_employee(client)
    body = {"date": "2024-03-04", "employeeId": emp["id"], "entry": "09:00", "lunchStart": "12:00",
            "lunchEnd": "13:00", "exit": "18:00"}

    saved = client.put("/api/records", json=body).get_json()
    assert saved["totalMinutes"] == 480

    day = client.get(f"/api/employees/{emp['id']}/records/2024-03-04").get_json()
    assert day["exit"] == "18:00"
    assert client.get(f"/api/employees/{emp['id']}/records/not-a-date").status_code == 400
    assert client.put("/api/records", json={"date": "2024-03-04", "employeeId": "ghost"}).status_code == 404


def test_transactions_move_the_balance(client):
    emp = _add_employee(client)
    url = f"/api/employees/{emp['id']}"
    before = client.get(f"{url}/balance").get_json()["balanceMinutes"]

    tx = client.post(f"{url}/transactions", json={"type": "bonus", "amountMinutes": 120}).get_json()
    assert client.get(f"{url}/balance").get_json()["balanceMinutes"] == before + 120
    assert len(client.get(f"{url}/transactions").get_json()) == 1

    assert client.delete(f"/api/transactions/{tx['id']}").get_json()["deleted"] is True
    assert client.get(f"{url}/balance").get_json()["balanceMinutes"] == before
    assert client.post(f"{url}/transactions", json={"amountMinutes": "abc"}).status_code == 400


def test_statement_and_reset(client):
    emp = _add_employee(client)
    url = f"/api/employees/{emp['id']}"

    st = client.get(f"{url}/statement?year=2024&month=2").get_json()
    assert len(st["days"]) == 29
    assert client.get(f"{url}/statement?month=13").status_code == 400

    reset = client.post(f"{url}/balance/reset").get_json()
    assert reset["bankStartDate"] != ""
    assert client.get(f"{url}/balance").get_json()["balanceMinutes"] == 0


def test_import(client):
    emp = _add_employee(client)
    resp = client.post(
        f"/api/employees/{emp['id']}/import",
        json={"text": "09/12/2025\t08:00\t12:00\t13:00\t\t\t18:00\n10/12/2025;08:05;12:10;13:10;18:05"},
    )
    assert resp.get_json() == {"success": True, "imported": 2}
    assert client.post(f"/api/employees/{emp['id']}/import", json={"text": "junk"}).status_code == 400


def test_settings_and_disabled_sync(client):
    assert client.get("/api/settings/sync").get_json()["enabled"] is False

    resp = client.post("/api/sync")
    assert resp.get_json()["success"] is False
    assert resp.get_json()["reason"] == "sync disabled"

    loc = client.put("/api/settings/location", json={"useFixed": True, "fixedName": "Store 1"}).get_json()
    assert loc == {"kind": "location", "useFixed": True, "fixedName": "Store 1"}

    emp = _add_employee(client)
    punched = client.post(f"/api/employees/{emp['id']}/punches", json={}).get_json()
    assert punched["location"] == "Store 1"
