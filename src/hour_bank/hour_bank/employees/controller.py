from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_view, json_body, optional_date
from ..container import Container
from ..storage.codecs import as_bool, employee_to_dict

_FIELD_MAP = {
    "name": "name",
    "role": "role",
    "pin": "pin",
    "active": "active",
    "shortDayOfWeek": "short_day_of_week",
    "standardDailyMinutes": "standard_daily_minutes",
    "bankStartDate": "ledger_start_date",
}


def _changes_from(body: dict) -> dict:
    changes = {_FIELD_MAP[k]: v for k, v in body.items() if k in _FIELD_MAP}
    if "ledger_start_date" in changes:
        changes["ledger_start_date"] = optional_date(changes["ledger_start_date"], "bankStartDate")
    if "active" in changes:
        changes["active"] = as_bool(changes["active"], True)
    if "pin" in changes:
        changes["pin"] = str(changes["pin"] or "")
    return changes


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @api_view
    def list_employees():
        return jsonify([employee_to_dict(e) for e in employees.list_employees()])

    @app.route("/api/employees", methods=["POST"], endpoint="add_employee")
    @api_view
    def add_employee():
        changes = _changes_from(json_body())
        changes.setdefault("name", "")
        employee = employees.add_employee(**changes)
        container.sync_service.publish_employee(employee)
        return jsonify(employee_to_dict(employee)), 201

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    @api_view
    def get_employee(employee_id: str):
        return jsonify(employee_to_dict(employees.require_employee(employee_id)))

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    @api_view
    def update_employee(employee_id: str):
        employee = employees.update_employee(employee_id, **_changes_from(json_body()))
        container.sync_service.publish_employee(employee)
        return jsonify(employee_to_dict(employee))

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @api_view
    def delete_employee(employee_id: str):
        if not employees.delete_employee(employee_id):
            return jsonify({"success": False, "message": "Employee not found"}), 404
        return jsonify({"success": True})
