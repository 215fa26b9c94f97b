from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import now_local
from ..common.http import api_view, json_body, require_date
from ..container import Container
from ..core.exceptions import ValidationError
from ..storage.codecs import record_from_dict, record_to_dict


def register(app: Flask, container: Container) -> None:
    records = container.record_service

    def _publish(record) -> None:
        employee = container.employee_service.get_employee(record.employee_id)
        container.sync_service.publish_record(record, employee)

    @app.route("/api/employees/<employee_id>/records", methods=["GET"], endpoint="list_records")
    @api_view
    def list_records(employee_id: str):
        return jsonify([record_to_dict(r) for r in records.get_records(employee_id)])

    @app.route("/api/employees/<employee_id>/records/<day>", methods=["GET"], endpoint="day_record")
    @api_view
    def day_record(employee_id: str, day: str):
        record = records.get_day_record(employee_id, require_date(day, "date"))
        return jsonify(record_to_dict(record))

    @app.route("/api/records", methods=["PUT"], endpoint="update_record")
    @api_view
    def update_record():
        record = record_from_dict(json_body())
        if record is None:
            raise ValidationError("A record needs a valid date and employeeId")
        container.employee_service.require_employee(record.employee_id)

        saved = records.update_record(record)
        _publish(saved)
        return jsonify(record_to_dict(saved))

    @app.route("/api/employees/<employee_id>/punches", methods=["POST"], endpoint="register_punch")
    @api_view
    def register_punch(employee_id: str):
        body = json_body()
        saved = records.register_punch(
            employee_id,
            body.get("type") or None,
            now=now_local(),
            location=body.get("location") or None,
        )
        _publish(saved)
        return jsonify(record_to_dict(saved)), 201

    @app.route("/api/employees/<employee_id>/import", methods=["POST"], endpoint="import_records")
    @api_view
    def import_records(employee_id: str):
        container.employee_service.require_employee(employee_id)
        count = container.import_service.import_rows(employee_id, str(json_body().get("text") or ""))
        return jsonify({"success": True, "imported": count})
