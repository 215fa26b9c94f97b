from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.http import api_view
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from ..punches.normalizer import format_duration
from ..storage.codecs import as_int, employee_to_dict, record_to_dict


def register(app: Flask, container: Container) -> None:
    ledger = container.ledger_service

    @app.route("/api/employees/<employee_id>/balance", methods=["GET"], endpoint="bank_balance")
    @api_view
    def bank_balance(employee_id: str):
        container.employee_service.require_employee(employee_id)
        minutes = ledger.bank_balance(employee_id)
        return jsonify({"employeeId": employee_id, "balanceMinutes": minutes, "formatted": format_duration(minutes)})

    @app.route("/api/employees/<employee_id>/statement", methods=["GET"], endpoint="monthly_statement")
    @api_view
    def monthly_statement(employee_id: str):
        container.employee_service.require_employee(employee_id)
        today = today_local()
        year = as_int(request.args.get("year")) or today.year
        month = as_int(request.args.get("month")) or today.month
        if not 1 <= month <= 12:
            raise ValidationError("month must be between 1 and 12")

        st = ledger.statement(employee_id, year, month, today=today)
        return jsonify(
            {
                "employeeId": st.employee_id,
                "year": st.year,
                "month": st.month,
                "workedMinutes": st.worked_minutes,
                "targetMinutes": st.target_minutes,
                "balanceMinutes": st.balance_minutes,
                "days": [
                    {
                        **record_to_dict(line.record),
                        "persisted": line.persisted,
                        "targetMinutes": line.target_minutes,
                        "shortDay": line.short_day,
                        "balanceFormatted": format_duration(line.balance_minutes),
                    }
                    for line in st.lines
                ],
            }
        )

    @app.route("/api/employees/<employee_id>/balance/reset", methods=["POST"], endpoint="reset_balance")
    @api_view
    def reset_balance(employee_id: str):
        employee = ledger.reset_balance(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        container.sync_service.publish_employee(employee)
        return jsonify(employee_to_dict(employee))
