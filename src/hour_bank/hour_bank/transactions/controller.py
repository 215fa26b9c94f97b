from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import today_local
from ..common.http import api_view, json_body, optional_date
from ..common.validators import require_int
from ..container import Container
from ..core.enums import TransactionType
from ..core.exceptions import ValidationError
from ..storage.codecs import transaction_to_dict


def register(app: Flask, container: Container) -> None:
    ledger = container.transaction_ledger

    @app.route("/api/employees/<employee_id>/transactions", methods=["GET"], endpoint="list_transactions")
    @api_view
    def list_transactions(employee_id: str):
        return jsonify([transaction_to_dict(t) for t in ledger.get_transactions(employee_id)])

    @app.route("/api/employees/<employee_id>/transactions", methods=["POST"], endpoint="add_transaction")
    @api_view
    def add_transaction(employee_id: str):
        container.employee_service.require_employee(employee_id)
        body = json_body()
        try:
            tx_type = TransactionType(str(body.get("type") or TransactionType.ADJUSTMENT.value).upper())
        except ValueError:
            raise ValidationError("Unknown transaction type")

        tx = ledger.add_transaction(
            employee_id=employee_id,
            tx_date=optional_date(body.get("date"), "date") or today_local(),
            type=tx_type,
            amount_minutes=require_int(body.get("amountMinutes"), "amountMinutes"),
            description=str(body.get("description") or ""),
        )
        container.sync_service.publish_transaction(tx)
        return jsonify(transaction_to_dict(tx)), 201

    @app.route("/api/transactions/<tx_id>", methods=["DELETE"], endpoint="delete_transaction")
    @api_view
    def delete_transaction(tx_id: str):
        removed = ledger.delete_transaction(tx_id)
        if removed:
            container.sync_service.publish_transaction_deletion(removed.id)
        return jsonify({"success": True, "deleted": removed is not None})
