from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.http import api_view
from ..container import Container
from ..storage.codecs import as_bool


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sync", methods=["POST"], endpoint="sync_now")
    @api_view
    def sync_now():
        force = as_bool(request.args.get("force"), False)
        result = container.sync_service.sync(force=force)
        return jsonify({"success": not result.skipped, **asdict(result)})
