from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_view, json_body
from ..container import Container
from ..storage.codecs import as_bool, as_str, settings_to_dict


def register(app: Flask, container: Container) -> None:
    settings = container.settings_service

    @app.route("/api/settings/sync", methods=["GET"], endpoint="get_sync_settings")
    @api_view
    def get_sync_settings():
        return jsonify(settings_to_dict(settings.get_sync_config()))

    @app.route("/api/settings/sync", methods=["PUT"], endpoint="save_sync_settings")
    @api_view
    def save_sync_settings():
        body = json_body()
        enabled = body.get("enabled")
        config = settings.save_sync_config(
            script_url=as_str(body.get("scriptUrl")),
            enabled=None if enabled is None else as_bool(enabled, False),
        )
        return jsonify(settings_to_dict(config))

    @app.route("/api/settings/location", methods=["GET"], endpoint="get_location_settings")
    @api_view
    def get_location_settings():
        return jsonify(settings_to_dict(settings.get_location_config()))

    @app.route("/api/settings/location", methods=["PUT"], endpoint="save_location_settings")
    @api_view
    def save_location_settings():
        body = json_body()
        config = settings.save_location_config(
            use_fixed=as_bool(body.get("useFixed"), False),
            fixed_name=as_str(body.get("fixedName")),
        )
        return jsonify(settings_to_dict(config))
