from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_principal
from ..common.serialization import to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    company_service = container.company_service

    @app.route("/api/settings/company", methods=["GET"], endpoint="get_company_settings")
    @guards.require_auth
    def get_company_settings():
        return jsonify(to_jsonable(company_service.get_settings(current_principal())))

    @app.route("/api/settings/company", methods=["PUT"], endpoint="update_company_settings")
    @guards.require_admin
    def update_company_settings():
        payload = request.get_json(silent=True) or {}
        settings = company_service.update_settings(current_principal(), payload)
        return jsonify(to_jsonable(settings))

    @app.route("/api/settings/company-info", methods=["GET"], endpoint="get_company_info")
    @guards.require_auth
    def get_company_info():
        return jsonify(to_jsonable(company_service.get_info(current_principal())))

    @app.route("/api/settings/company-info", methods=["PUT"], endpoint="update_company_info")
    @guards.require_admin
    def update_company_info():
        payload = request.get_json(silent=True) or {}
        company = company_service.rename(current_principal(), payload.get("name"))
        return jsonify(to_jsonable(company))
