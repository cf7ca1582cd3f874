from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_principal, target_user
from ..common.serialization import to_jsonable
from ..common.validators import require_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    activity_service = container.activity_log_service

    def _date_arg(name: str):
        value = request.args.get(name)
        return require_date(value, name) if value else None

    @app.route("/api/activity-logs", methods=["POST"], endpoint="create_activity_log")
    @guards.require_auth
    def create_log():
        log = activity_service.record(current_principal(), request.get_json(silent=True) or {})
        return jsonify(to_jsonable(log)), 201

    @app.route("/api/activity-logs/user/<user_id>", methods=["GET"], endpoint="user_activity_logs")
    @guards.owns_user()
    def user_logs(user_id: str):
        logs = activity_service.for_user(target_user().id, on_date=_date_arg("date"))
        return jsonify(to_jsonable(list(logs)))

    @app.route("/api/activity-logs/company", methods=["GET"], endpoint="company_activity_logs")
    @guards.require_admin
    def company_logs():
        principal = current_principal()
        user_id = request.args.get("user_id")
        if user_id:
            container.auth_service.verify_company_ownership(principal, user_id)
        logs = activity_service.for_company(
            principal,
            start_date=_date_arg("start_date"),
            end_date=_date_arg("end_date"),
            user_id=user_id,
        )
        return jsonify(to_jsonable(list(logs)))
