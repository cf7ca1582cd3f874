from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_principal, target_user
from ..common.serialization import to_jsonable
from ..common.validators import require_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    attendance_service = container.attendance_service

    def _date_arg(name: str):
        value = request.args.get(name)
        return require_date(value, name) if value else None

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @guards.require_auth
    def check_in():
        payload = request.get_json(silent=True) or {}
        record = attendance_service.check_in(current_principal(), location=payload.get("location"))
        return jsonify(to_jsonable(record)), 201

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @guards.require_auth
    def check_out():
        return jsonify(to_jsonable(attendance_service.check_out(current_principal())))

    @app.route("/api/attendance/user/<user_id>", methods=["GET"], endpoint="attendance_history")
    @guards.owns_user()
    def history(user_id: str):
        records = attendance_service.history(
            target_user().id,
            start_date=_date_arg("start_date"),
            end_date=_date_arg("end_date"),
        )
        return jsonify(to_jsonable(list(records)))

    @app.route("/api/attendance/today/<user_id>", methods=["GET"], endpoint="attendance_today")
    @guards.owns_user()
    def today(user_id: str):
        return jsonify(to_jsonable(attendance_service.today(target_user().id)))

    @app.route("/api/attendance/company", methods=["GET"], endpoint="attendance_company")
    @guards.require_admin
    def company_today():
        rows = attendance_service.company_today(current_principal())
        return jsonify([{**to_jsonable(row.record), "user_name": row.user_name} for row in rows])
