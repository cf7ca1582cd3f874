from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_principal, target_user
from ..common.serialization import to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    user_service = container.user_service

    # -------- Employees --------
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @guards.require_admin
    def list_employees():
        employees = user_service.list_employees(
            current_principal(),
            search=request.args.get("search"),
            role=request.args.get("role"),
            is_active=request.args.get("is_active"),
        )
        return jsonify(to_jsonable(list(employees)))

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @guards.require_admin
    def create_employee():
        user = user_service.create_employee(current_principal(), request.get_json(silent=True) or {})
        return jsonify(to_jsonable(user)), 201

    @app.route("/api/employees/<user_id>", methods=["GET"], endpoint="get_employee")
    @guards.owns_user()
    def get_employee(user_id: str):
        return jsonify(to_jsonable(target_user()))

    @app.route("/api/employees/<user_id>", methods=["PUT"], endpoint="update_employee")
    @guards.require_admin
    @guards.owns_user()
    def update_employee(user_id: str):
        payload = request.get_json(silent=True) or {}
        user = user_service.update_employee(current_principal(), target_user(), payload)
        _refresh_if_self(user)
        return jsonify(to_jsonable(user))

    @app.route("/api/employees/<user_id>", methods=["DELETE"], endpoint="delete_employee")
    @guards.require_admin
    @guards.owns_user()
    def delete_employee(user_id: str):
        user_service.deactivate(target_user())
        return jsonify({"message": "Employee deactivated successfully"})

    @app.route("/api/employees/<user_id>/status", methods=["PUT"], endpoint="employee_status")
    @guards.require_admin
    @guards.owns_user()
    def set_employee_status(user_id: str):
        payload = request.get_json(silent=True) or {}
        user = user_service.set_active(target_user(), payload.get("is_active"))
        return jsonify(to_jsonable(user))

    # -------- Location login settings --------
    @app.route("/api/users/<user_id>/location", methods=["PUT"], endpoint="update_user_location")
    @guards.require_admin
    @guards.owns_user()
    def update_user_location(user_id: str):
        user = user_service.update_location(target_user(), request.get_json(silent=True) or {})
        _refresh_if_self(user)
        return jsonify({"message": "Location settings updated", "user": to_jsonable(user)})

    @app.route("/api/settings/location", methods=["PUT"], endpoint="update_own_location")
    @guards.require_admin
    def update_own_location():
        principal = current_principal()
        me = container.auth_service.verify_company_ownership(principal, principal.id)
        user = user_service.update_location(me, request.get_json(silent=True) or {})
        refreshed = container.auth_service.refresh_session(guards.session_token(), user)
        return jsonify({"message": "Location settings updated", "user": refreshed.to_dict()})

    def _refresh_if_self(user) -> None:
        if user.id == current_principal().id:
            container.auth_service.refresh_session(guards.session_token(), user)
