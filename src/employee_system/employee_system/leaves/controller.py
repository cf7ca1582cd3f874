from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.guards import current_principal, target_user
from ..common.serialization import to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    leave_service = container.leave_service
    owns_leave = guards.owns_resource("leave_id", leave_service.get, label="Leave application")

    @app.route("/api/leaves/apply", methods=["POST"], endpoint="apply_leave")
    @guards.require_auth
    def apply_leave():
        leave = leave_service.apply(current_principal(), request.get_json(silent=True) or {})
        return jsonify(to_jsonable(leave)), 201

    @app.route("/api/leaves/user/<user_id>", methods=["GET"], endpoint="user_leaves")
    @guards.owns_user()
    def user_leaves(user_id: str):
        return jsonify(to_jsonable(list(leave_service.list_for_user(target_user().id))))

    @app.route("/api/leaves/pending", methods=["GET"], endpoint="pending_leaves")
    @guards.require_admin
    def pending_leaves():
        return jsonify(leave_service.pending_for_company(current_principal()))

    @app.route("/api/leaves/<leave_id>/approve", methods=["PUT"], endpoint="approve_leave")
    @guards.require_admin
    @owns_leave
    def approve_leave(leave_id: str):
        payload = request.get_json(silent=True) or {}
        leave = leave_service.approve(current_principal(), g.resource, payload.get("remarks"))
        return jsonify(to_jsonable(leave))

    @app.route("/api/leaves/<leave_id>/reject", methods=["PUT"], endpoint="reject_leave")
    @guards.require_admin
    @owns_leave
    def reject_leave(leave_id: str):
        payload = request.get_json(silent=True) or {}
        leave = leave_service.reject(current_principal(), g.resource, payload.get("remarks"))
        return jsonify(to_jsonable(leave))
