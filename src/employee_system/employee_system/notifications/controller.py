from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.guards import current_principal, target_user
from ..common.serialization import to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    notification_service = container.notification_service

    @app.route("/api/notifications/broadcast", methods=["POST"], endpoint="broadcast_notification")
    @guards.require_admin
    def broadcast():
        count = notification_service.broadcast(current_principal(), request.get_json(silent=True) or {})
        return jsonify({"message": f"Notification sent to {count} employees", "count": count}), 201

    @app.route("/api/notifications/user/<user_id>", methods=["GET"], endpoint="user_notifications")
    @guards.owns_user()
    def user_notifications(user_id: str):
        items = notification_service.list_for(current_principal(), target_user())
        return jsonify(to_jsonable(list(items)))

    @app.route("/api/notifications/<notification_id>/read", methods=["PUT"], endpoint="mark_notification_read")
    @guards.owns_resource("notification_id", notification_service.get, label="Notification")
    def mark_read(notification_id: str):
        notification = notification_service.mark_read(current_principal(), g.resource)
        return jsonify(to_jsonable(notification))
