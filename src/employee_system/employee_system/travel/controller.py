from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.guards import current_principal, target_user
from ..common.serialization import to_jsonable
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    claim_service = container.travel_claim_service

    @app.route("/api/travel-claims", methods=["POST"], endpoint="submit_travel_claim")
    @guards.require_auth
    def submit_claim():
        claim = claim_service.submit(current_principal(), request.get_json(silent=True) or {})
        return jsonify(to_jsonable(claim)), 201

    @app.route("/api/travel-claims/user/<user_id>", methods=["GET"], endpoint="user_travel_claims")
    @guards.owns_user()
    def user_claims(user_id: str):
        return jsonify(to_jsonable(list(claim_service.list_for_user(target_user().id))))

    @app.route("/api/travel-claims/pending", methods=["GET"], endpoint="pending_travel_claims")
    @guards.require_admin
    def pending_claims():
        return jsonify(claim_service.pending_for_company(current_principal()))

    @app.route("/api/travel-claims/<claim_id>/status", methods=["PUT"], endpoint="travel_claim_status")
    @guards.require_admin
    @guards.owns_resource("claim_id", claim_service.get, label="Travel claim")
    def decide_claim(claim_id: str):
        payload = request.get_json(silent=True) or {}
        claim = claim_service.decide(current_principal(), g.resource, payload.get("status"), payload.get("remarks"))
        return jsonify(to_jsonable(claim))
