from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import to_jsonable
from ..container import Container
from .guards import current_principal


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    auth_service = container.auth_service

    def _with_session_cookie(resp, token: str):
        resp.set_cookie(
            guards.cookie_name,
            token,
            max_age=int(container.session_ttl.total_seconds()),
            httponly=True,
            samesite="Lax",
            secure=bool(app.config.get("SESSION_COOKIE_SECURE", False)),
        )
        return resp

    @app.route("/api/auth/signup", methods=["POST"], endpoint="auth_signup")
    def signup():
        payload = request.get_json(silent=True) or {}
        token, principal, company = auth_service.signup(
            company_name=payload.get("company_name"),
            full_name=payload.get("full_name"),
            email=payload.get("email"),
            password=payload.get("password"),
        )
        resp = jsonify({"user": principal.to_dict(), "company": to_jsonable(company)})
        resp.status_code = 201
        return _with_session_cookie(resp, token)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        payload = request.get_json(silent=True) or {}
        token, principal = auth_service.login(
            payload.get("email"),
            payload.get("password"),
            latitude=payload.get("latitude"),
            longitude=payload.get("longitude"),
        )
        return _with_session_cookie(jsonify({"user": principal.to_dict()}), token)

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        auth_service.logout(guards.session_token())
        resp = jsonify({"message": "Logged out successfully"})
        resp.delete_cookie(guards.cookie_name, httponly=True, samesite="Lax")
        return resp

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @guards.require_auth
    def me():
        return jsonify({"user": current_principal().to_dict()})

    @app.route("/api/auth/profile", methods=["PUT"], endpoint="auth_profile")
    @guards.require_auth
    def update_profile():
        payload = request.get_json(silent=True) or {}
        user = container.user_service.update_profile(current_principal(), payload)
        principal = auth_service.refresh_session(guards.session_token(), user)
        return jsonify({"user": principal.to_dict()})
