from __future__ import annotations

import re

from employee_system.core.constants import SESSION_COOKIE_NAME
from employee_system.main import create_app

from fakes import Clock, FailingDestroySessionStore, World, add_tenant


def _session_token(resp) -> str:
    for header in resp.headers.getlist("Set-Cookie"):
        match = re.match(rf"{SESSION_COOKIE_NAME}=([^;]*)", header)
        if match:
            return match.group(1)
    raise AssertionError("no session cookie set")


def test_login_sets_http_only_session_cookie(client, acme):
    resp = client.post("/api/auth/login", json={"email": acme.admin.email, "password": "secret1"})

    assert resp.status_code == 200
    assert resp.get_json()["user"]["id"] == acme.admin.id
    cookie = next(h for h in resp.headers.getlist("Set-Cookie") if h.startswith(SESSION_COOKIE_NAME))
    assert "HttpOnly" in cookie
    assert "SameSite=Lax" in cookie


def test_me_returns_principal_without_password_hash(client, acme, login_as):
    login_as(acme.employee)

    resp = client.get("/api/auth/me")

    assert resp.status_code == 200
    user = resp.get_json()["user"]
    assert user["email"] == acme.employee.email
    assert user["company_id"] == acme.company.id
    assert user["role"] == "employee"
    assert "password_hash" not in user


def test_me_without_session_is_unauthorized(client):
    resp = client.get("/api/auth/me")

    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Unauthorized"}


def test_bad_login_answers_401_with_generic_message(client, acme):
    wrong = client.post("/api/auth/login", json={"email": acme.admin.email, "password": "nope"})
    unknown = client.post("/api/auth/login", json={"email": "ghost@acme.com", "password": "secret1"})
    empty = client.post("/api/auth/login", data="not json")

    for resp in (wrong, unknown, empty):
        assert resp.status_code == 401
        assert resp.get_json() == {"message": "Invalid credentials"}


def test_login_outside_fence_answers_403_with_distance(world, client, acme):
    world.users.update_user(
        acme.employee.id,
        {"enable_location_auth": True, "allowed_latitude": 17.6868, "allowed_longitude": 83.2185, "allowed_radius": 100},
    )

    far = client.post(
        "/api/auth/login",
        json={"email": acme.employee.email, "password": "secret1", "latitude": 17.7318, "longitude": 83.2185},
    )
    missing = client.post("/api/auth/login", json={"email": acme.employee.email, "password": "secret1"})
    near = client.post(
        "/api/auth/login",
        json={"email": acme.employee.email, "password": "secret1", "latitude": 17.6868, "longitude": 83.2185},
    )

    assert far.status_code == 403
    assert "5004m away" in far.get_json()["message"]
    assert "(radius: 100m)" in far.get_json()["message"]
    assert missing.status_code == 403
    assert missing.get_json()["message"].startswith("Location verification required")
    assert near.status_code == 200


def test_rejected_login_does_not_create_a_session(world, client, acme):
    client.post("/api/auth/login", json={"email": acme.admin.email, "password": "nope"})

    assert client.get("/api/auth/me").status_code == 401


def test_token_is_dead_after_logout(app, client, acme):
    token = _session_token(client.post("/api/auth/login", json={"email": acme.admin.email, "password": "secret1"}))
    stale = app.test_client(use_cookies=False)
    assert stale.get("/api/auth/me", headers={"Cookie": f"{SESSION_COOKIE_NAME}={token}"}).status_code == 200

    resp = client.post("/api/auth/logout")

    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Logged out successfully"}
    assert stale.get("/api/auth/me", headers={"Cookie": f"{SESSION_COOKIE_NAME}={token}"}).status_code == 401
    assert client.get("/api/auth/me").status_code == 401


def test_logout_without_session_succeeds(client):
    assert client.post("/api/auth/logout").status_code == 200


def test_session_expires_after_24_hours(client, clock, acme, login_as):
    login_as(acme.admin)

    clock.advance(hours=23)
    assert client.get("/api/auth/me").status_code == 200

    clock.advance(hours=1)
    assert client.get("/api/auth/me").status_code == 401


def test_logout_failure_answers_500():
    clock = Clock()
    world = World(clock=clock, session_store=FailingDestroySessionStore(clock=clock))
    tenant = add_tenant(world, "Acme")
    client = create_app(container=world.container).test_client()
    client.post("/api/auth/login", json={"email": tenant.admin.email, "password": "secret1"})

    resp = client.post("/api/auth/logout")

    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Could not log out"}


def test_signup_logs_the_new_admin_in(client):
    resp = client.post(
        "/api/auth/signup",
        json={"company_name": "Initech", "full_name": "Bill L", "email": "bill@initech.com", "password": "tps-report"},
    )

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["company"]["name"] == "Initech"
    me = client.get("/api/auth/me").get_json()["user"]
    assert me["role"] == "admin"
    assert me["company_id"] == body["company"]["id"]


def test_signup_with_taken_company_email_is_rejected(client):
    payload = {"company_name": "Initech", "full_name": "Bill L", "email": "bill@initech.com", "password": "tps-report"}
    client.post("/api/auth/signup", json=payload)

    resp = client.post("/api/auth/signup", json=payload)

    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Company with this email already exists"}


def test_profile_update_refreshes_the_session(client, acme, login_as):
    login_as(acme.employee)

    assert client.put("/api/auth/profile", json={"phone": "555"}).status_code == 400
    resp = client.put("/api/auth/profile", json={"full_name": "Eve Employee", "phone": "555-0100", "role": "admin"})

    assert resp.status_code == 200
    me = client.get("/api/auth/me").get_json()["user"]
    assert me["full_name"] == "Eve Employee"
    assert me["phone"] == "555-0100"
    assert me["role"] == "employee"


def test_unknown_route_answers_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert "message" in resp.get_json()
