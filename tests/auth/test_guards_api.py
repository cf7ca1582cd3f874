from __future__ import annotations

import pytest

from employee_system.core.enums import Role


def test_admin_route_without_session_is_forbidden(client):
    resp = client.get("/api/employees")

    assert resp.status_code == 403
    assert resp.get_json() == {"message": "Forbidden - Admin access required"}


@pytest.mark.parametrize("role", ["employee", "colleague"])
def test_admin_route_rejects_non_administrative_roles(client, acme, login_as, role):
    login_as(getattr(acme, role))

    assert client.get("/api/employees").status_code == 403


def test_manager_is_not_administrative(world, client, acme, login_as):
    world.users.update_user(acme.employee.id, {"role": Role.MANAGER})
    login_as(acme.employee)

    assert client.get("/api/employees").status_code == 403


@pytest.mark.parametrize("role", ["admin", "hr"])
def test_admin_route_admits_admin_and_hr(client, acme, login_as, role):
    login_as(getattr(acme, role))

    assert client.get("/api/employees").status_code == 200


def test_other_tenant_user_looks_exactly_like_a_missing_one(client, acme, globex, login_as):
    login_as(acme.admin)

    foreign = client.get(f"/api/employees/{globex.employee.id}")
    missing = client.get("/api/employees/does-not-exist")

    assert foreign.status_code == missing.status_code == 404
    assert foreign.get_json() == missing.get_json() == {
        "message": "User not found or does not belong to your company"
    }


def test_ownership_routes_require_a_session(client, acme):
    assert client.get(f"/api/employees/{acme.employee.id}").status_code == 401
    assert client.get(f"/api/attendance/user/{acme.employee.id}").status_code == 401


def test_rejected_cross_tenant_write_changes_nothing(world, client, acme, globex, login_as):
    login_as(acme.admin)

    resp = client.put(f"/api/employees/{globex.employee.id}", json={"full_name": "Hijacked", "is_active": False})

    assert resp.status_code == 404
    untouched = world.users.get_by_id(globex.employee.id)
    assert untouched.full_name == globex.employee.full_name
    assert untouched.is_active is True


def test_non_admin_is_forbidden_before_ownership_is_checked(client, acme, globex, login_as):
    login_as(acme.employee)

    assert client.put(f"/api/employees/{globex.employee.id}", json={}).status_code == 403


@pytest.mark.parametrize(
    "path",
    [
        "/api/attendance/user/{id}",
        "/api/attendance/today/{id}",
        "/api/leaves/user/{id}",
        "/api/travel-claims/user/{id}",
        "/api/salaries/user/{id}",
        "/api/notifications/user/{id}",
        "/api/activity-logs/user/{id}",
    ],
)
def test_per_user_reads_are_tenant_scoped(client, acme, globex, login_as, path):
    login_as(acme.admin)

    assert client.get(path.format(id=acme.employee.id)).status_code == 200
    assert client.get(path.format(id=globex.employee.id)).status_code == 404
