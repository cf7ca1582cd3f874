from __future__ import annotations


def test_list_defaults_to_active_employees_of_own_company(world, client, acme, globex, login_as):
    world.users.update_user(acme.colleague.id, {"is_active": False})
    login_as(acme.admin)

    active = {u["id"] for u in client.get("/api/employees").get_json()}
    everyone = {u["id"] for u in client.get("/api/employees?is_active=all").get_json()}
    inactive = {u["id"] for u in client.get("/api/employees?is_active=false").get_json()}

    assert active == {acme.admin.id, acme.hr.id, acme.employee.id}
    assert everyone == active | {acme.colleague.id}
    assert inactive == {acme.colleague.id}


def test_list_filters_by_search_and_role(client, acme, login_as):
    login_as(acme.hr)

    by_search = client.get("/api/employees?search=colleague").get_json()
    by_role = client.get("/api/employees?role=hr").get_json()

    assert [u["id"] for u in by_search] == [acme.colleague.id]
    assert [u["id"] for u in by_role] == [acme.hr.id]
    assert client.get("/api/employees?role=ceo").status_code == 400


def test_listing_never_exposes_password_hashes(client, acme, login_as):
    login_as(acme.admin)

    for user in client.get("/api/employees").get_json():
        assert "password_hash" not in user


def test_created_employee_lands_in_callers_company(world, client, acme, globex, login_as):
    login_as(acme.admin)

    resp = client.post(
        "/api/employees",
        json={
            "email": "New.Hire@acme.com",
            "password": "welcome1",
            "full_name": "New Hire",
            "department": "Sales",
            "company_id": globex.company.id,
        },
    )

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["company_id"] == acme.company.id
    assert body["email"] == "new.hire@acme.com"
    assert body["role"] == "employee"
    assert client.post("/api/auth/login", json={"email": "new.hire@acme.com", "password": "welcome1"}).status_code == 200


def test_create_employee_validation(client, acme, login_as):
    login_as(acme.admin)

    duplicate = client.post(
        "/api/employees", json={"email": acme.employee.email, "password": "welcome1", "full_name": "Dup"}
    )
    short_password = client.post(
        "/api/employees", json={"email": "x@acme.com", "password": "123", "full_name": "X"}
    )

    assert duplicate.status_code == 400
    assert short_password.status_code == 400


def test_manager_must_belong_to_the_same_company(client, acme, globex, login_as):
    login_as(acme.admin)

    resp = client.post(
        "/api/employees",
        json={"email": "x@acme.com", "password": "welcome1", "full_name": "X", "manager_id": globex.admin.id},
    )

    assert resp.status_code == 400


def test_update_never_moves_an_employee_to_another_company(world, client, acme, globex, login_as):
    login_as(acme.admin)

    resp = client.put(
        f"/api/employees/{acme.employee.id}",
        json={"company_id": globex.company.id, "id": "forged", "department": "Ops", "password": "changed1"},
    )

    assert resp.status_code == 200
    stored = world.users.get_by_id(acme.employee.id)
    assert stored.company_id == acme.company.id
    assert stored.department == "Ops"
    assert client.post("/api/auth/login", json={"email": acme.employee.email, "password": "changed1"}).status_code == 200


def test_any_colleague_may_view_a_profile(client, acme, login_as):
    login_as(acme.employee)

    resp = client.get(f"/api/employees/{acme.colleague.id}")

    assert resp.status_code == 200
    assert resp.get_json()["email"] == acme.colleague.email


def test_delete_is_a_soft_deactivation(world, client, acme, login_as):
    login_as(acme.admin)

    resp = client.delete(f"/api/employees/{acme.employee.id}")

    assert resp.status_code == 200
    assert world.users.get_by_id(acme.employee.id).is_active is False
    assert client.post(
        "/api/auth/login", json={"email": acme.employee.email, "password": "secret1"}
    ).status_code == 401


def test_status_update_requires_a_boolean(world, client, acme, login_as):
    login_as(acme.admin)

    assert client.put(f"/api/employees/{acme.employee.id}/status", json={"is_active": "no"}).status_code == 400
    resp = client.put(f"/api/employees/{acme.employee.id}/status", json={"is_active": False})

    assert resp.status_code == 200
    assert resp.get_json()["is_active"] is False
