from __future__ import annotations


def test_log_is_always_attributed_to_the_caller(world, client, acme, login_as):
    login_as(acme.employee)

    resp = client.post(
        "/api/activity-logs",
        json={"activity": "Client call", "description": "Quarterly review", "user_id": acme.colleague.id},
    )

    assert resp.status_code == 201
    assert resp.get_json()["user_id"] == acme.employee.id
    assert world.activity_logs.list_for_user(acme.colleague.id) == []


def test_activity_is_required(client, acme, login_as):
    login_as(acme.employee)

    assert client.post("/api/activity-logs", json={"description": "no title"}).status_code == 400


def test_user_logs_filter_by_day(world, client, acme, login_as, fixed_now):
    world.activity_logs.create_log(user_id=acme.employee.id, activity="Standup", description=None, created_at=fixed_now)
    login_as(acme.admin)

    same_day = client.get(f"/api/activity-logs/user/{acme.employee.id}?date={fixed_now.date().isoformat()}")
    other_day = client.get(f"/api/activity-logs/user/{acme.employee.id}?date=2026-01-01")

    assert [log["activity"] for log in same_day.get_json()] == ["Standup"]
    assert other_day.get_json() == []


def test_company_logs_are_admin_only_and_scoped(world, client, acme, globex, login_as, fixed_now):
    world.activity_logs.create_log(user_id=acme.employee.id, activity="Ours", description=None, created_at=fixed_now)
    world.activity_logs.create_log(user_id=globex.employee.id, activity="Theirs", description=None, created_at=fixed_now)

    login_as(acme.employee)
    assert client.get("/api/activity-logs/company").status_code == 403
    client.post("/api/auth/logout")

    login_as(acme.admin)
    logs = client.get("/api/activity-logs/company").get_json()
    filtered = client.get(f"/api/activity-logs/company?user_id={globex.employee.id}")

    assert [log["activity"] for log in logs] == ["Ours"]
    assert filtered.status_code == 404
