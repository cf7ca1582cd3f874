from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from employee_system.core.exceptions import ValidationError


@pytest.fixture
def attendance(world):
    return world.container.attendance_service


def test_check_out_records_hours_to_two_decimals(attendance, acme, fixed_now):
    principal = acme.employee.to_principal()
    attendance.check_in(principal, location="HQ", now=fixed_now)

    record = attendance.check_out(principal, now=fixed_now.replace(hour=17, minute=20))

    assert record.total_hours == Decimal("8.33")
    assert record.location == "HQ"


def test_one_check_in_per_day(attendance, acme, fixed_now):
    principal = acme.employee.to_principal()
    attendance.check_in(principal, now=fixed_now)

    with pytest.raises(ValidationError, match="Already checked in"):
        attendance.check_in(principal, now=fixed_now.replace(hour=11))

    attendance.check_in(principal, now=datetime(2026, 3, 3, 9, 0))


def test_check_out_requires_an_open_check_in(attendance, acme, fixed_now):
    principal = acme.employee.to_principal()

    with pytest.raises(ValidationError, match="No check-in"):
        attendance.check_out(principal, now=fixed_now)

    attendance.check_in(principal, now=fixed_now)
    attendance.check_out(principal, now=fixed_now.replace(hour=12))
    with pytest.raises(ValidationError, match="Already checked out"):
        attendance.check_out(principal, now=fixed_now.replace(hour=13))


def test_company_board_lists_only_own_tenant(world, attendance, acme, globex, fixed_now):
    attendance.check_in(acme.employee.to_principal(), now=fixed_now)
    attendance.check_in(globex.employee.to_principal(), now=fixed_now)

    rows = attendance.company_today(acme.admin.to_principal(), today=fixed_now.date())

    assert [(r.record.user_id, r.user_name) for r in rows] == [(acme.employee.id, acme.employee.full_name)]


def test_check_in_api_and_history(client, acme, login_as):
    login_as(acme.employee)

    first = client.post("/api/attendance/check-in", json={"location": "HQ"})
    second = client.post("/api/attendance/check-in", json={})
    history = client.get(f"/api/attendance/user/{acme.employee.id}")
    today = client.get(f"/api/attendance/today/{acme.employee.id}")

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.get_json() == {"message": "Already checked in for today"}
    assert [r["id"] for r in history.get_json()] == [first.get_json()["id"]]
    assert today.get_json()["status"] == "present"


def test_history_rejects_malformed_dates(client, acme, login_as):
    login_as(acme.employee)

    assert client.get(f"/api/attendance/user/{acme.employee.id}?start_date=yesterday").status_code == 400


def test_company_board_is_admin_only(client, acme, login_as):
    login_as(acme.employee)
    client.post("/api/attendance/check-in", json={})
    assert client.get("/api/attendance/company").status_code == 403

    client.post("/api/auth/logout")
    login_as(acme.admin)
    rows = client.get("/api/attendance/company").get_json()

    assert [r["user_name"] for r in rows] == [acme.employee.full_name]
