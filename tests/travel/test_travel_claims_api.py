from __future__ import annotations

import pytest

CLAIM = {"amount": "845.50", "description": "Train to Pune", "date": "2026-02-27", "category": "transport"}


def test_submit_claim(client, acme, login_as):
    login_as(acme.employee)

    resp = client.post("/api/travel-claims", json=CLAIM)

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["amount"] == 845.5
    assert body["status"] == "pending"
    assert body["date"] == "2026-02-27"
    assert [c["id"] for c in client.get(f"/api/travel-claims/user/{acme.employee.id}").get_json()] == [body["id"]]


@pytest.mark.parametrize(
    "override",
    [{"amount": 0}, {"amount": "lots"}, {"category": "fuel"}, {"description": ""}, {"date": None}],
)
def test_submit_validation(client, acme, login_as, override):
    login_as(acme.employee)

    assert client.post("/api/travel-claims", json={**CLAIM, **override}).status_code == 400


def test_decide_claim(world, client, acme, login_as):
    claim = world.add_claim(acme.employee)
    login_as(acme.admin)

    bogus = client.put(f"/api/travel-claims/{claim.id}/status", json={"status": "pending"})
    approved = client.put(f"/api/travel-claims/{claim.id}/status", json={"status": "approved", "remarks": "ok"})
    again = client.put(f"/api/travel-claims/{claim.id}/status", json={"status": "rejected"})

    assert bogus.status_code == 400
    assert approved.status_code == 200
    assert approved.get_json()["status"] == "approved"
    assert again.status_code == 400


def test_pending_claims_are_tenant_scoped(world, client, acme, globex, login_as):
    mine = world.add_claim(acme.colleague)
    world.add_claim(globex.colleague)
    login_as(acme.admin)

    rows = client.get("/api/travel-claims/pending").get_json()

    assert [r["id"] for r in rows] == [mine.id]
    assert rows[0]["user"]["id"] == acme.colleague.id


def test_cross_tenant_claim_is_not_found(world, client, acme, globex, login_as):
    foreign = world.add_claim(globex.employee)
    login_as(acme.admin)

    resp = client.put(f"/api/travel-claims/{foreign.id}/status", json={"status": "approved"})

    assert resp.status_code == 404
    assert world.claims.get_by_id(foreign.id).status.value == "pending"
