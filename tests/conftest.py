from __future__ import annotations

import os

import pytest

os.environ.setdefault("APP_ENV", "testing")

from employee_system.main import create_app  # noqa: E402

from fakes import NOW, Clock, World, add_tenant  # noqa: E402


@pytest.fixture
def fixed_now():
    return NOW


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def world(clock):
    return World(clock=clock)


@pytest.fixture
def acme(world):
    return add_tenant(world, "Acme")


@pytest.fixture
def globex(world):
    return add_tenant(world, "Globex")


@pytest.fixture
def app(world):
    app = create_app(container=world.container)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    """Log the shared client in as `user` (password "secret1")."""

    def _login(user, **coords):
        resp = client.post("/api/auth/login", json={"email": user.email, "password": "secret1", **coords})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
