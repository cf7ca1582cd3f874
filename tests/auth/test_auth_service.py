from __future__ import annotations

import pytest

from employee_system.core.enums import Role
from employee_system.core.exceptions import (
    InvalidCredentials,
    LocationRejected,
    LocationRequired,
    NotFound,
    ValidationError,
)
from employee_system.geo.distance import distance_meters
from employee_system.users.model import Principal

OFFICE_LAT, OFFICE_LON = 17.6868, 83.2185


@pytest.fixture
def auth(world):
    return world.container.auth_service


@pytest.fixture
def fenced(world, acme):
    """Employee whose login is restricted to 100 m around the office."""
    return world.users.update_user(
        acme.employee.id,
        {
            "enable_location_auth": True,
            "allowed_latitude": OFFICE_LAT,
            "allowed_longitude": OFFICE_LON,
            "allowed_radius": 100.0,
        },
    )


def test_wrong_password_and_unknown_email_fail_identically(auth, acme):
    with pytest.raises(InvalidCredentials) as wrong_password:
        auth.authenticate(acme.employee.email, "not-the-password")
    with pytest.raises(InvalidCredentials) as unknown_email:
        auth.authenticate("nobody@acme.com", "secret1")

    assert str(wrong_password.value) == str(unknown_email.value) == "Invalid credentials"
    assert wrong_password.value.status_code == unknown_email.value.status_code == 401


def test_inactive_account_is_rejected_as_invalid_credentials(world, auth, acme):
    world.users.update_user(acme.employee.id, {"is_active": False})

    with pytest.raises(InvalidCredentials):
        auth.authenticate(acme.employee.email, "secret1")


def test_email_is_matched_case_insensitively(auth, acme):
    principal = auth.authenticate("  EMPLOYEE@Acme.com ", "secret1")
    assert principal.id == acme.employee.id


def test_principal_never_carries_the_password_hash(auth, acme):
    principal = auth.authenticate(acme.employee.email, "secret1")

    assert isinstance(principal, Principal)
    assert not hasattr(principal, "password_hash")
    assert "password_hash" not in principal.to_dict()


def test_login_inside_fence_succeeds(auth, fenced):
    principal = auth.authenticate(fenced.email, "secret1", latitude=OFFICE_LAT, longitude=OFFICE_LON)
    assert principal.id == fenced.id


def test_login_five_km_away_is_rejected_with_distance(auth, fenced):
    with pytest.raises(LocationRejected) as exc:
        auth.authenticate(fenced.email, "secret1", latitude=OFFICE_LAT + 0.045, longitude=OFFICE_LON)

    err = exc.value
    assert err.status_code == 403
    assert err.distance == pytest.approx(5003.77, abs=0.01)
    assert err.radius == 100.0
    assert str(err) == (
        "Login not permitted from this location. "
        "You are 5004m away from your allowed location (radius: 100m)."
    )


def test_wide_radius_is_printed_in_full(world, auth, fenced):
    world.users.update_user(fenced.id, {"allowed_radius": 1_000_000})

    # ~2224 km north
    with pytest.raises(LocationRejected) as exc:
        auth.authenticate(fenced.email, "secret1", latitude=OFFICE_LAT + 20, longitude=OFFICE_LON)
    assert "(radius: 1000000m)" in str(exc.value)


def test_fractional_radius_keeps_its_digits():
    err = LocationRejected(distance=2_500_000.0, radius=1_234_567.5)
    assert str(err).endswith("You are 2500000m away from your allowed location (radius: 1234567.5m).")


@pytest.mark.parametrize("coords", [{}, {"latitude": OFFICE_LAT}, {"longitude": OFFICE_LON}, {"latitude": ""}])
def test_missing_coordinates_require_location(auth, fenced, coords):
    with pytest.raises(LocationRequired):
        auth.authenticate(fenced.email, "secret1", **coords)


def test_numeric_strings_are_accepted_as_coordinates(auth, fenced):
    principal = auth.authenticate(fenced.email, "secret1", latitude=str(OFFICE_LAT), longitude=str(OFFICE_LON))
    assert principal.id == fenced.id


def test_wrong_password_is_reported_before_location(auth, fenced):
    with pytest.raises(InvalidCredentials):
        auth.authenticate(fenced.email, "wrong", latitude=0.0, longitude=0.0)


def test_point_exactly_on_radius_is_allowed(world, auth, fenced):
    lat, lon = OFFICE_LAT + 0.0004, OFFICE_LON + 0.0004
    world.users.update_user(fenced.id, {"allowed_radius": distance_meters(lat, lon, OFFICE_LAT, OFFICE_LON)})

    assert auth.authenticate(fenced.email, "secret1", latitude=lat, longitude=lon).id == fenced.id


def test_radius_defaults_to_100_meters(world, auth, fenced):
    world.users.update_user(fenced.id, {"allowed_radius": None})

    # ~89 m north
    auth.authenticate(fenced.email, "secret1", latitude=OFFICE_LAT + 0.0008, longitude=OFFICE_LON)
    # ~111 m north
    with pytest.raises(LocationRejected) as exc:
        auth.authenticate(fenced.email, "secret1", latitude=OFFICE_LAT + 0.001, longitude=OFFICE_LON)
    assert "(radius: 100m)" in str(exc.value)


def test_disabled_fence_ignores_coordinates(world, auth, fenced):
    world.users.update_user(fenced.id, {"enable_location_auth": False})

    assert auth.authenticate(fenced.email, "secret1", latitude=-33.86, longitude=151.2).id == fenced.id
    assert auth.authenticate(fenced.email, "secret1").id == fenced.id


def test_enabled_fence_without_coordinates_is_not_enforced(world, auth, fenced):
    world.users.update_user(fenced.id, {"allowed_latitude": None})

    assert auth.authenticate(fenced.email, "secret1", latitude=-33.86, longitude=151.2).id == fenced.id


def test_latitude_zero_counts_as_a_configured_coordinate(world, auth, acme):
    user = world.users.update_user(
        acme.employee.id,
        {"enable_location_auth": True, "allowed_latitude": 0.0, "allowed_longitude": 0.0, "allowed_radius": 50.0},
    )

    with pytest.raises(LocationRejected):
        auth.authenticate(user.email, "secret1", latitude=1.0, longitude=1.0)


def test_login_creates_a_session_and_logout_destroys_it(auth, acme):
    token, principal = auth.login(acme.admin.email, "secret1")

    assert auth.current_principal(token) == principal
    auth.logout(token)
    assert auth.current_principal(token) is None


def test_logout_without_token_is_a_noop(auth):
    auth.logout(None)
    auth.logout("")


def test_ownership_hides_other_tenants_like_missing_users(auth, acme, globex):
    principal = acme.admin.to_principal()

    assert auth.verify_company_ownership(principal, acme.employee.id).id == acme.employee.id
    with pytest.raises(NotFound) as foreign:
        auth.verify_company_ownership(principal, globex.employee.id)
    with pytest.raises(NotFound) as missing:
        auth.verify_company_ownership(principal, "no-such-user")

    assert str(foreign.value) == str(missing.value)
    assert foreign.value.status_code == 404


def test_signup_creates_company_admin_and_session(world, auth):
    token, principal, company = auth.signup(
        company_name="Initech", full_name="Bill L", email="Bill@Initech.com", password="tps-report"
    )

    assert principal.role == Role.ADMIN
    assert principal.company_id == company.id
    assert principal.email == "bill@initech.com"
    assert principal.position == "Company Admin"
    assert auth.current_principal(token) == principal


def test_signup_rejects_duplicate_company_email(auth):
    auth.signup(company_name="Initech", full_name="Bill L", email="bill@initech.com", password="tps-report")

    with pytest.raises(ValidationError) as exc:
        auth.signup(company_name="Initech 2", full_name="Peter G", email="bill@initech.com", password="tps-report")
    assert str(exc.value) == "Company with this email already exists"


@pytest.mark.parametrize(
    "field,value",
    [("company_name", ""), ("full_name", "  "), ("email", None), ("password", "short")],
)
def test_signup_validates_input(auth, field, value):
    payload = {"company_name": "Initech", "full_name": "Bill L", "email": "bill@initech.com", "password": "tps-report"}
    payload[field] = value

    with pytest.raises(ValidationError):
        auth.signup(**payload)
