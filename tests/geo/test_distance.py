from __future__ import annotations

import math

import pytest

from employee_system.core.constants import EARTH_RADIUS_M
from employee_system.geo.distance import distance_meters, is_within_geofence

OFFICE = (17.6868, 83.2185)


def test_same_point_is_zero():
    assert distance_meters(*OFFICE, *OFFICE) == 0.0


def test_antipodal_points_are_half_circumference():
    assert distance_meters(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi * EARTH_RADIUS_M, rel=1e-9)
    assert distance_meters(90.0, 0.0, -90.0, 0.0) == pytest.approx(20_015_086.8, abs=1.0)


def test_distance_is_symmetric():
    a = (12.9716, 77.5946)
    b = (28.7041, 77.1025)
    assert distance_meters(*a, *b) == pytest.approx(distance_meters(*b, *a))


def test_latitude_offset_along_meridian():
    # 0.045 degrees of latitude on a 6,371 km sphere
    d = distance_meters(OFFICE[0], OFFICE[1], OFFICE[0] + 0.045, OFFICE[1])
    assert d == pytest.approx(5003.77, abs=0.01)


def test_out_of_range_coordinates_still_give_a_finite_distance():
    d = distance_meters(123.0, 400.0, -95.0, -200.0)
    assert math.isfinite(d)
    assert d >= 0


def test_geofence_boundary_is_inclusive():
    d = distance_meters(*OFFICE, OFFICE[0] + 0.0005, OFFICE[1] + 0.0005)

    assert is_within_geofence(d, d)
    assert not is_within_geofence(d + 1e-6, d)


@pytest.mark.parametrize(
    "distance,radius,inside",
    [(0.0, 100.0, True), (99.999, 100.0, True), (100.0, 100.0, True), (100.001, 100.0, False)],
)
def test_is_within_geofence(distance, radius, inside):
    assert is_within_geofence(distance, radius) is inside
