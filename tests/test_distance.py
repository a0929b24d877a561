"""Tests for haversine distance and coordinate parsing."""

from __future__ import annotations

import math
from decimal import Decimal

import pytest

from healthref.services.distance import EARTH_RADIUS_KM, haversine_km, parse_coordinate


@pytest.mark.parametrize(
    "lat,lon",
    [(0.0, 0.0), (12.97, 77.59), (-33.87, 151.21), (89.9, -179.9)],
)
def test_distance_to_self_is_zero(lat, lon):
    assert haversine_km(lat, lon, lat, lon) == pytest.approx(0.0, abs=1e-9)


def test_distance_is_symmetric():
    a = (12.97, 77.59)
    b = (28.61, 77.21)
    assert haversine_km(*a, *b) == pytest.approx(haversine_km(*b, *a))


def test_one_degree_of_latitude():
    expected = EARTH_RADIUS_KM * math.pi / 180
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected)


def test_antipodal_points_are_half_circumference():
    assert haversine_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi * EARTH_RADIUS_KM)


def test_known_city_pair():
    # Bengaluru -> Chennai, roughly 290 km as the crow flies
    assert 280 < haversine_km(12.9716, 77.5946, 13.0827, 80.2707) < 300


def test_nan_propagates():
    assert math.isnan(haversine_km(float("nan"), 0.0, 1.0, 1.0))


@pytest.mark.parametrize(
    "value,expected",
    [
        ("12.97", 12.97),
        ("  77.59 ", 77.59),
        ("-8", -8.0),
        (13, 13.0),
        (13.5, 13.5),
        (Decimal("21.25"), 21.25),
    ],
)
def test_parse_coordinate_valid(value, expected):
    assert parse_coordinate(value) == pytest.approx(expected)


@pytest.mark.parametrize(
    "value",
    [None, "", "   ", "abc", "12.9N", "nan", "inf", float("nan"), True, object()],
)
def test_parse_coordinate_invalid(value):
    assert parse_coordinate(value) is None
