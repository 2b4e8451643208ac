"""Tests for :mod:`fieldforce.services.geo`."""

import pytest

from fieldforce.services.geo import distance_miles


VANCOUVER = (49.2827, -123.1207)
SEATTLE = (47.6062, -122.3321)


def test_distance_to_same_point_is_zero() -> None:
    assert distance_miles(VANCOUVER, VANCOUVER) == 0


def test_distance_is_symmetric() -> None:
    assert distance_miles(VANCOUVER, SEATTLE) == pytest.approx(distance_miles(SEATTLE, VANCOUVER))


def test_vancouver_to_seattle_is_about_121_miles() -> None:
    """Great-circle distance, not road distance."""

    assert distance_miles(VANCOUVER, SEATTLE) == pytest.approx(121.3, abs=1.5)


def test_one_degree_of_latitude() -> None:
    # 6371 km * pi / 180 * 0.621371
    assert distance_miles((0.0, 0.0), (1.0, 0.0)) == pytest.approx(69.09, abs=0.01)


def test_out_of_range_coordinates_still_produce_a_number() -> None:
    assert distance_miles((200.0, 0.0), (0.0, 400.0)) >= 0
