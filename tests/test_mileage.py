"""Tests for :mod:`fieldforce.services.mileage`."""

from datetime import datetime
from types import SimpleNamespace

import pytest

from fieldforce.services.geo import distance_miles
from fieldforce.services.mileage import aggregate_mileage, format_money, total_distance_miles


START = datetime(2024, 1, 1)
END = datetime(2024, 1, 7)


def fix(lat: float, lng: float) -> SimpleNamespace:
    return SimpleNamespace(latitude=lat, longitude=lng)


P1 = fix(49.2827, -123.1207)
P2 = fix(49.2870, -123.1090)
P3 = fix(49.2765, -123.0954)


def test_no_fixes_is_zero() -> None:
    summary = aggregate_mileage([], START, END)

    assert summary.total_miles == 0
    assert format_money(summary.reimbursement) == "$0.00"


def test_single_fix_is_zero() -> None:
    summary = aggregate_mileage([P1], START, END)

    assert f"{summary.total_miles:.2f}" == "0.00"
    assert format_money(summary.reimbursement) == "$0.00"


def test_total_is_sum_of_consecutive_legs() -> None:
    """[P1, P2, P3] covers exactly [P1, P2] plus [P2, P3]."""

    whole = total_distance_miles([P1, P2, P3])

    assert whole == pytest.approx(total_distance_miles([P1, P2]) + total_distance_miles([P2, P3]))
    assert whole == pytest.approx(
        distance_miles((P1.latitude, P1.longitude), (P2.latitude, P2.longitude))
        + distance_miles((P2.latitude, P2.longitude), (P3.latitude, P3.longitude))
    )


def test_order_is_taken_as_given() -> None:
    """Fixes are not re-sorted, so a detour back and forth counts twice."""

    assert total_distance_miles([P1, P3, P1]) == pytest.approx(2 * total_distance_miles([P1, P3]))


def test_reimbursement_uses_rate() -> None:
    summary = aggregate_mileage([P1, P2, P3], START, END)

    assert summary.reimbursement == pytest.approx(summary.total_miles * 0.67)
    assert aggregate_mileage([P1, P2], START, END, rate_per_mile=1.0).reimbursement == pytest.approx(
        total_distance_miles([P1, P2])
    )


def test_period_is_rendered_from_bounds() -> None:
    assert aggregate_mileage([], START, END).period == "1/1/2024 to 1/7/2024"


def test_format_money() -> None:
    assert format_money(12.345) == "$12.35"
    assert format_money(0) == "$0.00"
