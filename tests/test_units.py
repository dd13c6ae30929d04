"""
Unit conversion tests.

Tests:
1-4. Conversions
5-7. Sheet / package ceilings
8-9. Rejection of negative, non-finite and non-numeric input
"""

import math

import pytest

from takeoff.errors import InvalidDimension
from takeoff.units import (
    area_to_sheets,
    count_to_packages,
    cubic_feet_to_cubic_yards,
    depth_to_cubic_yards,
    feet_to_inches,
    inches_to_feet,
    square_inches_to_square_feet,
)


# ============================================================
# Conversions
# ============================================================

def test_feet_inches():
    assert feet_to_inches(2.5) == 30.0
    assert inches_to_feet(18) == 1.5


def test_cubic_feet_to_cubic_yards():
    assert cubic_feet_to_cubic_yards(54) == 2.0


def test_square_inches_to_square_feet():
    assert square_inches_to_square_feet(288) == 2.0


def test_depth_to_cubic_yards_is_area_times_depth_over_324():
    assert depth_to_cubic_yards(324, 1) == pytest.approx(1.0)
    assert depth_to_cubic_yards(110, 6) == pytest.approx(110 * 6 / 324)


# ============================================================
# Ceilings
# ============================================================

def test_area_to_sheets_rounds_up():
    assert area_to_sheets(80, 32) == 3
    assert area_to_sheets(64, 32) == 2
    assert area_to_sheets(0, 32) == 0


def test_area_to_sheets_zero_sheet_area():
    with pytest.raises(InvalidDimension):
        area_to_sheets(10, 0)


def test_count_to_packages():
    assert count_to_packages(1001, 1000) == 2
    assert count_to_packages(1000, 1000) == 1


# ============================================================
# Rejection
# ============================================================

@pytest.mark.parametrize("bad", [-1, float("nan"), float("inf"), -math.inf])
def test_rejects_negative_and_non_finite(bad):
    with pytest.raises(InvalidDimension):
        feet_to_inches(bad)
    with pytest.raises(InvalidDimension):
        area_to_sheets(bad, 32)


@pytest.mark.parametrize("bad", ["ten", None, True])
def test_rejects_non_numbers(bad):
    with pytest.raises(InvalidDimension):
        inches_to_feet(bad)
