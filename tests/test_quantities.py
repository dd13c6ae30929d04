"""
Takeoff formula tests.

Tests:
1-3. Area and volume (waste, plain and sloped excavation)
4-6. Stair geometry
7-9. Counts from spacing
10.  Division guards
"""

import pytest

from takeoff.quantities import (
    area_with_waste,
    boards_across,
    ceil_div,
    courses,
    members_on_center,
    pitch_factor,
    prism_volume_cuyd,
    rebar_grid_length,
    rectangle_area,
    safe_div,
    sloped_excavation_volume_cuyd,
    stair_geometry,
    units_per_area,
)


# ============================================================
# Area & volume
# ============================================================

def test_area_with_waste():
    area = rectangle_area(20, 12)
    assert area == 240
    assert area_with_waste(area, 10) == pytest.approx(264.0)
    assert area_with_waste(area, None) == 240
    assert area_with_waste(area, 0) == 240


def test_prism_volume():
    assert prism_volume_cuyd(10, 10, 4) == pytest.approx(400 / 27)


def test_sloped_excavation_volume():
    """10x10 bottom, 4ft deep, 1.5:1 sides: top is 22x22."""
    volume = sloped_excavation_volume_cuyd(10, 10, 4, 1.5)
    assert volume == pytest.approx((100 + 484) / 2 * 4 / 27)
    assert volume == pytest.approx(43.26, abs=0.01)


def test_zero_slope_matches_prism():
    assert sloped_excavation_volume_cuyd(12, 8, 3, 0) == pytest.approx(prism_volume_cuyd(12, 8, 3))


# ============================================================
# Stairs
# ============================================================

def test_stair_geometry_36_inch_rise():
    stairs = stair_geometry(36, 10, 36, 16)
    assert stairs.num_risers == 5
    assert stairs.actual_riser_height_in == pytest.approx(7.2)
    assert stairs.num_treads == 4
    assert stairs.total_run_in == 40
    assert stairs.stringer_length_ft == pytest.approx(4.4845, abs=1e-3)
    assert stairs.num_stringers == 3


def test_wide_stairs_add_stringers():
    assert stair_geometry(36, 10, 48, 12).num_stringers == 4


def test_zero_rise_has_no_stairs():
    assert stair_geometry(0, 10, 36, 16) is None
    assert stair_geometry(36, 10, 36, 0) is None


# ============================================================
# Counts from spacing
# ============================================================

def test_members_on_center():
    assert members_on_center(10, 16) == 9
    # 20ft at 16" o.c. is exactly 15 bays
    assert members_on_center(20, 16) == 16
    assert members_on_center(10, 0) is None


def test_boards_and_units():
    assert boards_across(12, 5.5, 0.125) == 26
    assert units_per_area(100, 12, 8) == 150
    assert units_per_area(100, 0, 8) is None
    assert courses(48, 8) == 6


def test_rebar_grid_and_pitch():
    assert rebar_grid_length(10, 10, 1) == 220
    assert pitch_factor(0) == 1
    assert pitch_factor(6) == pytest.approx(1.5)


# ============================================================
# Guards
# ============================================================

def test_division_by_zero_returns_none():
    assert safe_div(10, 0) is None
    assert ceil_div(10, 0) is None
    assert safe_div(10, 4) == 2.5
    assert ceil_div(10, 4) == 3
