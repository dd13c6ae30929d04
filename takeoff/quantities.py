"""
Takeoff formulas shared across trades.

Every function is pure. A formula that would divide by zero or produce a
non-finite value returns None so the caller can omit the line item instead of
carrying NaN/Infinity into an estimate.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .units import cubic_feet_to_cubic_yards

TARGET_RISER_HEIGHT_IN = 7.5
MIN_STRINGERS = 3


def finite(value: Optional[float]) -> Optional[float]:
    """Pass a finite number through; map NaN/Infinity/None to None."""
    if value is None or not math.isfinite(value):
        return None
    return value


def safe_div(numerator: float, denominator: float) -> Optional[float]:
    if not denominator:
        return None
    return finite(numerator / denominator)


def ceil_div(numerator: float, denominator: float) -> Optional[int]:
    quotient = safe_div(numerator, denominator)
    return None if quotient is None else math.ceil(quotient)


# --- Area & volume ---

def rectangle_area(length: float, width: float) -> float:
    return length * width


def area_with_waste(area: float, waste_pct: Optional[float] = None) -> float:
    """area * (1 + waste_pct / 100). No waste factor when waste_pct is None."""
    if not waste_pct:
        return area
    return area * (1 + waste_pct / 100.0)


def prism_volume_cuyd(length_ft: float, width_ft: float, depth_ft: float) -> float:
    return cubic_feet_to_cubic_yards(length_ft * width_ft * depth_ft)


def sloped_excavation_volume_cuyd(length_ft: float, width_ft: float, depth_ft: float,
                                  slope_ratio: float) -> float:
    """
    Flat-bottom trapezoidal pit.

    Each side widens by depth * slope_ratio, so the top is
    (length + 2ds) x (width + 2ds). Volume = average of bottom and top area
    times depth, in cubic yards.
    """
    offset = depth_ft * slope_ratio
    top_length = length_ft + 2 * offset
    top_width = width_ft + 2 * offset
    bottom_area = length_ft * width_ft
    top_area = top_length * top_width
    return cubic_feet_to_cubic_yards((bottom_area + top_area) / 2 * depth_ft)


# --- Counts from spacing ---

def members_on_center(run_length_ft: float, spacing_in: float) -> Optional[int]:
    """Studs/joists at spacing_in on center over a run, plus the end member."""
    # ceil(run / (spacing / 12)), worked in inches so exact multiples stay exact
    count = ceil_div(run_length_ft * 12.0, spacing_in)
    return None if count is None else count + 1


def opening_members(rough_opening: bool) -> int:
    """Jack + king studs per opening: 4 with a rough opening, otherwise 2."""
    return 4 if rough_opening else 2


def boards_across(width_ft: float, board_width_in: float, gap_in: float) -> Optional[int]:
    """Rows of boards to cover a width, each board plus its gap."""
    return ceil_div(width_ft * 12.0, board_width_in + gap_in)


def units_per_area(area_sq_ft: float, unit_width_in: float, unit_height_in: float) -> Optional[int]:
    """Whole face units (blocks, pavers) to cover an area."""
    per_sq_ft = safe_div(144.0, unit_width_in * unit_height_in)
    if per_sq_ft is None:
        return None
    return math.ceil(area_sq_ft * per_sq_ft)


def courses(height_in: float, unit_height_in: float) -> Optional[int]:
    return ceil_div(height_in, unit_height_in)


def pitch_factor(pitch_per_12: float) -> float:
    return 1 + pitch_per_12 / 12.0


def rebar_grid_length(length: float, width: float, spacing_ft: float) -> Optional[float]:
    """Total bar length for a two-way grid at spacing_ft, with edge bars."""
    bars_along_length = ceil_div(width, spacing_ft)
    bars_along_width = ceil_div(length, spacing_ft)
    if bars_along_length is None or bars_along_width is None:
        return None
    return length * (bars_along_length + 1) + width * (bars_along_width + 1)


# --- Stairs ---

@dataclass(frozen=True)
class StairGeometry:
    num_risers: int
    actual_riser_height_in: float
    num_treads: int
    total_run_in: float
    stringer_length_ft: float
    num_stringers: int


def stair_geometry(total_rise_in: float, run_per_tread_in: float,
                   stair_width_in: float, stringer_spacing_in: float,
                   target_riser_in: float = TARGET_RISER_HEIGHT_IN) -> Optional[StairGeometry]:
    """
    Riser/tread layout for a straight run.

    num_risers = ceil(rise / 7.5); treads = risers - 1 (the deck is the top
    step); stringer length = hypotenuse of (total run, rise) in feet;
    stringers = max(3, ceil(width / spacing)).
    """
    num_risers = ceil_div(total_rise_in, target_riser_in)
    if not num_risers:
        return None
    actual = safe_div(total_rise_in, num_risers)
    stringer_count = ceil_div(stair_width_in, stringer_spacing_in)
    if actual is None or stringer_count is None:
        return None

    num_treads = num_risers - 1
    total_run = num_treads * run_per_tread_in
    stringer_length_ft = math.hypot(total_run, total_rise_in) / 12.0
    return StairGeometry(
        num_risers=num_risers,
        actual_riser_height_in=actual,
        num_treads=num_treads,
        total_run_in=total_run,
        stringer_length_ft=stringer_length_ft,
        num_stringers=max(MIN_STRINGERS, stringer_count),
    )
