"""
Unit conversions shared by every trade.

All functions reject non-finite or negative input with InvalidDimension.
"""

import math

from .errors import InvalidDimension

INCHES_PER_FOOT = 12.0
SQ_INCHES_PER_SQ_FOOT = 144.0
CU_FEET_PER_CU_YARD = 27.0


def _check(value: float, name: str = "value") -> float:
    if isinstance(value, bool):
        raise InvalidDimension(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidDimension(f"{name} must be a number, got {value!r}")
    if not math.isfinite(number) or number < 0:
        raise InvalidDimension(f"{name} must be a finite, non-negative number, got {value!r}")
    return number


def feet_to_inches(feet: float) -> float:
    return _check(feet, "feet") * INCHES_PER_FOOT


def inches_to_feet(inches: float) -> float:
    return _check(inches, "inches") / INCHES_PER_FOOT


def cubic_feet_to_cubic_yards(cubic_feet: float) -> float:
    return _check(cubic_feet, "cubic_feet") / CU_FEET_PER_CU_YARD


def square_inches_to_square_feet(square_inches: float) -> float:
    return _check(square_inches, "square_inches") / SQ_INCHES_PER_SQ_FOOT


def depth_to_cubic_yards(area_sq_ft: float, depth_in: float) -> float:
    """Volume of a layer `depth_in` inches thick over `area_sq_ft` (÷ 324)."""
    area = _check(area_sq_ft, "area_sq_ft")
    depth = _check(depth_in, "depth_in")
    return area * inches_to_feet(depth) / CU_FEET_PER_CU_YARD


def area_to_sheets(area: float, sheet_area: float) -> int:
    """Whole sheets needed to cover an area. Always rounds up."""
    area = _check(area, "area")
    sheet_area = _check(sheet_area, "sheet_area")
    if sheet_area == 0:
        raise InvalidDimension("sheet_area must be greater than zero")
    return math.ceil(area / sheet_area)


def count_to_packages(count: float, per_package: float) -> int:
    """Whole boxes/bags/rolls needed for a loose count. Always rounds up."""
    return area_to_sheets(count, per_package)
