"""
Validation gate tests.

Tests:
1-3.  Required fields, string coercion, unknown fields ignored
4-6.  Conditional fields (toggle off drops stale values, toggle on requires them)
7-9.  Type errors become missing, bad numbers raise InvalidDimension
10-11. Completion status
12-13. Soft bounds become warnings, never errors
"""

import math

import pytest

from takeoff.calculators import deck
from takeoff.errors import IncompleteInput, InvalidDimension
from takeoff.schemas import FieldKind, FieldSpec, WarningItem
from takeoff.validation import (
    clean_fields,
    get_completion_status,
    is_enabled,
    is_form_valid,
    missing_fields,
    soft_bound_warnings,
    soft_bounds_exceeded,
)

SPECS = [
    FieldSpec(name="length", unit="ft"),
    FieldSpec(name="width", unit="ft"),
    FieldSpec(name="count", integer=True, default=0),
    FieldSpec(name="spacing", choices=[12, 16], default=16),
    FieldSpec(name="style", kind=FieldKind.CHOICE, choices=["a", "b"], default="a"),
    FieldSpec(name="include_extra", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="extra_length", enabled_by="include_extra",
              soft_max=24, soft_max_message="inches maximum exceeded"),
    FieldSpec(name="b_only", enabled_by="style", enabled_when=["b"]),
]


# ============================================================
# Required fields & coercion
# ============================================================

def test_missing_required_fields():
    assert missing_fields(SPECS, {}) == ["length", "width"]
    assert missing_fields(SPECS, {"length": 10}) == ["width"]
    assert not is_form_valid(SPECS, {"length": 10})


def test_numeric_strings_are_coerced_and_defaults_filled():
    cleaned = clean_fields(SPECS, {"length": "20", "width": " 12.5 ", "count": "3"})
    assert cleaned["length"] == 20.0
    assert cleaned["width"] == 12.5
    assert cleaned["count"] == 3
    assert isinstance(cleaned["count"], int)
    assert cleaned["spacing"] == 16
    assert cleaned["style"] == "a"
    assert cleaned["include_extra"] is False


def test_unknown_fields_are_ignored():
    cleaned = clean_fields(SPECS, {"length": 1, "width": 1, "photo_url": "x.jpg"})
    assert "photo_url" not in cleaned


def test_blank_strings_count_as_absent():
    assert missing_fields(SPECS, {"length": "", "width": "   "}) == ["length", "width"]


# ============================================================
# Conditional fields
# ============================================================

def test_disabled_toggle_drops_stale_value():
    """A cantilever length left behind after unchecking never reaches derive."""
    cleaned = clean_fields(SPECS, {
        "length": 10, "width": 10,
        "include_extra": False, "extra_length": 30,
    })
    assert "extra_length" not in cleaned


def test_enabled_toggle_requires_its_fields():
    with pytest.raises(IncompleteInput) as exc:
        clean_fields(SPECS, {"length": 10, "width": 10, "include_extra": "yes"})
    assert exc.value.missing == ["extra_length"]


def test_choice_gated_field():
    assert missing_fields(SPECS, {"length": 1, "width": 1, "style": "b"}) == ["b_only"]
    assert missing_fields(SPECS, {"length": 1, "width": 1, "style": "a", "b_only": 3}) == []


def test_is_enabled_needs_exact_true():
    spec = FieldSpec(name="x", enabled_by="flag")
    assert is_enabled(spec, {"flag": True})
    assert not is_enabled(spec, {"flag": 1})
    assert not is_enabled(spec, {})


def test_deck_switches_between_dimensions_and_area():
    cleaned = clean_fields(deck.FIELDS, {"input_mode": "area", "area": 200, "length": 20})
    assert cleaned["area"] == 200
    assert "length" not in cleaned
    assert missing_fields(deck.FIELDS, {"input_mode": "dimensions"}) == ["length", "width"]


# ============================================================
# Type and range errors
# ============================================================

@pytest.mark.parametrize("bad", ["ten", True, [10], {"ft": 10}])
def test_mistyped_value_is_missing(bad):
    assert missing_fields(SPECS, {"length": bad, "width": 10}) == ["length"]


@pytest.mark.parametrize("fields", [
    {"include_extra": "maybe"},
    {"style": "c"},
    {"spacing": 13},
])
def test_bad_choice_or_boolean_is_missing(fields):
    base = {"length": 1, "width": 1}
    base.update(fields)
    assert missing_fields(SPECS, base) == list(fields)


@pytest.mark.parametrize("bad", [-1, "-3", math.nan, "inf"])
def test_bad_number_raises_invalid_dimension(bad):
    with pytest.raises(InvalidDimension):
        clean_fields(SPECS, {"length": bad, "width": 10})
    assert not is_form_valid(SPECS, {"length": bad, "width": 10})


def test_hard_range_and_integer():
    specs = [FieldSpec(name="pct", maximum=100), FieldSpec(name="n", integer=True)]
    with pytest.raises(InvalidDimension):
        clean_fields(specs, {"pct": 150, "n": 1})
    with pytest.raises(InvalidDimension):
        clean_fields(specs, {"pct": 10, "n": 1.5})
    assert clean_fields(specs, {"pct": 10, "n": 2.0}) == {"pct": 10.0, "n": 2}


# ============================================================
# Completion status
# ============================================================

def test_completion_status_reports_missing():
    status = get_completion_status(SPECS, {"length": 10})
    assert status == {"valid": False, "missing": ["width"], "invalid": None}
    assert get_completion_status(SPECS, {"length": 10, "width": 5})["valid"] is True


def test_completion_status_reports_invalid():
    status = get_completion_status(SPECS, {"length": -5, "width": 5})
    assert status["valid"] is False
    assert "length" in status["invalid"]


# ============================================================
# Soft bounds
# ============================================================

def test_soft_bound_becomes_warning():
    cleaned = clean_fields(SPECS, {"length": 1, "width": 1, "include_extra": True, "extra_length": 30})
    assert cleaned["extra_length"] == 30

    exceeded = soft_bounds_exceeded(SPECS, cleaned)
    assert len(exceeded) == 1
    assert exceeded[0].field == "extra_length"

    warnings = soft_bound_warnings(SPECS, cleaned)
    assert warnings == [WarningItem(
        label="WARNING", quantity=24, unit="inches maximum exceeded",
        message="inches maximum exceeded",
    )]


def test_value_at_soft_bound_is_quiet():
    cleaned = clean_fields(SPECS, {"length": 1, "width": 1, "include_extra": True, "extra_length": 24})
    assert soft_bound_warnings(SPECS, cleaned) == []
