"""
Material catalog tests.

Tests:
1-2. Every trade's material keys resolve in the default catalog
3-6. Supplier overrides (unit price, stock lengths, unknown keys, non-numeric values)
7-8. Override file fallback (missing file, bad JSON)
9.   Lookups that miss
"""

import json

import pytest

from takeoff.calculators.material_lookup import build_catalog, load_catalog
from takeoff.calculators.registry import TRADE_REGISTRY


# ============================================================
# Coverage
# ============================================================

@pytest.mark.parametrize("trade", sorted(TRADE_REGISTRY))
def test_every_trade_material_is_in_catalog(catalog, trade):
    missing = [key for key in TRADE_REGISTRY[trade].materials if key not in catalog]
    assert missing == []


def test_stock_and_unit_entries(catalog):
    decking = catalog.get("decking_5_4")
    assert decking.unit_price is None
    assert catalog.get_stock_prices("decking_5_4") == {12.0: 15.98, 16.0: 21.98, 20.0: 27.98}

    bag = catalog.get("concrete_bag_80lb")
    assert bag.stock_prices == {}
    assert bag.unit_price == 6.98

    assert catalog.get("gutter_vinyl_5").max_span_ft == 30


# ============================================================
# Overrides
# ============================================================

def test_unit_price_override():
    catalog = build_catalog({"concrete_bag_80lb": {"unit_price": 7.48}})
    assert catalog.get_unit_price("concrete_bag_80lb") == 7.48


def test_stock_price_override_with_string_lengths():
    catalog = build_catalog({"lumber_2x10": {"stock_prices": {"20": 39.98, "24": 52.0}}})
    prices = catalog.get_stock_prices("lumber_2x10")
    assert prices[20.0] == 39.98
    assert prices[24.0] == 52.0
    assert prices[12.0] == 24.98


def test_unknown_override_is_ignored():
    catalog = build_catalog({"unobtainium": {"unit_price": 1.0}, "tiedown": "cheap"})
    assert "unobtainium" not in catalog
    assert catalog.get_unit_price("tiedown") == 12.98


def test_non_numeric_override_values_are_skipped():
    catalog = build_catalog({
        "tiedown": {"unit_price": "cheap"},
        "lumber_2x10": {"stock_prices": {"20": "x", "twenty-four": 52.0, "16": 30.0}},
        "ready_mix": {"unit_price": None},
    })
    assert catalog.get_unit_price("tiedown") == 12.98
    assert catalog.get_unit_price("ready_mix") == 185.0
    assert catalog.get_stock_prices("lumber_2x10") == {12.0: 24.98, 16.0: 30.0, 20.0: 41.98}


def test_catalog_is_read_only(catalog):
    with pytest.raises(Exception):
        catalog.get("tiedown").unit_price = 0.0


# ============================================================
# Override file
# ============================================================

def test_load_catalog_from_file(tmp_path):
    path = tmp_path / "prices.json"
    path.write_text(json.dumps({"ready_mix": {"unit_price": 200.0}}))
    assert load_catalog(str(path)).get_unit_price("ready_mix") == 200.0


def test_missing_or_bad_file_falls_back_to_defaults(tmp_path):
    assert load_catalog(str(tmp_path / "nope.json")).get_unit_price("ready_mix") == 185.0

    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    assert load_catalog(str(bad)).get_unit_price("ready_mix") == 185.0

    listed = tmp_path / "list.json"
    listed.write_text("[1, 2]")
    assert load_catalog(str(listed)).get_unit_price("ready_mix") == 185.0


# ============================================================
# Misses
# ============================================================

def test_lookup_misses(catalog):
    assert catalog.get_unit_price("no_such_thing") == 0.0
    assert catalog.get_stock_prices("no_such_thing") == {}
    assert catalog.get("no_such_thing") is None
