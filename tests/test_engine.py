"""
calculate() entry point and trade registry tests.

Tests:
1-3. Registry lookups
4-8. End-to-end flow (validation, warnings, one total, read-only input)
9-12. Hard errors abort before aggregation
"""

import pytest

from takeoff.calculators.material_lookup import build_catalog
from takeoff.calculators.registry import TRADE_REGISTRY, get_trade, has_trade, list_trades
from takeoff.engine import calculate
from takeoff.errors import IncompleteInput, InvalidDimension, NoViableStock, UnknownTrade
from takeoff.schemas import DimensionInput, TotalItem, WarningItem

ALL_TRADES = [
    "deck", "framing", "excavation", "concrete",
    "gutters", "retaining_wall", "pavers", "fencing",
    "drywall", "flooring", "tile", "paint",
    "siding", "veneer", "roofing", "foundation",
]


# ============================================================
# Registry
# ============================================================

def test_all_trades_registered():
    assert list_trades() == ALL_TRADES
    for trade in ALL_TRADES:
        assert has_trade(trade)
        config = get_trade(trade)
        assert config.name == trade
        assert config.fields
        assert callable(config.derive)


def test_unknown_trade():
    assert not has_trade("plumbing")
    with pytest.raises(UnknownTrade) as exc:
        get_trade("plumbing")
    assert "plumbing" in exc.value.message
    assert "deck" in exc.value.message


def test_field_names_unique_and_enablers_declared_first():
    for config in TRADE_REGISTRY.values():
        names = [spec.name for spec in config.fields]
        assert len(names) == len(set(names)), config.name
        for i, spec in enumerate(config.fields):
            if spec.enabled_by:
                assert spec.enabled_by in names[:i], (config.name, spec.name)


# ============================================================
# Flow
# ============================================================

def test_calculate_returns_one_total_last(catalog):
    summary = calculate(DimensionInput(trade="deck", fields={"length": "20", "width": "12"}), catalog)
    assert summary.trade == "deck"
    totals = [item for item in summary.items if isinstance(item, TotalItem)]
    assert len(totals) == 1
    assert summary.items[-1] is totals[0]
    assert totals[0].cost == pytest.approx(sum(i.cost for i in summary.priced_items))


def test_soft_bound_warning_does_not_block(catalog):
    summary = calculate(DimensionInput(trade="deck", fields={
        "length": 20, "width": 12,
        "include_cantilever": True, "cantilever_length": 30,
    }), catalog)
    warnings = summary.warnings
    assert len(warnings) == 1
    assert warnings[0].quantity == 24
    assert warnings[0].unit == "inches maximum cantilever exceeded"
    assert summary.total is not None


def test_same_input_same_output(catalog):
    form = DimensionInput(trade="framing", fields={"length": 10, "height": 8})
    assert calculate(form, catalog) == calculate(form, catalog)


def test_input_fields_are_a_read_only_copy(catalog):
    raw = {"length": 10, "height": 8}
    form = DimensionInput(trade="framing", fields=raw)
    with pytest.raises(TypeError):
        form.fields["length"] = 99
    raw["length"] = 99
    assert form.fields["length"] == 10
    assert form.model_dump()["fields"] == {"length": 10, "height": 8}
    assert calculate(form, catalog) == calculate(DimensionInput(trade="framing", fields={"length": 10, "height": 8}), catalog)


def test_default_catalog_used_when_none_given():
    summary = calculate(DimensionInput(trade="concrete", fields={"length": 10, "width": 10}))
    assert summary.total is not None


# ============================================================
# Hard errors
# ============================================================

def test_calculate_unknown_trade():
    with pytest.raises(UnknownTrade):
        calculate(DimensionInput(trade="plumbing", fields={}))


def test_calculate_incomplete_and_invalid(catalog):
    with pytest.raises(IncompleteInput) as exc:
        calculate(DimensionInput(trade="deck", fields={"length": 20}), catalog)
    assert exc.value.missing == ["width"]

    with pytest.raises(InvalidDimension):
        calculate(DimensionInput(trade="deck", fields={"length": 20, "width": -12}), catalog)


def test_zeroed_stock_prices_raise_no_viable_stock():
    catalog = build_catalog({"decking_5_4": {"stock_prices": {"12": 0, "16": 0, "20": 0}}})
    with pytest.raises(NoViableStock):
        calculate(DimensionInput(trade="deck", fields={"length": 20, "width": 12}), catalog)


def test_warning_items_never_priced(catalog):
    summary = calculate(DimensionInput(trade="deck", fields={
        "length": 20, "width": 12, "include_cantilever": "yes", "cantilever_length": 36,
    }), catalog)
    assert all(not isinstance(item, WarningItem) for item in summary.priced_items)
