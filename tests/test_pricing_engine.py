"""
Pricing and aggregation tests.

Tests:
1-3. LineItemPricer math, cent rounding, non-finite omission
4-8. EstimateAggregator totals (one total, warnings excluded, subtotals dropped)
9-12. Serialization (rounded costs, items add up to total, tagged union, estimate lines)
"""

import math

import pytest
from pydantic import TypeAdapter

from takeoff.pricing_engine import TOTAL_LABEL, EstimateAggregator, LineItemPricer
from takeoff.schemas import (
    EstimateSummary,
    LineItem,
    PricedItem,
    QuantityItem,
    StockCutDecision,
    TotalItem,
    WarningItem,
)

pricer = LineItemPricer()
aggregator = EstimateAggregator()


# ============================================================
# LineItemPricer
# ============================================================

def test_price_is_quantity_times_unit_price():
    item = pricer.price("Bags of Concrete", 50, "80lb bags", 6.98)
    assert isinstance(item, PricedItem)
    assert item.cost == pytest.approx(349.0)
    assert item.unit_price == 6.98


def test_quantity_and_cost_rounded_when_built():
    item = pricer.price("Gravel", 1.23456, "cubic yards", 45.0)
    assert item.quantity == 1.23
    # cost comes from the unrounded quantity: 55.5552, not 1.23 * 45
    assert item.cost == 55.56


@pytest.mark.parametrize("quantity,price", [(math.nan, 1.0), (1.0, math.inf), (None, 1.0)])
def test_non_finite_values_are_omitted(quantity, price):
    assert pricer.price("x", quantity, "ea", price) is None


@pytest.mark.parametrize("quantity", [math.nan, math.inf, None])
def test_non_finite_measure_is_omitted(quantity):
    assert pricer.measure("x", quantity, "ea") is None


def test_price_stock_uses_decision():
    decision = StockCutDecision(
        material_key="rebar_flatwork", run_length_ft=220, stock_length_ft=20.0,
        pieces=11, unit_price=8.98, total_cost=98.78, waste_ft=0.0, reusable_pieces=0,
    )
    item = pricer.price_stock("Rebar", decision)
    assert item.quantity == 11
    assert item.unit == "20ft boards"
    assert item.cost == pytest.approx(98.78)


def test_price_cost_lump_sum():
    item = pricer.price_cost("Total Haul-off Cost", 1, "lump sum", 250.0)
    assert item.cost == 250.0
    assert item.unit_price == 250.0


# ============================================================
# EstimateAggregator
# ============================================================

def _items():
    return [
        pricer.measure("Total Deck Area", 240, "square feet"),
        pricer.price("Joist Hangers", 16, "pieces", 1.98),
        pricer.price("Deck Screw Boxes", 2, "boxes", 39.98),
        pricer.warning("WARNING", 24, "inches maximum cantilever exceeded"),
    ]


def test_exactly_one_total_at_the_end():
    summary = aggregator.aggregate("deck", _items())
    totals = [item for item in summary.items if isinstance(item, TotalItem)]
    assert len(totals) == 1
    assert summary.items[-1] is summary.total
    assert summary.total.label == TOTAL_LABEL
    assert summary.total.cost == pytest.approx(16 * 1.98 + 2 * 39.98)


def test_warnings_and_quantities_do_not_contribute():
    summary = aggregator.aggregate("deck", _items())
    assert summary.total.cost == pytest.approx(sum(i.cost for i in summary.priced_items))
    assert len(summary.warnings) == 1


def test_incoming_subtotals_are_dropped():
    items = _items() + [TotalItem(label="Subtotal", cost=9999.0)]
    summary = aggregator.aggregate("deck", items)
    assert all(item.label != "Subtotal" for item in summary.items)
    assert summary.total.cost == pytest.approx(16 * 1.98 + 2 * 39.98)


def test_reaggregation_is_idempotent():
    once = aggregator.aggregate("deck", _items())
    twice = aggregator.aggregate("deck", once.items)
    assert twice == once


def test_no_total_without_priced_items():
    summary = aggregator.aggregate("excavation", [
        pricer.measure("Base Excavation Volume", 14.8, "cubic yards"),
        None,
    ])
    assert summary.total is None
    assert len(summary.items) == 1


# ============================================================
# Serialization
# ============================================================

def test_cost_rounded_on_dump():
    summary = aggregator.aggregate("x", [pricer.price("a", 3, "ea", 0.3333)])
    dumped = summary.model_dump(mode="json")
    assert dumped["items"][0]["cost"] == 1.0
    assert dumped["items"][-1]["kind"] == "total"
    assert dumped["items"][-1]["cost"] == 1.0


def test_line_items_parse_by_kind():
    adapter = TypeAdapter(LineItem)
    assert isinstance(adapter.validate_python({"kind": "warning", "label": "W", "message": "m"}), WarningItem)
    assert isinstance(adapter.validate_python({"kind": "quantity", "label": "Area", "quantity": 10}), QuantityItem)
    assert isinstance(adapter.validate_python({"kind": "priced", "label": "P", "cost": 2}), PricedItem)


def test_summary_round_trips_through_json():
    summary = aggregator.aggregate("deck", _items())
    parsed = EstimateSummary.model_validate_json(summary.model_dump_json())
    assert [type(i) for i in parsed.items] == [type(i) for i in summary.items]


def test_estimate_lines_from_priced_items():
    summary = aggregator.aggregate("deck", _items())
    lines = summary.to_estimate_lines()
    assert len(lines) == 2
    assert lines[0] == {
        "description": "Joist Hangers - 16 pieces",
        "quantity": 16,
        "unit": "pieces",
        "unit_price": 1.98,
        "total_price": 31.68,
        "type": "material",
    }


def test_serialized_items_add_up_to_serialized_total():
    # each cost rounds on its own: 3.7407 -> 3.74 and 1.005 -> 1.0
    summary = aggregator.aggregate("excavation", [
        pricer.price("Removal Cost", 100 / 27, "cubic yards", 1.01),
        pricer.price_cost("Total Haul-off Cost", 1, "lump sum", 1.005),
    ])
    dumped = summary.model_dump(mode="json")
    costs = [item["cost"] for item in dumped["items"] if item["kind"] == "priced"]
    assert costs == [3.74, 1.0]
    assert dumped["items"][-1]["cost"] == 4.74
    assert round(sum(costs), 2) == dumped["items"][-1]["cost"]


def test_reaggregating_parsed_output_keeps_total():
    summary = aggregator.aggregate("x", [
        pricer.price("a", 3, "ea", 0.3333),
        pricer.price("b", 7, "ea", 0.1234),
        pricer.price("c", 1, "ea", 2.005),
    ])
    parsed = EstimateSummary.model_validate(summary.model_dump(mode="json"))
    again = aggregator.aggregate("x", parsed.items)
    assert again.total.cost == summary.total.cost
    assert again.model_dump(mode="json") == summary.model_dump(mode="json")
