"""
Stock-cut optimizer tests.

Tests:
1-3.  Single-run selection (20 ft run, nesting, long runs)
4-5.  No-undersupply sweep, with and without segments
6-8.  Tie-break determinism under every catalog order
9-11. Composite utilization band
12-14. Failure modes (no viable stock, bad run length)
"""

import itertools
import math

import pytest

from takeoff.errors import InvalidDimension, NoViableStock
from takeoff.stock_cut import StockCutOptimizer

DECK_PRICES = {12.0: 15.98, 16.0: 21.98, 20.0: 27.98}
TREX_BASIC = {12.0: 29.28, 16.0: 39.04, 20.0: 48.80}


# ============================================================
# Selection
# ============================================================

def test_twenty_foot_run_picks_one_twenty_foot_board():
    """One 20ft board ($27.98) beats two 12ft boards ($31.96)."""
    decision = StockCutOptimizer().choose(20, DECK_PRICES)
    assert decision.stock_length_ft == 20.0
    assert decision.pieces == 1
    assert decision.total_cost == pytest.approx(27.98)
    assert decision.waste_ft == 0.0


def test_short_run_nests_segments_per_board():
    """Five 6ft segments: 12ft boards hold 2 each, so 3 boards."""
    prices = {12.0: 10.0, 16.0: 14.0, 20.0: 18.0}
    decision = StockCutOptimizer().choose(6, prices, segments=5)
    assert decision.stock_length_ft == 12.0
    assert decision.pieces == 3
    assert decision.total_cost == pytest.approx(30.0)
    assert decision.waste_ft == pytest.approx(6.0)


def test_candidate_reports_reusable_offcuts():
    candidates = StockCutOptimizer().evaluate(5, {16.0: 20.0})
    assert len(candidates) == 1
    c = candidates[0]
    assert c.pieces_per_board == 3
    assert c.boards_needed == 1
    assert c.pieces == 1
    assert c.waste_ft == pytest.approx(11.0)
    assert c.reusable_pieces == 2


def test_long_run_splices_boards():
    decision = StockCutOptimizer().choose(33, DECK_PRICES)
    assert decision.pieces * decision.stock_length_ft >= 33


# ============================================================
# No undersupply
# ============================================================

RUNS = [0.5, 1, 3.7, 6, 11.9, 12, 12.1, 16, 19.99, 20, 20.01, 33, 47.5, 100]


@pytest.mark.parametrize("run", RUNS)
def test_never_undersupplies_single_run(run):
    optimizer = StockCutOptimizer()
    for c in optimizer.evaluate(run, DECK_PRICES):
        assert c.pieces * c.stock_length_ft >= run
    decision = optimizer.choose(run, DECK_PRICES)
    assert decision.pieces * decision.stock_length_ft >= run


@pytest.mark.parametrize("run", RUNS)
@pytest.mark.parametrize("segments", [2, 3, 7, 26])
def test_never_undersupplies_segments(run, segments):
    optimizer = StockCutOptimizer()
    for c in optimizer.evaluate(run, DECK_PRICES, segments=segments):
        # every segment is cut whole from boards or spliced from whole boards
        assert c.pieces * c.stock_length_ft >= run * segments
        assert c.waste_ft >= 0


# ============================================================
# Tie-break determinism
# ============================================================

def _every_order(prices: dict):
    for order in itertools.permutations(prices.items()):
        yield dict(order)


def test_equal_cost_prefers_less_waste_in_any_order():
    # 5ft run: both lengths need one board at $20, 10ft wastes 5, 12ft wastes 7
    prices = {12.0: 20.0, 10.0: 20.0}
    for ordering in _every_order(prices):
        assert StockCutOptimizer().choose(5, ordering).stock_length_ft == 10.0


def test_costs_within_epsilon_are_a_tie():
    # 12ft is $0.004 cheaper but wastes more
    prices = {10.0: 20.004, 12.0: 20.0, 16.0: 30.0}
    for ordering in _every_order(prices):
        decision = StockCutOptimizer().choose(5, ordering)
        assert decision.stock_length_ft == 10.0


def test_rank_is_independent_of_input_order():
    optimizer = StockCutOptimizer()
    prices = {8.0: 9.0, 10.0: 12.0, 12.0: 12.0, 16.0: 15.0, 20.0: 18.0}
    expected = None
    for ordering in _every_order(prices):
        ranked = [c.stock_length_ft for c in optimizer.rank(optimizer.evaluate(7, ordering))]
        if expected is None:
            expected = ranked
        assert ranked == expected


def test_larger_epsilon_widens_the_tie():
    prices = {10.0: 20.5, 12.0: 20.0}
    assert StockCutOptimizer(epsilon=0.01).choose(5, prices).stock_length_ft == 12.0
    assert StockCutOptimizer(epsilon=1.0).choose(5, prices).stock_length_ft == 10.0


# ============================================================
# Composite utilization band
# ============================================================

def test_band_overrides_cheapest_for_composite():
    """8ft run: 12ft is cheapest, but 16ft sits at 2.0x inside the band."""
    optimizer = StockCutOptimizer()
    plain = optimizer.choose(8, TREX_BASIC)
    assert plain.stock_length_ft == 12.0
    assert plain.utilization_override is False

    banded = optimizer.choose(8, TREX_BASIC, utilization_band=(1.8, 2.2))
    assert banded.stock_length_ft == 16.0
    assert banded.utilization_override is True


def test_band_without_candidates_keeps_cost_ranking():
    decision = StockCutOptimizer().choose(20, TREX_BASIC, utilization_band=(1.8, 2.2))
    assert decision.stock_length_ft == 20.0
    assert decision.utilization_override is False


def test_catalog_band_applies_to_composite_family_only(catalog):
    assert catalog.utilization_band("decking_trex_select") == (1.8, 2.2)
    assert catalog.utilization_band("decking_5_4") is None
    assert catalog.utilization_band("lumber_2x10") is None


# ============================================================
# Failure modes
# ============================================================

@pytest.mark.parametrize("prices", [{}, {12.0: 0.0, 16.0: -1.0}, {12.0: math.nan}])
def test_no_viable_stock(prices):
    with pytest.raises(NoViableStock):
        StockCutOptimizer().choose(10, prices)


@pytest.mark.parametrize("run", [0, -4, math.nan, math.inf, "12", True])
def test_invalid_run_length(run):
    with pytest.raises(InvalidDimension):
        StockCutOptimizer().choose(run, DECK_PRICES)


def test_invalid_segments():
    with pytest.raises(InvalidDimension):
        StockCutOptimizer().evaluate(10, DECK_PRICES, segments=0)
