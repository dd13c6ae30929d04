"""
Stock-cut optimizer: picks the stock length that supplies a run at least cost.

For each stock length L and required run R:
    pieces_per_board = floor(L / R)
    boards_needed    = ceil(R / L)
    waste            = boards_needed * L - R
    reusable_pieces  = floor(waste / R)
    effective boards = ceil(boards_needed / max(pieces_per_board, 1))
    effective cost   = effective boards * price[L]

Candidates are ranked by effective cost. Costs within epsilon of each other
are a tie, broken by smaller waste, then shorter stock. Families with a
utilization band (composite decking) prefer the lowest-waste candidate whose
L / R falls inside the band.

`segments` extends this to N pieces of length R (e.g. every deck board across
a width): short runs nest floor(L / R) to a board, long runs need
ceil(R / L) boards each. With segments == 1 the formulas above are exact.
"""

import logging
import math
from typing import Dict, List, Optional, Tuple

from .config import settings
from .errors import InvalidDimension, NoViableStock
from .schemas import StockCandidate, StockCutDecision

logger = logging.getLogger(__name__)


class StockCutOptimizer:

    def __init__(self, epsilon: Optional[float] = None):
        self.epsilon = settings.TAKEOFF_TIE_EPSILON if epsilon is None else epsilon

    def evaluate(self, run_length_ft: float, stock_prices: Dict[float, float],
                 segments: int = 1) -> List[StockCandidate]:
        """Evaluate every stock length with a positive price. Unordered."""
        run = self._check_run(run_length_ft)
        if segments < 1:
            raise InvalidDimension(f"segments must be at least 1, got {segments}")

        candidates = []
        for length, price in (stock_prices or {}).items():
            length = float(length)
            if not (math.isfinite(length) and length > 0):
                continue
            if price is None or not math.isfinite(price) or price <= 0:
                continue

            pieces_per_board = math.floor(length / run)
            boards_needed = math.ceil(run / length)
            if segments == 1:
                pieces = math.ceil(boards_needed / max(pieces_per_board, 1))
            elif pieces_per_board >= 1:
                pieces = math.ceil(segments / pieces_per_board)
            else:
                pieces = segments * boards_needed

            total_length = pieces * length
            waste = max(total_length - run * segments, 0.0)
            candidates.append(StockCandidate(
                stock_length_ft=length,
                unit_price=price,
                pieces_per_board=pieces_per_board,
                boards_needed=boards_needed,
                pieces=pieces,
                total_length_ft=total_length,
                waste_ft=waste,
                reusable_pieces=math.floor(waste / run),
                effective_cost=pieces * price,
            ))
        return candidates

    def rank(self, candidates: List[StockCandidate]) -> List[StockCandidate]:
        """
        Cheapest first. A run of candidates whose costs sit within epsilon of
        the cheapest in that run forms one tier, ordered by waste then length.
        Input order never affects the result.
        """
        by_cost = sorted(candidates, key=lambda c: (c.effective_cost, c.waste_ft, c.stock_length_ft))
        ranked = []
        i = 0
        while i < len(by_cost):
            floor_cost = by_cost[i].effective_cost
            tier = []
            while i < len(by_cost) and by_cost[i].effective_cost - floor_cost < self.epsilon:
                tier.append(by_cost[i])
                i += 1
            tier.sort(key=lambda c: (c.waste_ft, c.stock_length_ft))
            ranked.extend(tier)
        return ranked

    def choose(self, run_length_ft: float, stock_prices: Dict[float, float],
               segments: int = 1,
               utilization_band: Optional[Tuple[float, float]] = None,
               material_key: str = "") -> StockCutDecision:
        """
        Returns the StockCutDecision for a run.

        Raises NoViableStock when no stock length has a positive price.
        """
        candidates = self.evaluate(run_length_ft, stock_prices, segments)
        if not candidates:
            raise NoViableStock(
                f"No stock lengths with a positive price for '{material_key or 'material'}'"
            )

        ranked = self.rank(candidates)
        chosen = ranked[0]
        override = False

        if utilization_band is not None:
            low, high = utilization_band
            in_band = [
                c for c in candidates
                if low <= c.stock_length_ft / run_length_ft <= high
            ]
            if in_band:
                banded = min(in_band, key=lambda c: (c.waste_ft, c.effective_cost, c.stock_length_ft))
                override = banded is not chosen
                chosen = banded

        decision = StockCutDecision(
            material_key=material_key,
            run_length_ft=run_length_ft,
            segments=segments,
            stock_length_ft=chosen.stock_length_ft,
            pieces=chosen.pieces,
            unit_price=chosen.unit_price,
            total_cost=chosen.effective_cost,
            waste_ft=chosen.waste_ft,
            reusable_pieces=chosen.reusable_pieces,
            utilization_override=override,
        )
        logger.debug(
            "Stock cut %s: run %.2f ft x %d -> %d x %g ft ($%.2f, waste %.2f ft)",
            material_key, run_length_ft, segments, decision.pieces,
            decision.stock_length_ft, decision.total_cost, decision.waste_ft,
        )
        return decision

    @staticmethod
    def _check_run(run_length_ft: float) -> float:
        if isinstance(run_length_ft, bool) or not isinstance(run_length_ft, (int, float)):
            raise InvalidDimension(f"run length must be a number, got {run_length_ft!r}")
        if not math.isfinite(run_length_ft) or run_length_ft <= 0:
            raise InvalidDimension(f"run length must be a positive, finite number, got {run_length_ft!r}")
        return float(run_length_ft)
