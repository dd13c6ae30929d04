"""
Line item pricing and estimate aggregation.

Pure math: quantity × unit price, then a sum over priced items.

Numeric policy: quantities are rounded to 2 decimals when an item is built.
Cost is computed from the unrounded quantity and then rounded to cents once,
when the item is built. The total is the sum of those cent values, so the
serialized items always add up to the serialized total.
"""

import logging
import math
from typing import Iterable, List, Optional

from .schemas import (
    EstimateSummary,
    PricedItem,
    QuantityItem,
    StockCutDecision,
    TotalItem,
    WarningItem,
)

logger = logging.getLogger(__name__)

TOTAL_LABEL = "Total Estimated Cost"


def _is_finite(*values: Optional[float]) -> bool:
    return all(v is not None and math.isfinite(v) for v in values)


class LineItemPricer:
    """Builds line items. Returns None for anything non-finite."""

    def price(self, label: str, quantity: Optional[float], unit: str,
              unit_price: float) -> Optional[PricedItem]:
        """quantity × unit_price as a PricedItem."""
        if not _is_finite(quantity, unit_price):
            logger.debug("Omitting '%s': non-finite quantity or price", label)
            return None
        cost = round(quantity * unit_price, 2)
        return PricedItem(
            label=label,
            quantity=round(quantity, 2),
            unit=unit,
            cost=cost,
            unit_price=unit_price,
        )

    def price_cost(self, label: str, quantity: Optional[float], unit: str,
                   cost: Optional[float]) -> Optional[PricedItem]:
        """An item whose cost was computed upstream (a lump sum, a fee)."""
        if not _is_finite(quantity, cost):
            logger.debug("Omitting '%s': non-finite quantity or cost", label)
            return None
        unit_price = cost / quantity if quantity else cost
        return PricedItem(
            label=label,
            quantity=round(quantity, 2),
            unit=unit,
            cost=cost,
            unit_price=unit_price,
        )

    def price_stock(self, label: str, decision: StockCutDecision,
                    unit: Optional[str] = None) -> PricedItem:
        """Pieces of the chosen stock length at that length's price."""
        return PricedItem(
            label=label,
            quantity=decision.pieces,
            unit=unit or f"{decision.stock_length_ft:g}ft boards",
            cost=decision.total_cost,
            unit_price=decision.unit_price,
        )

    def measure(self, label: str, quantity: Optional[float], unit: str) -> Optional[QuantityItem]:
        """An informational quantity with no cost."""
        if not _is_finite(quantity):
            logger.debug("Omitting '%s': non-finite quantity", label)
            return None
        return QuantityItem(label=label, quantity=round(quantity, 2), unit=unit)

    def warning(self, label: str, quantity: float, message: str) -> WarningItem:
        return WarningItem(label=label, quantity=quantity, unit=message, message=message)


class EstimateAggregator:
    """
    Collects line items and appends one synthesized total.

    Only PricedItem costs are summed. Any TotalItem already present is a
    sub-calculation subtotal: it is excluded from the sum and dropped, so the
    output ends in exactly one total. Warnings and quantities carry no cost.
    """

    def __init__(self, total_label: str = TOTAL_LABEL):
        self.total_label = total_label

    def subtotal(self, items: Iterable) -> float:
        return sum(item.cost for item in items if isinstance(item, PricedItem))

    def aggregate(self, trade: str, items: Iterable) -> EstimateSummary:
        kept: List = []
        dropped = 0
        for item in items:
            if item is None:
                continue
            if isinstance(item, TotalItem):
                dropped += 1
                continue
            kept.append(item)
        if dropped:
            logger.debug("Dropped %d pre-computed subtotal item(s) from %s estimate", dropped, trade)

        if any(isinstance(item, PricedItem) for item in kept):
            total = round(self.subtotal(kept), 2)
            kept.append(TotalItem(
                label=self.total_label,
                quantity=total,
                cost=total,
            ))
        return EstimateSummary(trade=trade, items=kept)
