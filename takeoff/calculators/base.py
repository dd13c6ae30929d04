"""
Shared helpers handed to every trade's derive function.

Trades are plain functions, not subclasses: each one receives the cleaned
fields and a TakeoffContext, and returns a list of line items (None entries
are allowed and skipped by the aggregator).
"""

import logging
from typing import Dict, Optional

from ..pricing_engine import LineItemPricer
from ..schemas import PricedItem, QuantityItem, StockCutDecision
from ..stock_cut import StockCutOptimizer
from .material_lookup import MaterialCatalog, default_catalog

logger = logging.getLogger(__name__)


class TakeoffContext:
    """Catalog + optimizer + pricer for one calculation."""

    def __init__(self, catalog: Optional[MaterialCatalog] = None,
                 optimizer: Optional[StockCutOptimizer] = None,
                 pricer: Optional[LineItemPricer] = None):
        self.catalog = catalog or default_catalog()
        self.optimizer = optimizer or StockCutOptimizer()
        self.pricer = pricer or LineItemPricer()

    # --- Catalog ---

    def unit_price(self, material_key: str) -> float:
        return self.catalog.get_unit_price(material_key)

    def name(self, material_key: str, default: str = "") -> str:
        entry = self.catalog.get(material_key)
        return entry.name if entry else default

    def attributes(self, material_key: str) -> Dict[str, float]:
        entry = self.catalog.get(material_key)
        return dict(entry.attributes) if entry else {}

    def max_span(self, material_key: str, default: float) -> float:
        entry = self.catalog.get(material_key)
        if entry is None or not entry.max_span_ft:
            return default
        return entry.max_span_ft

    # --- Stock cut ---

    def choose_stock(self, material_key: str, run_length_ft: float,
                     segments: int = 1) -> StockCutDecision:
        """Optimizer decision using the catalog's lengths and family band."""
        return self.optimizer.choose(
            run_length_ft,
            self.catalog.get_stock_prices(material_key),
            segments=segments,
            utilization_band=self.catalog.utilization_band(material_key),
            material_key=material_key,
        )

    def stock(self, label: str, material_key: str, run_length_ft: float,
              segments: int = 1, unit: Optional[str] = None) -> Optional[PricedItem]:
        """
        Price whole stock pieces for segments x run_length_ft.

        A zero run needs no stock, so no item. label and unit may contain
        '{length}', which is filled with the chosen stock length.
        """
        if not run_length_ft or not segments:
            return None
        decision = self.choose_stock(material_key, run_length_ft, segments)
        length = f"{decision.stock_length_ft:g}"
        return self.pricer.price_stock(
            label.format(length=length),
            decision,
            unit=unit.format(length=length) if unit else None,
        )

    # --- Items ---

    def price(self, label: str, quantity: Optional[float], unit: str,
              material_key: str) -> Optional[PricedItem]:
        """quantity x the catalog unit price of material_key."""
        return self.pricer.price(label, quantity, unit, self.unit_price(material_key))

    def price_at(self, label: str, quantity: Optional[float], unit: str,
                 unit_price: float) -> Optional[PricedItem]:
        return self.pricer.price(label, quantity, unit, unit_price)

    def measure(self, label: str, quantity: Optional[float], unit: str) -> Optional[QuantityItem]:
        return self.pricer.measure(label, quantity, unit)
