"""
calculate(): the one entry point collaborators call.

DimensionInput -> ValidationGate -> trade derive -> soft-bound warnings ->
EstimateAggregator -> EstimateSummary.

Every hard error is raised before aggregation, so a caller gets either a
complete summary or a CalculationError, never a partial estimate.
"""

import logging
from typing import Optional

from .calculators.base import TakeoffContext
from .calculators.material_lookup import MaterialCatalog
from .calculators.registry import get_trade
from .pricing_engine import EstimateAggregator
from .schemas import DimensionInput, EstimateSummary
from .validation import clean_fields, soft_bound_warnings

logger = logging.getLogger(__name__)

_aggregator = EstimateAggregator()


def calculate(input: DimensionInput, catalog: Optional[MaterialCatalog] = None) -> EstimateSummary:
    """
    Run one takeoff.

    Raises UnknownTrade, IncompleteInput, InvalidDimension or NoViableStock.
    """
    config = get_trade(input.trade)
    fields = clean_fields(config.fields, input.fields)

    ctx = TakeoffContext(catalog)
    items = list(config.derive(fields, ctx))
    items.extend(soft_bound_warnings(config.fields, fields, ctx.pricer))

    summary = _aggregator.aggregate(config.name, items)
    total = summary.total
    logger.info(
        "Calculated %s estimate: %d items, total $%.2f",
        config.name, len(summary.items), total.cost if total else 0.0,
    )
    return summary
