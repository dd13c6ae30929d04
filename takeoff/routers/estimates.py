"""
Trade estimate API: thin transport over engine.calculate().

GET  /api/trades                     Registered trades with their form fields
POST /api/trades/{trade}/validate    Is the form complete? Which fields are missing?
POST /api/trades/{trade}/calculate   Run the takeoff, return line items + total
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..calculators.registry import TRADE_REGISTRY, get_trade
from ..engine import calculate
from ..errors import CalculationError, UnknownTrade
from ..schemas import DimensionInput
from ..validation import get_completion_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trades", tags=["trades"])


# --- Request schemas ---

class TradeForm(BaseModel):
    fields: dict = Field(default_factory=dict)  # {field_name: value, ...}


# --- Endpoints ---

@router.get("")
def list_trades():
    """Every registered trade with its field specs, in form order."""
    return [
        {
            "trade": config.name,
            "label": config.label,
            "fields": [spec.model_dump(mode="json") for spec in config.fields],
        }
        for config in TRADE_REGISTRY.values()
    ]


@router.post("/{trade}/validate")
def validate_form(trade: str, form: TradeForm):
    """Completion status for a trade form. Never raises for bad values."""
    try:
        config = get_trade(trade)
    except UnknownTrade as e:
        raise HTTPException(status_code=404, detail=e.message)
    return get_completion_status(config.fields, form.fields)


@router.post("/{trade}/calculate")
def calculate_estimate(trade: str, form: TradeForm):
    """
    Run the takeoff for a trade.

    404 for an unknown trade, 422 with {error, detail} for any other
    CalculationError.
    """
    try:
        summary = calculate(DimensionInput(trade=trade, fields=form.fields))
    except UnknownTrade as e:
        raise HTTPException(status_code=404, detail=e.message)
    except CalculationError as e:
        logger.warning("Calculation failed for %s: %s", trade, e.message)
        raise HTTPException(status_code=422, detail=e.to_dict())

    payload = summary.model_dump(mode="json")
    payload["estimate_lines"] = summary.to_estimate_lines()
    return payload
