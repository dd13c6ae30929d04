"""
Trade registry: maps trade names to their TradeConfig.

A TradeConfig is data, not a subclass: the form fields, the derive strategy
that turns cleaned fields into line items, and the catalog keys it prices.
"""

from dataclasses import dataclass
from typing import Callable, List, Tuple

from ..errors import UnknownTrade
from ..schemas import FieldSpec
from .base import TakeoffContext
from . import (
    concrete,
    deck,
    drywall,
    excavation,
    fencing,
    flooring,
    foundation,
    framing,
    gutters,
    paint,
    pavers,
    retaining_wall,
    roofing,
    siding,
    tile,
    veneer,
)


@dataclass(frozen=True)
class TradeConfig:
    name: str
    label: str
    fields: Tuple[FieldSpec, ...]
    derive: Callable[[dict, TakeoffContext], list]
    materials: Tuple[str, ...] = ()


def _config(name: str, label: str, module) -> TradeConfig:
    return TradeConfig(
        name=name,
        label=label,
        fields=tuple(module.FIELDS),
        derive=module.derive,
        materials=tuple(module.MATERIALS),
    )


TRADE_REGISTRY: dict[str, TradeConfig] = {
    "deck": _config("deck", "Deck", deck),
    "framing": _config("framing", "Framing", framing),
    "excavation": _config("excavation", "Excavation", excavation),
    "concrete": _config("concrete", "Concrete", concrete),
    "gutters": _config("gutters", "Gutters", gutters),
    "retaining_wall": _config("retaining_wall", "Retaining Wall", retaining_wall),
    "pavers": _config("pavers", "Pavers", pavers),
    "fencing": _config("fencing", "Fencing", fencing),
    "drywall": _config("drywall", "Drywall", drywall),
    "flooring": _config("flooring", "Flooring", flooring),
    "tile": _config("tile", "Tile", tile),
    "paint": _config("paint", "Paint", paint),
    "siding": _config("siding", "Siding", siding),
    "veneer": _config("veneer", "Veneer", veneer),
    "roofing": _config("roofing", "Roofing", roofing),
    "foundation": _config("foundation", "Foundation", foundation),
}


def get_trade(trade: str) -> TradeConfig:
    """Returns the config for a trade, or raises UnknownTrade."""
    if trade not in TRADE_REGISTRY:
        raise UnknownTrade(
            f"No calculator registered for trade: {trade}. "
            f"Available: {list(TRADE_REGISTRY.keys())}"
        )
    return TRADE_REGISTRY[trade]


def has_trade(trade: str) -> bool:
    """Check if a trade is registered."""
    return trade in TRADE_REGISTRY


def list_trades() -> List[str]:
    """List all registered trade names."""
    return list(TRADE_REGISTRY.keys())
