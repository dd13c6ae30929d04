import enum
from types import MappingProxyType
from typing import Annotated, Any, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_serializer, field_validator


# --- Input side ---

class FieldKind(str, enum.Enum):
    NUMBER = "number"
    CHOICE = "choice"
    BOOLEAN = "boolean"


class FieldSpec(BaseModel):
    """
    One user-editable field of a trade form.

    enabled_by/enabled_when tie the field to a toggle or choice: the field is
    only read (and only required) while fields[enabled_by] matches
    enabled_when. enabled_when may be a single value or a list of values.
    """
    name: str
    label: str = ""
    kind: FieldKind = FieldKind.NUMBER
    unit: str = ""
    required: bool = True
    default: Any = None
    choices: Optional[List[Any]] = None
    integer: bool = False
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    enabled_by: Optional[str] = None
    enabled_when: Any = True
    soft_max: Optional[float] = None
    soft_max_message: str = ""

    class Config:
        frozen = True


class DimensionInput(BaseModel):
    """Immutable snapshot of a trade form, built fresh per calculation."""
    trade: str
    fields: Mapping[str, Any] = Field(default_factory=dict)

    class Config:
        frozen = True

    @field_validator("fields")
    @classmethod
    def _read_only(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        # copied, so later edits to the caller's dict do not leak in
        return MappingProxyType(dict(value))

    @field_serializer("fields")
    def _plain_dict(self, value: Mapping[str, Any]) -> dict:
        return dict(value)


# --- Stock-cut ---

class StockCandidate(BaseModel):
    """One stock length evaluated for a run."""
    stock_length_ft: float
    unit_price: float
    pieces_per_board: int
    boards_needed: int
    pieces: int
    total_length_ft: float
    waste_ft: float
    reusable_pieces: int
    effective_cost: float

    class Config:
        frozen = True


class StockCutDecision(BaseModel):
    """The chosen stock length for one required run."""
    material_key: str
    run_length_ft: float
    segments: int = 1
    stock_length_ft: float
    pieces: int
    unit_price: float
    total_cost: float
    waste_ft: float
    reusable_pieces: int
    utilization_override: bool = False

    class Config:
        frozen = True


# --- Output side: tagged line items ---

def _money(value: Optional[float]) -> Optional[float]:
    return None if value is None else round(value, 2)


class _LineItemBase(BaseModel):
    label: str
    quantity: float = 0.0
    unit: str = ""

    class Config:
        frozen = True


class PricedItem(_LineItemBase):
    """
    Priced material. cost is held in whole cents from construction on, so
    the items of a summary always add up to its total. unit_price keeps full
    precision and is rounded on serialization.
    """
    kind: Literal["priced"] = "priced"
    cost: float
    unit_price: float = 0.0

    @field_validator("cost")
    @classmethod
    def _to_cents(cls, value: float) -> float:
        return _money(value)

    @field_serializer("unit_price")
    def _round_money(self, value: float) -> float:
        return _money(value)


class QuantityItem(_LineItemBase):
    """Informational measurement (an area, a riser height). No cost."""
    kind: Literal["quantity"] = "quantity"


class WarningItem(_LineItemBase):
    """Soft-bound notice. Never contributes to a total."""
    kind: Literal["warning"] = "warning"
    message: str = ""


class TotalItem(_LineItemBase):
    """Synthesized total. Appended once by EstimateAggregator."""
    kind: Literal["total"] = "total"
    unit: str = "USD"
    cost: float

    @field_validator("cost")
    @classmethod
    def _to_cents(cls, value: float) -> float:
        return _money(value)


LineItem = Annotated[
    Union[PricedItem, QuantityItem, WarningItem, TotalItem],
    Field(discriminator="kind"),
]


class EstimateSummary(BaseModel):
    """Ordered line items for one calculation, ending in one TotalItem when priced."""
    trade: str
    items: List[LineItem] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def total(self) -> Optional[TotalItem]:
        if self.items and isinstance(self.items[-1], TotalItem):
            return self.items[-1]
        return None

    @property
    def priced_items(self) -> List[PricedItem]:
        return [item for item in self.items if isinstance(item, PricedItem)]

    @property
    def warnings(self) -> List[WarningItem]:
        return [item for item in self.items if isinstance(item, WarningItem)]

    def to_estimate_lines(self) -> List[dict]:
        """
        Map priced items into the invoice-line shape the estimate builder uses.

        unit_price = cost / quantity, total_price = cost. Items with no cost or
        no quantity are skipped.
        """
        lines = []
        for item in self.priced_items:
            if item.cost <= 0 or item.quantity <= 0:
                continue
            lines.append({
                "description": f"{item.label} - {item.quantity:g} {item.unit}",
                "quantity": item.quantity,
                "unit": item.unit,
                "unit_price": round(item.cost / item.quantity, 2),
                "total_price": round(item.cost, 2),
                "type": "material",
            })
        return lines
