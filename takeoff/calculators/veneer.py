"""
Stone/brick veneer takeoff priced from a contractor-entered rate per sq ft.
"""

from ..schemas import FieldSpec
from .base import TakeoffContext

FIELDS = [
    FieldSpec(name="length", label="Length", unit="ft"),
    FieldSpec(name="height", label="Height", unit="ft"),
    FieldSpec(name="cost_per_sq_ft", label="Cost per sq ft", unit="USD"),
]

MATERIALS = ()


def derive(fields: dict, ctx: TakeoffContext) -> list:
    area = fields["length"] * fields["height"]
    return [
        ctx.measure("Total Square Footage", area, "sq ft"),
        ctx.price_at("Veneer Materials", area, "sq ft", fields["cost_per_sq_ft"]),
    ]
