"""
Paint takeoff: gallons of finish paint, optional primer, supplies.

Coverage per gallon depends on interior/exterior and drops with surface
condition (fair 90%, poor 80%).
"""

import math

from ..quantities import area_with_waste
from ..schemas import FieldKind, FieldSpec
from ..units import area_to_sheets
from .base import TakeoffContext
from .material_lookup import PAINT_GRADES, material_key

DOOR_SQ_FT = 3 * 7
WINDOW_SQ_FT = 3 * 3
SUPPLIES_SQ_FT_PER_KIT = 400

CONDITION_FACTORS = {"good": 1.0, "fair": 0.9, "poor": 0.8}
GRADES = ["economy", "standard", "premium"]

FIELDS = [
    FieldSpec(name="location", label="Location", kind=FieldKind.CHOICE,
              choices=list(PAINT_GRADES), default="interior"),
    FieldSpec(name="length", label="Total wall length", unit="ft"),
    FieldSpec(name="height", label="Wall height", unit="ft"),
    FieldSpec(name="condition", label="Surface condition", kind=FieldKind.CHOICE,
              choices=list(CONDITION_FACTORS), default="good"),
    FieldSpec(name="door_count", label="Doors (3x7)", default=0, integer=True),
    FieldSpec(name="window_count", label="Windows (3x3)", default=0, integer=True),
    FieldSpec(name="coats", label="Coats", choices=[1, 2], default=2, integer=True),
    FieldSpec(name="grade", label="Paint grade", kind=FieldKind.CHOICE, choices=GRADES, default="standard"),
    FieldSpec(name="finish", label="Finish", kind=FieldKind.CHOICE,
              choices=["flat", "eggshell", "satin", "semi-gloss"], default="eggshell"),
    FieldSpec(name="include_primer", label="Primer", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="include_waste", label="Add waste factor", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="waste_pct", label="Waste", unit="%", choices=[5, 10, 15], default=10,
              enabled_by="include_waste"),
]

MATERIALS = (
    [material_key("paint", location, grade) for location in PAINT_GRADES for grade in GRADES]
    + ["primer_interior", "primer_exterior", "paint_supplies"]
)


def derive(fields: dict, ctx: TakeoffContext) -> list:
    gross = fields["length"] * fields["height"]
    openings = fields["door_count"] * DOOR_SQ_FT + fields["window_count"] * WINDOW_SQ_FT
    net = max(gross - openings, 0.0)
    covered = area_with_waste(net, fields["waste_pct"]) if fields["include_waste"] else net

    location = fields["location"]
    paint_key = material_key("paint", location, fields["grade"])
    coverage = ctx.attributes(paint_key)["coverage_sq_ft"] * CONDITION_FACTORS[fields["condition"]]
    gallons = math.ceil(covered * fields["coats"] / coverage)

    items = [
        ctx.measure("Total Wall Area", net, "square feet"),
        ctx.price(f"Paint Needed ({fields['grade']}, {fields['finish']})", gallons, "gallons", paint_key),
    ]

    if fields["include_primer"]:
        primer_key = f"primer_{location}"
        primer = area_to_sheets(covered, ctx.attributes(primer_key)["coverage_sq_ft"])
        items.append(ctx.price("Primer Needed", primer, "gallons", primer_key))

    if net:
        items.append(ctx.price("Painting Supplies", math.ceil(net / SUPPLIES_SQ_FT_PER_KIT),
                               "kits", "paint_supplies"))
    return items
