"""
Drywall takeoff for one wall or ceiling.

Doors and windows are entered as counts of standard openings and subtracted
from the surface before sheets are counted. Finishing materials (compound,
tape) follow the net area, not the area with waste.
"""

import math

from ..quantities import area_with_waste
from ..schemas import FieldKind, FieldSpec
from ..units import area_to_sheets, count_to_packages
from .base import TakeoffContext

DOOR_SQ_FT = 3 * 7
WINDOW_SQ_FT = 3 * 3
SCREWS_PER_SHEET = 30
SCREWS_PER_BOX = 100
COMPOUND_SQ_FT_PER_BUCKET = 100
TAPE_SQ_FT_PER_ROLL = 25

THICKNESSES = ["1/2", "5/8"]
SHEET_SIZES = ["4x8", "4x12"]

FIELDS = [
    FieldSpec(name="surface", label="Surface", kind=FieldKind.CHOICE,
              choices=["wall", "ceiling"], default="wall"),
    FieldSpec(name="length", label="Length", unit="ft"),
    FieldSpec(name="height", label="Height (wall) or width (ceiling)", unit="ft"),
    FieldSpec(name="sheet_size", label="Sheet size", kind=FieldKind.CHOICE,
              choices=SHEET_SIZES, default="4x8"),
    FieldSpec(name="thickness", label="Thickness", kind=FieldKind.CHOICE,
              choices=THICKNESSES, default="1/2"),
    FieldSpec(name="layers", label="Layers", choices=[1, 2], default=1, integer=True),
    FieldSpec(name="door_count", label="Doors (3x7)", default=0, integer=True,
              enabled_by="surface", enabled_when="wall"),
    FieldSpec(name="window_count", label="Windows (3x3)", default=0, integer=True,
              enabled_by="surface", enabled_when="wall"),
    FieldSpec(name="include_waste", label="Add waste factor", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="waste_pct", label="Waste", unit="%", choices=[5, 10, 15], default=10,
              enabled_by="include_waste"),
]

MATERIALS = (
    [f"drywall_{size}_{t.replace('/', '_')}" for size in SHEET_SIZES for t in THICKNESSES]
    + ["drywall_screws_box", "joint_compound", "joint_tape"]
)


def derive(fields: dict, ctx: TakeoffContext) -> list:
    surface = fields["surface"]
    gross = fields["length"] * fields["height"]
    openings = fields.get("door_count", 0) * DOOR_SQ_FT + fields.get("window_count", 0) * WINDOW_SQ_FT
    net = max(gross - openings, 0.0)
    if fields["include_waste"]:
        covered = area_with_waste(net, fields["waste_pct"])
    else:
        covered = net

    size, thickness = fields["sheet_size"], fields["thickness"]
    sheet_key = f"drywall_{size}_{thickness.replace('/', '_')}"
    sheet_sq_ft = ctx.attributes(sheet_key)["sheet_sq_ft"]
    sheets = area_to_sheets(covered, sheet_sq_ft) * fields["layers"]
    screws = sheets * SCREWS_PER_SHEET

    items = [
        ctx.measure(f"Total {surface.capitalize()} Area", net, "square feet"),
        ctx.price(f'{size} Drywall Sheets ({thickness}")', sheets, "sheets", sheet_key),
        ctx.measure("Drywall Screws", screws, "screws"),
        ctx.price("Drywall Screw Boxes", count_to_packages(screws, SCREWS_PER_BOX), "100ct boxes",
                  "drywall_screws_box"),
    ]
    if net:
        items.append(ctx.price("Joint Compound", math.ceil(net / COMPOUND_SQ_FT_PER_BUCKET),
                               "5-gallon buckets", "joint_compound"))
        items.append(ctx.price("Joint Tape", math.ceil(net / TAPE_SQ_FT_PER_ROLL), "rolls", "joint_tape"))
    return items
