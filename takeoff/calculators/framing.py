"""
Wall / floor / ceiling framing takeoff.

Openings are entered as counts: each rough opening adds jack + king studs
(4), each plain opening adds 2, and every opening gets a doubled header.
"""

import math

from ..quantities import members_on_center, opening_members
from ..schemas import FieldKind, FieldSpec
from ..units import area_to_sheets, count_to_packages
from .base import TakeoffContext

PLATE_STOCK_FT = 16
HEADER_OVERLAP_FT = 1
TIEDOWN_SPACING_FT = 16
SHEET_AREA_SQ_FT = 32
NAILS_PER_CONNECTION = 2
NAILS_PER_STRIP = 30
NAILS_PER_BOX = 1000

SHEATHING_THICKNESSES = ["7/16", "15/32", "19/32"]

FIELDS = [
    FieldSpec(name="framing_type", label="Framing", kind=FieldKind.CHOICE,
              choices=["wall", "floor", "ceiling"], default="wall"),
    FieldSpec(name="length", label="Length", unit="ft"),
    FieldSpec(name="height", label="Height", unit="ft",
              enabled_by="framing_type", enabled_when=["wall", "ceiling"]),
    FieldSpec(name="stud_spacing", label="Stud spacing", unit="in", choices=[16, 24], default=16),
    FieldSpec(name="plate_count", label="Plates", choices=[2, 3], default=2, integer=True),
    FieldSpec(name="lumber_size", label="Lumber", kind=FieldKind.CHOICE,
              choices=["2x4", "2x6"], default="2x4"),
    FieldSpec(name="rough_openings", label="Rough openings", default=0, integer=True),
    FieldSpec(name="plain_openings", label="Plain openings", default=0, integer=True),
    FieldSpec(name="opening_width", label="Opening width", unit="ft", default=3),
    FieldSpec(name="include_blocking", label="Blocking", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="include_fireblocking", label="Fireblocking", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="include_tiedowns", label="Tie-downs", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="include_sheathing", label="Sheathing", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="sheathing_type", label="Sheathing type", kind=FieldKind.CHOICE,
              choices=["osb", "plywood"], default="osb", enabled_by="include_sheathing"),
    FieldSpec(name="sheathing_thickness", label="Sheathing thickness", kind=FieldKind.CHOICE,
              choices=SHEATHING_THICKNESSES, default="7/16", enabled_by="include_sheathing"),
]

MATERIALS = (
    ["stud_2x4", "stud_2x6", "tiedown", "framing_nails_box"]
    + [f"sheathing_{kind}_{t.replace('/', '_')}"
       for kind in ("osb", "plywood") for t in SHEATHING_THICKNESSES]
)


def derive(fields: dict, ctx: TakeoffContext) -> list:
    items = []
    framing_type = fields["framing_type"]
    length = fields["length"]
    spacing = fields["stud_spacing"]
    size = fields["lumber_size"]
    lumber_key = f"stud_{size}"

    studs = members_on_center(length, spacing) or 0
    openings = fields["rough_openings"] + fields["plain_openings"]
    opening_studs = (fields["rough_openings"] * opening_members(True)
                     + fields["plain_openings"] * opening_members(False))
    total_studs = studs + opening_studs
    plates = math.ceil(length / PLATE_STOCK_FT) * fields["plate_count"]
    headers = openings * math.ceil((fields["opening_width"] + HEADER_OVERLAP_FT) / PLATE_STOCK_FT) * 2

    items.append(ctx.price(f'{size} Studs ({spacing:g}" o.c.)', total_studs, "pieces", lumber_key))
    items.append(ctx.price(f"{size} Plates", plates, "pieces", lumber_key))
    if openings:
        items.append(ctx.price(f"{size} Headers", headers, "pieces", lumber_key))

    if fields["include_blocking"]:
        items.append(ctx.price("Blocking", math.ceil(studs / 2), "pieces", lumber_key))
    if fields["include_fireblocking"] and framing_type == "wall":
        items.append(ctx.price("Fireblocking", math.ceil(studs / 3), "pieces", lumber_key))
    if fields["include_tiedowns"]:
        items.append(ctx.price("Tie-downs", math.ceil(length / TIEDOWN_SPACING_FT) + 1,
                               "pieces", "tiedown"))

    if fields["include_sheathing"]:
        sheet_area = length * (fields["height"] if framing_type == "wall" else 1)
        kind = fields["sheathing_type"]
        thickness = fields["sheathing_thickness"]
        items.append(ctx.price(
            f'{kind.upper()} Sheathing ({thickness}")',
            area_to_sheets(sheet_area, SHEET_AREA_SQ_FT),
            "4x8 sheets",
            f"sheathing_{kind}_{thickness.replace('/', '_')}",
        ))

    # 30-degree strip nails, whole strips, whole boxes
    nails = (total_studs + plates + headers) * NAILS_PER_CONNECTION
    strips = math.ceil(nails / NAILS_PER_STRIP)
    boxes = count_to_packages(strips * NAILS_PER_STRIP, NAILS_PER_BOX)
    items.append(ctx.price('3" Passlode Hot-Dipped Nails', boxes, "1000ct boxes", "framing_nails_box"))

    return items
