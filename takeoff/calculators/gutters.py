"""
Gutter takeoff.

Run length is the roof edge stretched by pitch, plus a fixed allowance per
valley. Downspouts are spaced by the gutter's max span.
"""

import math

from ..quantities import pitch_factor
from ..schemas import FieldKind, FieldSpec
from .base import TakeoffContext
from .material_lookup import GUTTER_MATERIALS

VALLEY_ALLOWANCE_FT = 5
DOWNSPOUT_LENGTH_FT = 15
DEFAULT_MAX_SPAN_FT = 35
SECTION_LENGTH_FT = 50
HANGER_SPACING_FT = 2

GUTTER_SIZES = ["5", "6", "custom"]
DOWNSPOUT_SIZES = ["2x3", "3x4", "custom"]

FIELDS = [
    FieldSpec(name="roof_length", label="Roof edge length", unit="ft"),
    FieldSpec(name="gutter_material", label="Material", kind=FieldKind.CHOICE,
              choices=list(GUTTER_MATERIALS), default="aluminum"),
    FieldSpec(name="gutter_size", label="Gutter size", kind=FieldKind.CHOICE,
              choices=GUTTER_SIZES, default="5"),
    FieldSpec(name="custom_gutter_price", label="Gutter price", unit="$/ft",
              enabled_by="gutter_size", enabled_when="custom"),
    FieldSpec(name="custom_gutter_max_span", label="Max run per downspout", unit="ft", minimum=1,
              enabled_by="gutter_size", enabled_when="custom"),
    FieldSpec(name="downspout_size", label="Downspout", kind=FieldKind.CHOICE,
              choices=DOWNSPOUT_SIZES, default="2x3"),
    FieldSpec(name="custom_downspout_price", label="Downspout price", unit="$/ft",
              enabled_by="downspout_size", enabled_when="custom"),
    FieldSpec(name="roof_pitch", label="Roof pitch", unit="in/12", default=4),
    FieldSpec(name="valley_count", label="Valleys", default=0, integer=True),
    FieldSpec(name="include_endcaps", label="Endcaps", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="include_corners", label="Corners", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="corner_count", label="Corners", default=0, integer=True,
              enabled_by="include_corners"),
    FieldSpec(name="include_leaf_guards", label="Leaf guards", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="include_heat_tape", label="Heat tape", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="heat_tape_length", label="Heat tape length", unit="ft",
              enabled_by="include_heat_tape"),
]

MATERIALS = (
    [f"gutter_{material}_{size}" for material, sizes in GUTTER_MATERIALS.items() for size in sizes]
    + ["downspout_2x3", "downspout_3x4",
       "gutter_endcap", "gutter_endcap_copper", "gutter_corner", "gutter_corner_copper",
       "leaf_guard", "leaf_guard_copper", "heat_tape", "gutter_hanger", "gutter_hanger_copper"]
)


def _trim_key(base: str, material: str) -> str:
    # copper has its own trim line
    return f"{base}_copper" if material == "copper" else base


def derive(fields: dict, ctx: TakeoffContext) -> list:
    items = []
    material = fields["gutter_material"]
    size = fields["gutter_size"]

    run = fields["roof_length"] * pitch_factor(fields["roof_pitch"])
    run += fields["valley_count"] * VALLEY_ALLOWANCE_FT

    if size == "custom":
        gutter_price = fields["custom_gutter_price"]
        max_span = fields["custom_gutter_max_span"]
    else:
        key = f"gutter_{material}_{size}"
        gutter_price = ctx.unit_price(key)
        max_span = ctx.max_span(key, DEFAULT_MAX_SPAN_FT)
    items.append(ctx.price_at(f'{size}" {material.capitalize()} Gutters', run, "linear feet", gutter_price))

    downspouts = math.ceil(run / max_span)
    downspout = fields["downspout_size"]
    if downspout == "custom":
        downspout_price = fields["custom_downspout_price"]
    else:
        downspout_price = ctx.unit_price(f"downspout_{downspout}")
    items.append(ctx.measure(f"{downspout} Downspouts", downspouts, "pieces"))
    items.append(ctx.price_at(f"{downspout} Downspout Stock", downspouts * DOWNSPOUT_LENGTH_FT,
                              "linear feet", downspout_price))

    if fields["include_endcaps"]:
        endcaps = math.ceil(run / SECTION_LENGTH_FT) * 2
        items.append(ctx.price("Endcaps", endcaps, "pieces", _trim_key("gutter_endcap", material)))

    if fields["include_corners"] and fields["corner_count"]:
        items.append(ctx.price("Inside/Outside Corners", fields["corner_count"], "pieces",
                               _trim_key("gutter_corner", material)))

    if fields["include_leaf_guards"]:
        items.append(ctx.price("Leaf Guards", run, "linear feet", _trim_key("leaf_guard", material)))

    if fields["include_heat_tape"]:
        items.append(ctx.price("Heat Tape", fields["heat_tape_length"], "linear feet", "heat_tape"))

    hangers = math.ceil(run / HANGER_SPACING_FT)
    items.append(ctx.price("Hangers and Hardware", hangers, "pieces", _trim_key("gutter_hanger", material)))

    return items
