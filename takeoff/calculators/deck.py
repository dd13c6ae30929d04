"""
Deck takeoff.

Decking boards run along the deck length, one row per board width across the
deck width. Joists run across the width, spaced along the length. Every cut
length goes through the stock-cut optimizer, so the label carries the chosen
board length.
"""

import math

from ..quantities import (
    area_with_waste,
    boards_across,
    members_on_center,
    rectangle_area,
    stair_geometry,
)
from ..schemas import FieldKind, FieldSpec
from ..units import count_to_packages
from .base import TakeoffContext

MAX_CANTILEVER_IN = 24
SCREWS_PER_CROSSING = 2
SCREWS_PER_BOX = 1000
RAILING_POST_SPACING_FT = 6

# decking_type choice -> catalog key
DECKING_TYPES = {
    "5_4": "decking_5_4",
    "2x6_pt": "decking_2x6_pt",
    "trex_enhance_basic": "decking_trex_enhance_basic",
    "trex_enhance_natural": "decking_trex_enhance_natural",
    "trex_select": "decking_trex_select",
    "trex_transcend": "decking_trex_transcend",
    "trex_lineage": "decking_trex_lineage",
    "custom": "decking_custom",
}

JOIST_SIZES = ["2x6", "2x8", "2x10", "2x12"]
FASCIA_TYPES = ["pt", "azek", "metal"]

FIELDS = [
    FieldSpec(name="input_mode", label="Input", kind=FieldKind.CHOICE,
              choices=["dimensions", "area"], default="dimensions"),
    FieldSpec(name="length", label="Length", unit="ft",
              enabled_by="input_mode", enabled_when="dimensions"),
    FieldSpec(name="width", label="Width", unit="ft",
              enabled_by="input_mode", enabled_when="dimensions"),
    FieldSpec(name="area", label="Area", unit="sq ft",
              enabled_by="input_mode", enabled_when="area"),
    FieldSpec(name="decking_type", label="Decking", kind=FieldKind.CHOICE,
              choices=list(DECKING_TYPES), default="5_4"),
    FieldSpec(name="custom_decking_width", label="Board width", unit="in",
              enabled_by="decking_type", enabled_when="custom"),
    FieldSpec(name="custom_decking_gap", label="Board gap", unit="in",
              enabled_by="decking_type", enabled_when="custom"),
    FieldSpec(name="joist_spacing", label="Joist spacing", unit="in",
              choices=[12, 16], default=16),
    FieldSpec(name="joist_size", label="Joist size", kind=FieldKind.CHOICE,
              choices=JOIST_SIZES, default="2x10"),
    FieldSpec(name="include_waste", label="Add waste factor", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="waste_pct", label="Waste", unit="%", default=10, maximum=100,
              enabled_by="include_waste"),
    FieldSpec(name="include_cantilever", label="Cantilever", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="cantilever_length", label="Cantilever length", unit="in",
              enabled_by="include_cantilever",
              soft_max=MAX_CANTILEVER_IN,
              soft_max_message="inches maximum cantilever exceeded"),
    FieldSpec(name="include_stairs", label="Stairs", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="height_above_grade", label="Height above grade", unit="in",
              enabled_by="include_stairs"),
    FieldSpec(name="stair_width", label="Stair width", unit="in",
              enabled_by="include_stairs"),
    FieldSpec(name="stair_run", label="Run per tread", unit="in",
              choices=[10, 12], default=10, enabled_by="include_stairs"),
    FieldSpec(name="include_railing", label="Railing", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="railing_type", label="Railing type", kind=FieldKind.CHOICE,
              choices=["pt", "trex"], default="pt", enabled_by="include_railing"),
    FieldSpec(name="railing_length", label="Railing length", unit="ft",
              enabled_by="include_railing"),
    FieldSpec(name="include_fascia", label="Fascia", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="fascia_type", label="Fascia type", kind=FieldKind.CHOICE,
              choices=FASCIA_TYPES, default="pt", enabled_by="include_fascia"),
    FieldSpec(name="fascia_length", label="Fascia length", unit="ft",
              enabled_by="include_fascia"),
]

MATERIALS = (
    list(DECKING_TYPES.values())
    + [f"lumber_{size}" for size in JOIST_SIZES]
    + [f"fascia_{kind}_{size}" for kind in FASCIA_TYPES for size in JOIST_SIZES]
    + ["joist_hanger", "hurricane_tie", "deck_screws_box",
       "railing_pt", "railing_trex", "railing_post_pt", "railing_post_trex"]
)


def _footprint(fields: dict):
    """(length, width, area). Area mode assumes a square deck."""
    if fields["input_mode"] == "area":
        area = fields["area"]
        side = math.sqrt(area)
        return side, side, area
    length, width = fields["length"], fields["width"]
    return length, width, rectangle_area(length, width)


def derive(fields: dict, ctx: TakeoffContext) -> list:
    items = []
    length, width, area = _footprint(fields)
    items.append(ctx.measure("Total Deck Area", area, "square feet"))

    waste_pct = fields.get("waste_pct") if fields.get("include_waste") else None
    if waste_pct is not None:
        items.append(ctx.measure(
            f"Deck Area (including {waste_pct:g}% waste)",
            area_with_waste(area, waste_pct),
            "square feet",
        ))

    # --- Decking ---
    decking_key = DECKING_TYPES[fields["decking_type"]]
    if fields["decking_type"] == "custom":
        board_width = fields["custom_decking_width"]
        gap = fields["custom_decking_gap"]
    else:
        attrs = ctx.attributes(decking_key)
        board_width, gap = attrs["width_in"], attrs["gap_in"]

    rows = boards_across(width, board_width, gap)
    if rows and waste_pct:
        rows = math.ceil(rows * (1 + waste_pct / 100.0))
    if rows:
        name = ctx.name(decking_key, "Decking Boards")
        items.append(ctx.stock(f"{name} ({{length}}ft)", decking_key, length, segments=rows))

    # --- Framing ---
    spacing = fields["joist_spacing"]
    joist_size = fields["joist_size"]
    joists = members_on_center(length, spacing) or 0
    items.append(ctx.stock(f"{joist_size} Joists ({{length}}ft)", f"lumber_{joist_size}",
                           width, segments=joists))
    items.append(ctx.price("Joist Hangers", joists, "pieces", "joist_hanger"))

    if fields.get("include_cantilever"):
        items.append(ctx.price("Hurricane Ties (required for cantilever)", joists, "pieces",
                               "hurricane_tie"))
        items.append(ctx.measure("Cantilever Length", fields["cantilever_length"], "inches"))

    if rows:
        screws = rows * joists * SCREWS_PER_CROSSING
        items.append(ctx.measure("Deck Screws", screws, "pieces"))
        items.append(ctx.price("Deck Screw Boxes", count_to_packages(screws, SCREWS_PER_BOX),
                               "1000ct boxes", "deck_screws_box"))

    # --- Stairs ---
    if fields.get("include_stairs"):
        stairs = stair_geometry(
            fields["height_above_grade"],
            fields["stair_run"],
            fields["stair_width"],
            spacing,
        )
        if stairs is not None:
            items.extend([
                ctx.measure("Number of Steps", stairs.num_treads, "steps"),
                ctx.measure("Riser Height", stairs.actual_riser_height_in, "inches"),
                ctx.measure("Total Stair Run", stairs.total_run_in, "inches"),
                ctx.measure("Stair Width", fields["stair_width"], "inches"),
                ctx.measure(f'Stringers Needed ({spacing:g}" o.c.)', stairs.num_stringers, "pieces"),
                ctx.stock("2x12 Stringer Boards ({length}ft)", "lumber_2x12",
                          stairs.stringer_length_ft, segments=stairs.num_stringers),
            ])

    # --- Railing ---
    if fields.get("include_railing") and fields["railing_length"]:
        kind = fields["railing_type"]
        railing_length = fields["railing_length"]
        posts = math.ceil(railing_length / RAILING_POST_SPACING_FT) + 1
        items.append(ctx.price(f"{kind.upper()} Railing", railing_length, "linear feet",
                               f"railing_{kind}"))
        items.append(ctx.price(f"{kind.upper()} Railing Posts", posts, "posts",
                               f"railing_post_{kind}"))

    # --- Fascia ---
    if fields.get("include_fascia"):
        key = f"fascia_{fields['fascia_type']}_{joist_size}"
        items.append(ctx.stock(f"{ctx.name(key)} ({joist_size})", key, fields["fascia_length"]))

    return items
