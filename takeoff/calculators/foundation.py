"""
Foundation takeoff: perimeter footing, stem (or basement) wall, slab.

Footing and wall run the full perimeter of a length x width rectangle.
Backfill fills the space inside the stem wall up to the underside of the
gravel base; a basement has none. Bars go through the stock-cut optimizer,
so short vertical bars nest into 20 ft stock.
"""

import math

from ..quantities import prism_volume_cuyd, rebar_grid_length
from ..schemas import FieldKind, FieldSpec
from ..units import (
    area_to_sheets,
    cubic_feet_to_cubic_yards,
    depth_to_cubic_yards,
    inches_to_feet,
    square_inches_to_square_feet,
)
from .base import TakeoffContext

STRENGTHS = [3000, 3500, 4000, 4500]
BACKFILL_TYPES = ["native", "gravel", "sand"]

VERTICAL_BAR_SPACING_IN = 16
VERTICAL_BAR_EMBED_FT = 2
HORIZONTAL_BAR_RUNS = 2
FOOTING_BAR_RUNS = 2
VAPOR_BARRIER_ROLL_SQ_FT = 1000
WATERPROOFING_SQ_FT_PER_GALLON = 100
OVERLAP = 1.1
DRAIN_SECTION_FT = 10
# gravel around the drain: 2 ft wide x 2 ft deep
DRAIN_GRAVEL_SECTION_SQ_FT = 4

FIELDS = [
    FieldSpec(name="is_basement", label="Basement", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="length", label="Length", unit="ft"),
    FieldSpec(name="width", label="Width", unit="ft"),
    FieldSpec(name="footing_width", label="Footing width", unit="in", default=20),
    FieldSpec(name="footing_depth", label="Footing depth", unit="in", default=10),
    FieldSpec(name="wall_height", label="Stem wall height", unit="ft"),
    FieldSpec(name="wall_thickness", label="Stem wall thickness", unit="in", default=8),
    FieldSpec(name="slab_thickness", label="Slab thickness", unit="in", default=4),
    FieldSpec(name="gravel_base_depth", label="Gravel base depth", unit="in", default=4),
    FieldSpec(name="concrete_strength", label="Concrete", unit="PSI", choices=STRENGTHS, default=3500,
              integer=True),
    FieldSpec(name="backfill_type", label="Backfill", kind=FieldKind.CHOICE, choices=BACKFILL_TYPES,
              default="gravel", enabled_by="is_basement", enabled_when=False),
    FieldSpec(name="include_reinforcement", label="Steel reinforcement", kind=FieldKind.BOOLEAN,
              default=True),
    FieldSpec(name="rebar_spacing", label="Slab rebar spacing", unit="in", choices=[12, 16, 18],
              default=16, enabled_by="include_reinforcement"),
    FieldSpec(name="include_vapor_barrier", label="Vapor barrier", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="include_waterproofing", label="Waterproofing", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="include_drainage", label="Perimeter drain", kind=FieldKind.BOOLEAN, default=True),
]

MATERIALS = (
    [f"concrete_{psi}_psi" for psi in STRENGTHS]
    + [f"backfill_{kind}" for kind in BACKFILL_TYPES]
    + ["gravel_base", "rebar_wall", "vapor_barrier_roll", "foundation_waterproofing",
       "foundation_drain_pipe"]
)


def derive(fields: dict, ctx: TakeoffContext) -> list:
    length, width = fields["length"], fields["width"]
    wall_height = fields["wall_height"]
    basement = fields["is_basement"]
    perimeter = 2 * (length + width)
    area = length * width

    psi = fields["concrete_strength"]
    concrete_key = f"concrete_{psi}_psi"
    wall_name = "Basement" if basement else "Stem"

    footing_section = square_inches_to_square_feet(fields["footing_width"] * fields["footing_depth"])
    wall_thickness_ft = inches_to_feet(fields["wall_thickness"])
    items = [
        ctx.measure("Foundation Perimeter", perimeter, "linear feet"),
        ctx.price(f"Footing Concrete ({psi} PSI)", cubic_feet_to_cubic_yards(perimeter * footing_section),
                  "cubic yards", concrete_key),
        ctx.price(f"{wall_name} Wall Concrete ({psi} PSI)",
                  prism_volume_cuyd(perimeter, wall_height, wall_thickness_ft), "cubic yards", concrete_key),
    ]

    if not basement:
        inside_length = max(length - 2 * wall_thickness_ft, 0.0)
        inside_width = max(width - 2 * wall_thickness_ft, 0.0)
        fill_height = wall_height - inches_to_feet(fields["slab_thickness"] + fields["gravel_base_depth"])
        if fill_height > 0 and inside_length and inside_width:
            backfill = fields["backfill_type"]
            items.append(ctx.price(f"{backfill.capitalize()} Backfill",
                                   prism_volume_cuyd(inside_length, inside_width, fill_height),
                                   "cubic yards", f"backfill_{backfill}"))

    items.append(ctx.price("Gravel Base", depth_to_cubic_yards(area, fields["gravel_base_depth"]),
                           "cubic yards", "gravel_base"))
    items.append(ctx.price(f"{'Basement Floor' if basement else 'Slab'} Concrete ({psi} PSI)",
                           depth_to_cubic_yards(area, fields["slab_thickness"]), "cubic yards", concrete_key))

    if fields["include_reinforcement"]:
        vertical_bars = area_to_sheets(perimeter * 12, VERTICAL_BAR_SPACING_IN)
        items += [
            ctx.stock("Footing Rebar", "rebar_wall", perimeter * FOOTING_BAR_RUNS, unit="{length}ft pieces"),
            ctx.stock(f"{wall_name} Wall Vertical Rebar", "rebar_wall", wall_height + VERTICAL_BAR_EMBED_FT,
                      segments=vertical_bars, unit="{length}ft pieces"),
            ctx.stock(f"{wall_name} Wall Horizontal Rebar", "rebar_wall", perimeter * HORIZONTAL_BAR_RUNS,
                      unit="{length}ft pieces"),
        ]
        spacing = fields["rebar_spacing"]
        slab_bars = rebar_grid_length(length, width, inches_to_feet(spacing))
        if slab_bars:
            items.append(ctx.stock(f'{"Floor" if basement else "Slab"} Rebar ({spacing:g}" o.c.)',
                                   "rebar_wall", slab_bars, unit="{length}ft pieces"))

    if fields["include_vapor_barrier"]:
        items.append(ctx.price("10-mil Vapor Barrier", area_to_sheets(area * OVERLAP, VAPOR_BARRIER_ROLL_SQ_FT),
                               "1000sf rolls", "vapor_barrier_roll"))
    if fields["include_waterproofing"]:
        gallons = area_to_sheets(perimeter * wall_height * OVERLAP, WATERPROOFING_SQ_FT_PER_GALLON)
        items.append(ctx.price("Waterproofing Membrane", gallons, "gallons", "foundation_waterproofing"))
    if fields["include_drainage"]:
        pipe_ft = math.ceil(perimeter * OVERLAP)
        items.append(ctx.price("Drainage Pipe", area_to_sheets(pipe_ft, DRAIN_SECTION_FT), "10ft sections",
                               "foundation_drain_pipe"))
        items.append(ctx.price("Drainage Gravel",
                               cubic_feet_to_cubic_yards(perimeter * DRAIN_GRAVEL_SECTION_SQ_FT),
                               "cubic yards", "gravel_base"))

    return items
