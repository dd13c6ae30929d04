"""
Retaining wall takeoff for segmental block, poured concrete and timber walls.

Every wall type also gets a gravel base, optional drainage, optional geogrid
(walls over 4 ft) and filter fabric.
"""

import math

from ..quantities import courses, prism_volume_cuyd, units_per_area
from ..schemas import FieldKind, FieldSpec
from ..units import area_to_sheets, inches_to_feet
from .base import TakeoffContext

BLOCK_TYPES = ["standard", "pinned", "gravity", "custom"]

GEOGRID_MIN_HEIGHT_FT = 4
GEOGRID_ROLL_SQ_FT = 200
FABRIC_ROLL_SQ_FT = 300
FABRIC_OVERLAP_FT = 2
DRAIN_PIPE_SECTION_FT = 10
DRAINAGE_LAYER_FT = 1
BASE_DEPTH_IN = 6
TIMBER_HEIGHT_IN = 6
DEADMAN_SPACING_FT = 8
REBAR_VERTICAL_SPACING_IN = 12
REBAR_HORIZONTAL_SPACING_IN = 16

FIELDS = [
    FieldSpec(name="wall_type", label="Wall", kind=FieldKind.CHOICE,
              choices=["block", "concrete", "timber"], default="block"),
    FieldSpec(name="length", label="Length", unit="ft"),
    FieldSpec(name="height", label="Height", unit="ft"),
    FieldSpec(name="block_type", label="Block", kind=FieldKind.CHOICE, choices=BLOCK_TYPES,
              default="standard", enabled_by="wall_type", enabled_when="block"),
    FieldSpec(name="custom_block_width", label="Block width", unit="in",
              enabled_by="block_type", enabled_when="custom"),
    FieldSpec(name="custom_block_height", label="Block height", unit="in",
              enabled_by="block_type", enabled_when="custom"),
    FieldSpec(name="custom_block_depth", label="Block depth", unit="in",
              enabled_by="block_type", enabled_when="custom"),
    FieldSpec(name="custom_block_price", label="Block price", unit="USD",
              enabled_by="block_type", enabled_when="custom"),
    FieldSpec(name="include_capstone", label="Capstones", kind=FieldKind.BOOLEAN, default=True,
              enabled_by="wall_type", enabled_when="block"),
    FieldSpec(name="drainage", label="Drainage", kind=FieldKind.CHOICE,
              choices=["gravel", "pipe", "both", "none"], default="both"),
    FieldSpec(name="include_geogrid", label="Geogrid", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="geogrid_layers", label="Geogrid layers", default=2, integer=True,
              enabled_by="include_geogrid"),
]

MATERIALS = (
    "block_standard", "block_pinned", "block_gravity", "capstone", "wall_concrete",
    "rebar_wall", "timber_6x6_pt", "gravel_base", "drainage_gravel", "drain_pipe",
    "geogrid_roll", "filter_fabric_roll",
)


def _block_wall(fields: dict, ctx: TakeoffContext, wall_area: float) -> list:
    items = []
    block = fields["block_type"]
    if block == "custom":
        width = fields["custom_block_width"]
        height = fields["custom_block_height"]
        depth = fields["custom_block_depth"]
        blocks = units_per_area(wall_area, width, height)
        items.append(ctx.price_at(f'Custom Blocks ({width:g}"x{height:g}"x{depth:g}")',
                                  blocks, "blocks", fields["custom_block_price"]))
    else:
        key = f"block_{block}"
        attrs = ctx.attributes(key)
        blocks = units_per_area(wall_area, attrs["width_in"], attrs["height_in"])
        items.append(ctx.price(f"Retaining Wall Blocks ({block})", blocks, "blocks", key))

    if fields["include_capstone"]:
        items.append(ctx.price("Capstone Blocks", math.ceil(fields["length"]), "pieces", "capstone"))
    return items


def _concrete_wall(fields: dict, ctx: TakeoffContext) -> list:
    length, height = fields["length"], fields["height"]
    thickness_in = 8 if height <= 4 else 12
    volume = prism_volume_cuyd(length, height, inches_to_feet(thickness_in))

    vertical_bars = courses(length * 12, REBAR_VERTICAL_SPACING_IN) or 0
    horizontal_bars = courses(height * 12, REBAR_HORIZONTAL_SPACING_IN) or 0
    rebar_ft = vertical_bars * height + horizontal_bars * length
    return [
        ctx.price("Concrete Needed", volume, "cubic yards", "wall_concrete"),
        ctx.measure("Rebar Needed", math.ceil(rebar_ft), "linear feet"),
        ctx.stock("Rebar", "rebar_wall", rebar_ft, unit="{length}ft bars"),
    ]


def _timber_wall(fields: dict, ctx: TakeoffContext) -> list:
    length = fields["length"]
    rows = courses(fields["height"] * 12, TIMBER_HEIGHT_IN) or 0
    deadmen = math.ceil(length / DEADMAN_SPACING_FT) * math.ceil(rows / 2)
    return [
        ctx.stock("6x6 Pressure Treated Timbers", "timber_6x6_pt", length, segments=rows,
                  unit="{length}ft lengths"),
        ctx.stock("Deadmen Timbers", "timber_6x6_pt", DEADMAN_SPACING_FT, segments=deadmen,
                  unit="{length}ft lengths"),
    ]


def derive(fields: dict, ctx: TakeoffContext) -> list:
    wall_type = fields["wall_type"]
    length, height = fields["length"], fields["height"]
    wall_area = length * height

    items = [ctx.measure("Total Wall Area", wall_area, "square feet")]
    if wall_type == "block":
        items.extend(_block_wall(fields, ctx, wall_area))
    elif wall_type == "concrete":
        items.extend(_concrete_wall(fields, ctx))
    else:
        items.extend(_timber_wall(fields, ctx))

    base_width_in = 24 if wall_type == "block" else 36
    base = prism_volume_cuyd(length, inches_to_feet(base_width_in), inches_to_feet(BASE_DEPTH_IN))
    items.append(ctx.price("Gravel Base Material", base, "cubic yards", "gravel_base"))

    drainage = fields["drainage"]
    if drainage in ("gravel", "both"):
        gravel = prism_volume_cuyd(length, height, DRAINAGE_LAYER_FT)
        items.append(ctx.price("Drainage Gravel", gravel, "cubic yards", "drainage_gravel"))
    if drainage in ("pipe", "both"):
        sections = math.ceil(length / DRAIN_PIPE_SECTION_FT)
        items.append(ctx.price("Drainage Pipe", sections, "10ft sections", "drain_pipe"))

    if fields["include_geogrid"] and height > GEOGRID_MIN_HEIGHT_FT:
        grid_area = wall_area * fields["geogrid_layers"]
        items.append(ctx.price("Geogrid Reinforcement", area_to_sheets(grid_area, GEOGRID_ROLL_SQ_FT),
                               "200sf rolls", "geogrid_roll"))

    fabric_area = length * (height + FABRIC_OVERLAP_FT)
    items.append(ctx.price("Filter Fabric", area_to_sheets(fabric_area, FABRIC_ROLL_SQ_FT),
                           "300sf rolls", "filter_fabric_roll"))

    return items
