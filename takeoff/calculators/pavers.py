"""
Paver patio takeoff: pavers by area, base and bedding by depth, joint sand,
optional edge-block border.
"""

import math

from ..quantities import area_with_waste, rectangle_area
from ..schemas import FieldKind, FieldSpec
from ..units import count_to_packages, depth_to_cubic_yards, inches_to_feet
from .base import TakeoffContext

JOINT_SAND_SQ_FT_PER_BAG = 60

BEDDING_TYPES = {
    "sand": ("bedding_sand", "Sand"),
    "stone_dust": ("bedding_stone_dust", "Stone Dust"),
    "3_8_stone": ("bedding_3_8_stone", "3/8 Stone"),
}

# edge block size -> (width_in, length_in)
EDGE_BLOCK_SIZES = {"4x8": (4, 8), "6x9": (6, 9), "6x12": (6, 12)}

FIELDS = [
    FieldSpec(name="input_mode", label="Input", kind=FieldKind.CHOICE,
              choices=["dimensions", "area"], default="dimensions"),
    FieldSpec(name="length", label="Length", unit="ft",
              enabled_by="input_mode", enabled_when="dimensions"),
    FieldSpec(name="width", label="Width", unit="ft",
              enabled_by="input_mode", enabled_when="dimensions"),
    FieldSpec(name="area", label="Area", unit="sq ft",
              enabled_by="input_mode", enabled_when="area"),
    FieldSpec(name="base_depth", label="Base depth", unit="in"),
    FieldSpec(name="bedding_type", label="Bedding", kind=FieldKind.CHOICE,
              choices=list(BEDDING_TYPES), default="sand"),
    FieldSpec(name="bedding_depth", label="Bedding depth", unit="in"),
    FieldSpec(name="paver_cost_per_sq_ft", label="Paver cost", unit="$/sq ft"),
    FieldSpec(name="waste_pct", label="Waste", unit="%", choices=[5, 10, 15, 20], default=10),
    FieldSpec(name="include_border", label="Border", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="border_length", label="Border length", unit="ft", enabled_by="include_border"),
    FieldSpec(name="border_style", label="Border style", kind=FieldKind.CHOICE,
              choices=["soldier", "sailor", "double_sailor"], default="soldier",
              enabled_by="include_border"),
    FieldSpec(name="edge_block_size", label="Edge block", kind=FieldKind.CHOICE,
              choices=list(EDGE_BLOCK_SIZES) + ["custom"], default="6x9",
              enabled_by="include_border"),
    FieldSpec(name="custom_edge_width", label="Edge block width", unit="in",
              enabled_by="edge_block_size", enabled_when="custom"),
    FieldSpec(name="custom_edge_length", label="Edge block length", unit="in",
              enabled_by="edge_block_size", enabled_when="custom"),
]

MATERIALS = (
    ["gravel_base", "polymeric_sand_bag"]
    + [key for key, _ in BEDDING_TYPES.values()]
    + [f"edge_block_{size}" for size in list(EDGE_BLOCK_SIZES) + ["custom"]]
)


def _border(fields: dict, ctx: TakeoffContext):
    size = fields["edge_block_size"]
    if size == "custom":
        width_in, length_in = fields["custom_edge_width"], fields["custom_edge_length"]
        size_label = f'{width_in:g}"x{length_in:g}"'
    else:
        width_in, length_in = EDGE_BLOCK_SIZES[size]
        size_label = size

    style = fields["border_style"]
    # soldier blocks stand on end, sailors lie lengthwise
    run_per_block = inches_to_feet(width_in if style == "soldier" else length_in)
    if not run_per_block:
        return None
    blocks = math.ceil(fields["border_length"] / run_per_block)
    if style == "double_sailor":
        blocks *= 2
    style_label = style.replace("_", " ").title()
    return ctx.price(f"Edge Blocks Needed ({size_label}, {style_label})", blocks, "pieces",
                     f"edge_block_{size}")


def derive(fields: dict, ctx: TakeoffContext) -> list:
    if fields["input_mode"] == "area":
        area = fields["area"]
    else:
        area = rectangle_area(fields["length"], fields["width"])

    waste_pct = fields["waste_pct"]
    area_waste = area_with_waste(area, waste_pct)
    bedding_key, bedding_name = BEDDING_TYPES[fields["bedding_type"]]

    items = [
        ctx.measure("Total Patio Area", area, "square feet"),
        ctx.measure(f"Total Area (including {waste_pct:g}% waste)", area_waste, "square feet"),
        ctx.price_at("Pavers", area, "square feet", fields["paver_cost_per_sq_ft"]),
        ctx.price("Base Material Needed", depth_to_cubic_yards(area_waste, fields["base_depth"]),
                  "cubic yards", "gravel_base"),
        ctx.price(f"{bedding_name} Needed", depth_to_cubic_yards(area_waste, fields["bedding_depth"]),
                  "cubic yards", bedding_key),
        ctx.price("Polymeric Sand Needed", count_to_packages(area, JOINT_SAND_SQ_FT_PER_BAG),
                  "60lb bags", "polymeric_sand_bag"),
    ]

    if fields["include_border"]:
        items.append(_border(fields, ctx))

    return items
