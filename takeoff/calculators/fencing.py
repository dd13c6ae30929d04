"""
Fence takeoff: posts, caps, mounting, infill, rails, kickboard and gates.

Gates and corners are entered as counts. Gates share the fence material.
"""

import math

from ..errors import IncompleteInput
from ..schemas import FieldKind, FieldSpec
from ..units import inches_to_feet
from .base import TakeoffContext
from .material_lookup import FENCE_MATERIALS, GATE_PRICES

SECTION_LENGTH_FT = 8
PICKETS_PER_FT = 2
SQ_FT_PER_SQ_YD = 9
# 12" hole: cubic feet of concrete per inch of depth, and 60lb bags per cubic yard
HOLE_CU_FT_PER_IN = 0.33
BAGS_PER_CUBIC_YARD = 4

GATE_TYPES = list(GATE_PRICES)

FIELDS = [
    FieldSpec(name="fence_type", label="Fence", kind=FieldKind.CHOICE,
              choices=list(FENCE_MATERIALS), default="privacy"),
    FieldSpec(name="material", label="Material", kind=FieldKind.CHOICE,
              choices=["wood", "vinyl", "metal", "composite"], default="wood"),
    FieldSpec(name="length", label="Total length", unit="ft"),
    FieldSpec(name="height", label="Height", unit="in"),
    FieldSpec(name="post_spacing", label="Post spacing", unit="ft", choices=[6, 8], default=8),
    FieldSpec(name="corner_count", label="Corners", default=0, integer=True),
    FieldSpec(name="include_post_caps", label="Post caps", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="include_kickboard", label="Kickboard", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="post_mount", label="Post mount", kind=FieldKind.CHOICE,
              choices=["concrete", "spike", "bracket"], default="concrete"),
    FieldSpec(name="concrete_depth", label="Concrete depth", unit="in",
              enabled_by="post_mount", enabled_when="concrete"),
    FieldSpec(name="single_gates", label="Single gates", default=0, integer=True),
    FieldSpec(name="double_gates", label="Double gates", default=0, integer=True),
    FieldSpec(name="rolling_gates", label="Rolling gates", default=0, integer=True),
    FieldSpec(name="include_gate_hardware", label="Gate hardware", kind=FieldKind.BOOLEAN, default=True),
]

MATERIALS = (
    [f"fence_{fence}_{material}_{part}"
     for fence, materials in FENCE_MATERIALS.items()
     for material, parts in materials.items()
     for part in parts]
    + [f"gate_{gate}_{material}" for gate, materials in GATE_PRICES.items() for material in materials]
    + [f"gate_hardware_{gate}" for gate in GATE_TYPES]
    + ["concrete_bag_60lb", "post_spike", "post_bracket", "kickboard"]
)


def derive(fields: dict, ctx: TakeoffContext) -> list:
    fence = fields["fence_type"]
    material = fields["material"]
    prefix = f"fence_{fence}_{material}"
    if f"{prefix}_post" not in ctx.catalog:
        # e.g. ranch fences are not sold in metal
        raise IncompleteInput(["material"])

    length = fields["length"]
    sections = math.ceil(length / SECTION_LENGTH_FT)
    posts = math.ceil(length / fields["post_spacing"]) + 1 + fields["corner_count"]
    title = material.capitalize()

    items = [ctx.price(f"{title} Posts", posts, "posts", f"{prefix}_post")]
    if fields["include_post_caps"]:
        items.append(ctx.price("Post Caps", posts, "caps", f"{prefix}_cap"))

    mount = fields["post_mount"]
    if mount == "concrete":
        concrete_cuyd = fields["concrete_depth"] * HOLE_CU_FT_PER_IN * posts / 27.0
        items.append(ctx.price("Concrete Mix", math.ceil(concrete_cuyd * BAGS_PER_CUBIC_YARD),
                               "60lb bags", "concrete_bag_60lb"))
    elif mount == "spike":
        items.append(ctx.price("Post Spikes", posts, "pieces", "post_spike"))
    else:
        items.append(ctx.price("Post Mounting Brackets", posts, "pieces", "post_bracket"))

    if fence in ("privacy", "panel"):
        items.append(ctx.price(f"{title} Panels", sections, "8ft panels", f"{prefix}_panel"))
    elif fence == "picket":
        items.append(ctx.price(f"{title} Pickets", math.ceil(length * PICKETS_PER_FT), "pickets",
                               f"{prefix}_picket"))
    elif fence == "chain-link":
        fabric = length * inches_to_feet(fields["height"]) / SQ_FT_PER_SQ_YD
        items.append(ctx.price("Chain Link Fabric", fabric, "square yards", f"{prefix}_fabric"))

    if fence != "panel":
        rails_per_section = 3 if fence == "ranch" else 2
        items.append(ctx.price(f"{title} Rails", sections * rails_per_section, "8ft pieces",
                               f"{prefix}_rail"))

    if fields["include_kickboard"]:
        items.append(ctx.price("Kickboard", sections, "8ft pieces", "kickboard"))

    for gate in GATE_TYPES:
        count = fields[f"{gate}_gates"]
        if not count:
            continue
        items.append(ctx.price(f"{gate.capitalize()} Gate", count, "unit", f"gate_{gate}_{material}"))
        if fields["include_gate_hardware"]:
            items.append(ctx.price(f"{gate.capitalize()} Gate Hardware", count, "set",
                                   f"gate_hardware_{gate}"))

    return items
