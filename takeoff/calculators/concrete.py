"""
Concrete takeoff for flatwork slabs and walls.

Flatwork thickness is entered in inches, wall height and thickness in feet.
Imperial only.
"""

import math

from ..quantities import prism_volume_cuyd, rebar_grid_length
from ..schemas import FieldKind, FieldSpec
from ..units import area_to_sheets, inches_to_feet
from .base import TakeoffContext

BAGS_PER_CUBIC_YARD = 40
MIN_TRUCK_LOAD_CUYD = 1.0
MESH_SHEET_SQ_FT = 100

FIELDS = [
    FieldSpec(name="concrete_type", label="Pour", kind=FieldKind.CHOICE,
              choices=["flatwork", "wall"], default="flatwork"),
    FieldSpec(name="length", label="Length", unit="ft"),
    FieldSpec(name="width", label="Width / thickness", unit="ft"),
    FieldSpec(name="thickness", label="Slab thickness", unit="in", default=4,
              enabled_by="concrete_type", enabled_when="flatwork"),
    FieldSpec(name="height", label="Wall height", unit="ft",
              enabled_by="concrete_type", enabled_when="wall"),
    FieldSpec(name="delivery", label="Delivery", kind=FieldKind.CHOICE,
              choices=["bags", "truck"], default="bags"),
    FieldSpec(name="reinforcement", label="Reinforcement", kind=FieldKind.CHOICE,
              choices=["none", "rebar", "mesh"], default="none"),
    FieldSpec(name="rebar_spacing", label="Rebar spacing", unit="in", default=12, minimum=1,
              enabled_by="reinforcement", enabled_when="rebar"),
    FieldSpec(name="mesh_type", label="Mesh", kind=FieldKind.CHOICE, choices=["6x6", "4x4"],
              default="6x6", enabled_by="reinforcement", enabled_when="mesh"),
]

MATERIALS = (
    "concrete_bag_80lb", "ready_mix", "ready_mix_short_load_fee",
    "rebar_flatwork", "wire_mesh_6x6", "wire_mesh_4x4",
)


def derive(fields: dict, ctx: TakeoffContext) -> list:
    length, width = fields["length"], fields["width"]
    if fields["concrete_type"] == "wall":
        depth_ft = fields["height"]
    else:
        depth_ft = inches_to_feet(fields["thickness"])
    volume = prism_volume_cuyd(length, width, depth_ft)

    items = [ctx.measure("Concrete Volume", volume, "cubic yards")]

    if fields["delivery"] == "bags":
        bags = volume * BAGS_PER_CUBIC_YARD
        items.append(ctx.price("Bags of Concrete", math.ceil(bags), "80lb bags", "concrete_bag_80lb"))
    else:
        ordered = max(volume, MIN_TRUCK_LOAD_CUYD)
        items.append(ctx.price("Ready-Mix Concrete", ordered, "cubic yards", "ready_mix"))
        if volume < MIN_TRUCK_LOAD_CUYD:
            items.append(ctx.price("Short Load Fee", 1, "ea", "ready_mix_short_load_fee"))
            items.append(ctx.measure("Note: minimum load", MIN_TRUCK_LOAD_CUYD, "cubic yards"))

    reinforcement = fields["reinforcement"]
    if reinforcement == "rebar":
        bar_length = rebar_grid_length(length, width, inches_to_feet(fields["rebar_spacing"]))
        if bar_length:
            items.append(ctx.measure("Rebar Length Needed", bar_length, "feet"))
            items.append(ctx.stock("Rebar", "rebar_flatwork", bar_length, unit="{length}ft bars"))
    elif reinforcement == "mesh":
        mesh = fields["mesh_type"]
        items.append(ctx.price(f"{mesh} Wire Mesh Sheets", area_to_sheets(length * width, MESH_SHEET_SQ_FT),
                               "sheets", f"wire_mesh_{mesh}"))

    return items
