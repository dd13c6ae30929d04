"""
Excavation takeoff: dig volume, spoil swell, removal and haul-off.

Removal and haul-off are priced from contractor-entered rates, not the
catalog.
"""

from ..quantities import prism_volume_cuyd, sloped_excavation_volume_cuyd
from ..schemas import FieldKind, FieldSpec
from .base import TakeoffContext

FIELDS = [
    FieldSpec(name="length", label="Length", unit="ft"),
    FieldSpec(name="width", label="Width", unit="ft"),
    FieldSpec(name="depth", label="Depth", unit="ft"),
    FieldSpec(name="removal_cost_per_yard", label="Removal cost", unit="$/cu yd"),
    FieldSpec(name="sloped_sides", label="Sloped sides", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="slope_ratio", label="Slope (H:V)", choices=[1, 1.5, 2], default=1.5,
              enabled_by="sloped_sides"),
    FieldSpec(name="include_spoil_factor", label="Spoil factor", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="spoil_factor", label="Spoil factor", unit="%", choices=[10, 15, 20], default=15,
              enabled_by="include_spoil_factor"),
    FieldSpec(name="include_haul_off", label="Haul-off", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="haul_off_cost", label="Total haul-off cost", unit="USD",
              enabled_by="include_haul_off"),
]

MATERIALS = ()


def derive(fields: dict, ctx: TakeoffContext) -> list:
    length, width, depth = fields["length"], fields["width"], fields["depth"]
    if fields["sloped_sides"]:
        volume = sloped_excavation_volume_cuyd(length, width, depth, fields["slope_ratio"])
    else:
        volume = prism_volume_cuyd(length, width, depth)

    items = [ctx.measure("Base Excavation Volume", volume, "cubic yards")]

    hauled = volume
    if fields["include_spoil_factor"]:
        factor = fields["spoil_factor"]
        hauled = volume * (1 + factor / 100.0)
        items.append(ctx.measure(f"Volume with {factor:g}% Spoil Factor", hauled, "cubic yards"))

    items.append(ctx.price_at("Removal Cost", hauled, "cubic yards", fields["removal_cost_per_yard"]))

    if fields["include_haul_off"]:
        items.append(ctx.pricer.price_cost("Total Haul-off Cost", 1, "lump sum", fields["haul_off_cost"]))

    return items
