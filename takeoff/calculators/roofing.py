"""
Roofing takeoff from a measured roof area.

Materials are priced per square (100 sq ft). Edge lengths are estimated
from the area: ridge as 10% of the area in linear feet, drip edge as the
perimeter of a square of that area. Labor hours scale with pitch, stories
and roof shape, and are priced at the catalog labor rate.
"""

import math

from ..schemas import FieldKind, FieldSpec
from ..units import area_to_sheets
from .base import TakeoffContext
from .material_lookup import ROOFING_MATERIALS, material_key

SQ_FT_PER_SQUARE = 100
ICE_SHIELD_ROLL_SQ_FT = 200
RIDGE_FT_PER_SQ_FT = 0.1
STARTER_BUNDLE_FT = 90
LARGE_ROOF_SQ_FT = 2000
VALLEY_FT = 20

INSTALL_HOURS_PER_SQUARE = 3.5
TEAR_OFF_HOURS_PER_SQUARE = 1.2
CHIMNEY_FLASHING_HOURS = 3
SKYLIGHT_FLASHING_HOURS = 2

STORY_FACTORS = {1: 1.0, 2: 1.25, 3: 1.5}
SHAPE_FACTORS = {
    "gable": 1.0, "shed": 1.0, "flat": 1.0,
    "hip": 1.15, "mansard": 1.3, "gambrel": 1.3,
}


def pitch_labor_factor(pitch: float) -> float:
    """Labor multiplier for a pitch of `pitch` in 12."""
    if pitch >= 10:
        return 1.6
    if pitch >= 8:
        return 1.35
    if pitch >= 6:
        return 1.15
    return 1.0


FIELDS = [
    FieldSpec(name="roof_area", label="Roof area", unit="sq ft"),
    FieldSpec(name="roof_type", label="Roof shape", kind=FieldKind.CHOICE,
              choices=list(SHAPE_FACTORS), default="gable"),
    FieldSpec(name="material", label="Covering", kind=FieldKind.CHOICE,
              choices=list(ROOFING_MATERIALS), default="asphalt"),
    FieldSpec(name="pitch", label="Pitch (in 12)", default=6, minimum=1, maximum=12),
    FieldSpec(name="stories", label="Stories", choices=list(STORY_FACTORS), default=1, integer=True),
    FieldSpec(name="tear_off_layers", label="Layers to tear off", default=0, integer=True, maximum=3),
    FieldSpec(name="chimneys", label="Chimneys", default=0, integer=True),
    FieldSpec(name="skylights", label="Skylights", default=0, integer=True),
    FieldSpec(name="valleys", label="Valleys", default=0, integer=True),
    FieldSpec(name="include_ice_shield", label="Ice & water shield", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="include_ventilation", label="Ridge & soffit ventilation", kind=FieldKind.BOOLEAN,
              default=False),
    FieldSpec(name="include_warranty", label="Extended warranty", kind=FieldKind.BOOLEAN, default=False),
]

MATERIALS = (
    [material_key("roofing", material) for material in ROOFING_MATERIALS]
    + ["roof_underlayment", "ice_water_shield", "ridge_cap", "drip_edge", "roof_starter_bundle",
       "pipe_boot", "roofing_fasteners", "valley_flashing", "roof_ventilation", "roof_warranty",
       "roof_disposal", "roofing_labor"]
)


def derive(fields: dict, ctx: TakeoffContext) -> list:
    area = fields["roof_area"]
    squares = area / SQ_FT_PER_SQUARE
    covering_key = material_key("roofing", fields["material"])

    items = [
        ctx.measure("Roof Area", area, "sq ft"),
        ctx.price(ctx.name(covering_key), squares, "squares", covering_key),
        ctx.price("Synthetic Underlayment", squares, "squares", "roof_underlayment"),
    ]
    if fields["include_ice_shield"]:
        items.append(ctx.price("Ice & Water Shield", area_to_sheets(area, ICE_SHIELD_ROLL_SQ_FT),
                               "rolls", "ice_water_shield"))

    drip_edge_ft = math.sqrt(area) * 4
    items += [
        ctx.price("Ridge Cap Shingles", area * RIDGE_FT_PER_SQ_FT, "linear feet", "ridge_cap"),
        ctx.price("Drip Edge", drip_edge_ft, "linear feet", "drip_edge"),
        ctx.price("Starter Strips", math.ceil(drip_edge_ft / STARTER_BUNDLE_FT), "bundles",
                  "roof_starter_bundle"),
        ctx.price("Pipe Boots", 4 if area > LARGE_ROOF_SQ_FT else 2, "each", "pipe_boot"),
        ctx.price("Nails & Fasteners", squares, "squares", "roofing_fasteners"),
    ]

    pitch = pitch_labor_factor(fields["pitch"])
    story = STORY_FACTORS[fields["stories"]]
    shape = SHAPE_FACTORS[fields["roof_type"]]
    install_hours = squares * INSTALL_HOURS_PER_SQUARE * pitch * story * shape
    items.append(ctx.price("Installation Labor", install_hours, "hours", "roofing_labor"))

    layers = fields["tear_off_layers"]
    if layers:
        tear_off_hours = squares * TEAR_OFF_HOURS_PER_SQUARE * layers * pitch * story
        plural = "s" if layers > 1 else ""
        items.append(ctx.price(f"Tear-Off Labor ({layers} layer{plural})", tear_off_hours, "hours",
                               "roofing_labor"))

    # flashing around penetrations is labor only
    rate = ctx.unit_price("roofing_labor")
    if fields["chimneys"]:
        chimneys = fields["chimneys"]
        items.append(ctx.pricer.price_cost("Chimney Flashing", chimneys, "chimneys",
                                           chimneys * CHIMNEY_FLASHING_HOURS * rate))
    if fields["skylights"]:
        skylights = fields["skylights"]
        items.append(ctx.pricer.price_cost("Skylight Flashing", skylights, "skylights",
                                           skylights * SKYLIGHT_FLASHING_HOURS * rate))
    if fields["valleys"]:
        items.append(ctx.price("Valley Flashing", fields["valleys"] * VALLEY_FT, "linear feet",
                               "valley_flashing"))

    if fields["include_ventilation"]:
        items.append(ctx.price("Ventilation System (Ridge & Soffit)", 1, "system", "roof_ventilation"))
    if fields["include_warranty"]:
        items.append(ctx.price("Extended Manufacturer Warranty", squares, "squares", "roof_warranty"))
    if layers:
        items.append(ctx.price("Debris Disposal", squares, "squares", "roof_disposal"))

    return items
