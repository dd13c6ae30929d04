"""
Siding takeoff over a set of walls of equal height.

Walls are entered as a total length, a count and a common height. Gable
ends add a triangle each. Doors, windows and garage doors are counts of
standard openings; their area is subtracted and their perimeter drives
J-channel and trim.
"""

import math

from ..quantities import area_with_waste
from ..schemas import FieldKind, FieldSpec
from ..units import area_to_sheets, count_to_packages
from .base import TakeoffContext
from .material_lookup import SIDING_PRICES, material_key

SQ_FT_PER_SQUARE = 100
HOUSE_WRAP_ROLL_SQ_FT = 1000
WRAP_TAPE_ROLL_FT = 165
INSULATION_BUNDLE_SQ_FT = 100
STARTER_PIECE_FT = 12
J_CHANNEL_PIECE_FT = 12.5
CORNER_POST_FT = 10
CORNERS = 4
TRIM_PIECE_FT = 16
FASTENERS_PER_SQUARE = 250
FASTENERS_PER_BOX = 1000

# (width, height) in feet
OPENING_SIZES = {
    "door_count": (3, 6.67),
    "window_count": (3, 4),
    "garage_door_count": (16, 7),
}

PROFILES = ["lap", "dutch-lap", "vertical", "shake"]
TRIM_TYPES = ["vinyl", "wood", "aluminum", "fiber-cement"]

FIELDS = [
    FieldSpec(name="wall_length", label="Total wall length", unit="ft"),
    FieldSpec(name="wall_height", label="Wall height", unit="ft"),
    FieldSpec(name="wall_count", label="Walls", default=4, integer=True, minimum=1),
    FieldSpec(name="include_gables", label="Gable ends", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="gable_count", label="Gables", default=2, integer=True, enabled_by="include_gables"),
    FieldSpec(name="gable_width", label="Gable width", unit="ft", enabled_by="include_gables"),
    FieldSpec(name="gable_height", label="Gable height", unit="ft", enabled_by="include_gables"),
    FieldSpec(name="door_count", label="Doors", default=0, integer=True),
    FieldSpec(name="window_count", label="Windows", default=0, integer=True),
    FieldSpec(name="garage_door_count", label="Garage doors", default=0, integer=True),
    FieldSpec(name="siding_type", label="Siding", kind=FieldKind.CHOICE,
              choices=list(SIDING_PRICES), default="vinyl"),
    FieldSpec(name="siding_profile", label="Profile", kind=FieldKind.CHOICE, choices=PROFILES, default="lap"),
    FieldSpec(name="waste_pct", label="Waste", unit="%", choices=[10, 15, 20], default=15),
    FieldSpec(name="include_house_wrap", label="House wrap", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="include_insulation", label="Foam insulation", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="include_starter", label="Starter strip", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="include_j_channel", label="J-channel", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="include_corners", label="Corner posts", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="include_trim", label="Opening trim", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="trim_type", label="Trim", kind=FieldKind.CHOICE, choices=TRIM_TYPES, default="vinyl",
              enabled_by="include_trim"),
]

MATERIALS = (
    [material_key("siding", kind, profile) for kind in SIDING_PRICES for profile in PROFILES]
    + [material_key("siding_trim", kind) for kind in TRIM_TYPES]
    + ["house_wrap_roll", "house_wrap_tape", "siding_foam_insulation", "siding_starter_strip",
       "j_channel", "siding_corner_post", "siding_fasteners_box"]
)


def derive(fields: dict, ctx: TakeoffContext) -> list:
    length, height = fields["wall_length"], fields["wall_height"]
    gross = length * height
    if fields["include_gables"]:
        gross += fields["gable_count"] * fields["gable_width"] * fields["gable_height"] / 2

    opening_area = 0.0
    opening_perimeter = 0.0
    for name, (width, tall) in OPENING_SIZES.items():
        count = fields[name]
        opening_area += count * width * tall
        opening_perimeter += count * 2 * (width + tall)

    net = max(gross - opening_area, 0.0)
    # every wall is outlined on its own
    perimeter = 2 * (length + fields["wall_count"] * height)
    squares = area_to_sheets(area_with_waste(net, fields["waste_pct"]), SQ_FT_PER_SQUARE)

    siding_key = material_key("siding", fields["siding_type"], fields["siding_profile"])
    items = [
        ctx.measure("Total Wall Area", net, "square feet"),
        ctx.price(ctx.name(siding_key), squares, "squares", siding_key),
    ]

    if fields["include_house_wrap"]:
        items.append(ctx.price("House Wrap", area_to_sheets(net, HOUSE_WRAP_ROLL_SQ_FT),
                               "1000sf rolls", "house_wrap_roll"))
        items.append(ctx.price("House Wrap Tape", area_to_sheets(perimeter, WRAP_TAPE_ROLL_FT),
                               "rolls", "house_wrap_tape"))
    if fields["include_insulation"]:
        items.append(ctx.price("Foam Insulation Board", area_to_sheets(net, INSULATION_BUNDLE_SQ_FT),
                               "bundles", "siding_foam_insulation"))
    if fields["include_starter"]:
        items.append(ctx.price("Starter Strip", math.ceil(perimeter / STARTER_PIECE_FT),
                               "12ft pieces", "siding_starter_strip"))
    if fields["include_j_channel"]:
        items.append(ctx.price("J-Channel", math.ceil((opening_perimeter + perimeter) / J_CHANNEL_PIECE_FT),
                               "12.5ft pieces", "j_channel"))
    if fields["include_corners"]:
        items.append(ctx.price("Corner Posts", math.ceil(height * CORNERS / CORNER_POST_FT),
                               "10ft pieces", "siding_corner_post"))
    if fields["include_trim"] and opening_perimeter:
        trim_key = material_key("siding_trim", fields["trim_type"])
        items.append(ctx.price(ctx.name(trim_key), math.ceil(opening_perimeter / TRIM_PIECE_FT),
                               "16ft pieces", trim_key))

    boxes = count_to_packages(squares * FASTENERS_PER_SQUARE, FASTENERS_PER_BOX)
    items.append(ctx.price("Siding Fasteners", boxes, "1000ct boxes", "siding_fasteners_box"))
    return items
