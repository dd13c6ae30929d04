"""
Tile takeoff for a floor or a single wall.

Tile count comes from the tile face in square inches; setting materials
(mortar, grout) follow the area with waste, substrate materials (backer
board, membrane) follow the net area. Openings are entered as one total
area to subtract.
"""

import math

from ..schemas import FieldKind, FieldSpec
from ..units import area_to_sheets, count_to_packages, square_inches_to_square_feet
from .base import TakeoffContext

MORTAR_SQ_FT_PER_BAG = 90
BACKER_SHEET_SQ_FT = 15  # 3x5
BACKER_SCREWS_PER_SHEET = 30
SCREWS_PER_BOX = 100
MEMBRANE_ROLL_SQ_FT = 100
EDGE_PIECE_FT = 8

PATTERN_FACTORS = {
    "straight": 1.1,
    "diagonal": 1.15,
    "herringbone": 1.2,
    "brick": 1.1,
    "basketweave": 1.15,
}

# joint width (in) → sq ft per bag
GROUT_COVERAGE = {0.125: 200, 0.25: 150, 0.375: 100}

MORTAR_TYPES = ["modified", "unmodified", "epoxy"]
GROUT_TYPES = ["sanded", "unsanded", "epoxy"]

FIELDS = [
    FieldSpec(name="surface", label="Surface", kind=FieldKind.CHOICE,
              choices=["floor", "wall"], default="floor"),
    FieldSpec(name="input_mode", label="Measure by", kind=FieldKind.CHOICE,
              choices=["dimensions", "area"], default="dimensions"),
    FieldSpec(name="length", label="Length", unit="ft", enabled_by="input_mode", enabled_when="dimensions"),
    FieldSpec(name="width", label="Width (floor) or height (wall)", unit="ft",
              enabled_by="input_mode", enabled_when="dimensions"),
    FieldSpec(name="area", label="Area", unit="sq ft", enabled_by="input_mode", enabled_when="area"),
    FieldSpec(name="opening_area", label="Openings to subtract", unit="sq ft", default=0),
    FieldSpec(name="tile_width", label="Tile width", unit="in", default=12),
    FieldSpec(name="tile_length", label="Tile length", unit="in", default=12),
    FieldSpec(name="pieces_per_box", label="Tiles per box", default=12, integer=True, minimum=1),
    FieldSpec(name="price_per_box", label="Price per box", unit="USD", default=45.98),
    FieldSpec(name="pattern", label="Pattern", kind=FieldKind.CHOICE,
              choices=list(PATTERN_FACTORS), default="straight"),
    FieldSpec(name="waste_pct", label="Waste", unit="%", choices=[10, 15, 20], default=15),
    FieldSpec(name="mortar_type", label="Mortar", kind=FieldKind.CHOICE,
              choices=MORTAR_TYPES, default="modified"),
    FieldSpec(name="grout_type", label="Grout", kind=FieldKind.CHOICE,
              choices=GROUT_TYPES, default="sanded"),
    FieldSpec(name="grout_width", label="Grout joint", unit="in", choices=list(GROUT_COVERAGE), default=0.25),
    FieldSpec(name="include_backer_board", label="Backer board", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="backer_thickness", label="Backer board thickness", kind=FieldKind.CHOICE,
              choices=["1/4", "1/2"], default="1/4", enabled_by="include_backer_board"),
    FieldSpec(name="include_membrane", label="Waterproof membrane", kind=FieldKind.BOOLEAN, default=False),
    FieldSpec(name="include_edging", label="Edge trim", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="edging_type", label="Edge trim", kind=FieldKind.CHOICE,
              choices=["metal", "stone"], default="metal", enabled_by="include_edging"),
]

MATERIALS = (
    [f"mortar_{kind}" for kind in MORTAR_TYPES]
    + [f"grout_{kind}" for kind in GROUT_TYPES]
    + ["backer_board_1_4", "backer_board_1_2", "backer_screws_box", "tile_membrane",
       "tile_edge_metal", "tile_edge_stone"]
)


def derive(fields: dict, ctx: TakeoffContext) -> list:
    by_dimensions = fields["input_mode"] == "dimensions"
    if by_dimensions:
        gross = fields["length"] * fields["width"]
    else:
        gross = fields["area"]
    net = max(gross - fields["opening_area"], 0.0)

    waste, pattern = fields["waste_pct"], fields["pattern"]
    covered = net * (1 + waste / 100.0) * PATTERN_FACTORS[pattern]

    tile_w, tile_l = fields["tile_width"], fields["tile_length"]
    tile_sq_ft = square_inches_to_square_feet(tile_w * tile_l)
    tiles = area_to_sheets(covered, tile_sq_ft)
    boxes = count_to_packages(tiles, fields["pieces_per_box"])

    items = [
        ctx.measure("Total Surface Area", net, "square feet"),
        ctx.measure(f"Area with {waste:g}% Waste & {pattern} Pattern", covered, "square feet"),
        ctx.measure("Tiles Needed", tiles, "tiles"),
        ctx.price_at(f'Tile ({tile_w:g}"x{tile_l:g}")', boxes, "boxes", fields["price_per_box"]),
    ]

    mortar = fields["mortar_type"]
    items.append(ctx.price(f"{mortar.capitalize()} Mortar", area_to_sheets(covered, MORTAR_SQ_FT_PER_BAG),
                           "50lb bags", f"mortar_{mortar}"))
    grout, joint = fields["grout_type"], fields["grout_width"]
    items.append(ctx.price(f'{grout.capitalize()} Grout ({joint:g}" joints)',
                           area_to_sheets(covered, GROUT_COVERAGE[joint]), "25lb bags", f"grout_{grout}"))

    if fields["include_backer_board"]:
        thickness = fields["backer_thickness"]
        sheets = area_to_sheets(net, BACKER_SHEET_SQ_FT)
        items.append(ctx.price(f'{thickness}" Backer Board', sheets, "3x5 sheets",
                               f"backer_board_{thickness.replace('/', '_')}"))
        items.append(ctx.price("Backer Board Screws",
                               count_to_packages(sheets * BACKER_SCREWS_PER_SHEET, SCREWS_PER_BOX),
                               "100ct boxes", "backer_screws_box"))

    if fields["include_membrane"]:
        items.append(ctx.price("Waterproof Membrane", area_to_sheets(net, MEMBRANE_ROLL_SQ_FT),
                               "100sf rolls", "tile_membrane"))

    # edges are only known when the surface was measured
    if fields["include_edging"] and by_dimensions:
        length, width = fields["length"], fields["width"]
        edge_ft = 2 * (length + width) if fields["surface"] == "floor" else length + width
        edging = fields["edging_type"]
        items.append(ctx.price(f"{edging.capitalize()} Edge Trim", math.ceil(edge_ft / EDGE_PIECE_FT),
                               "8ft pieces", f"tile_edge_{edging}"))

    return items
