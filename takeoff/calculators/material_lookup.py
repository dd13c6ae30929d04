"""
Material catalog with price-override fallback chain:
1. Supplier overrides from data/price_overrides.json (or PRICE_OVERRIDES_PATH)
2. Default prices in this file (big-box retail averages)

Stock items are priced per piece for each available length (feet).
Everything else carries a single unit_price in its own unit.

The catalog is immutable once built and shared by every calculation.
"""

import json
import logging
import os
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, Field

from ..config import settings

logger = logging.getLogger(__name__)

_DEFAULT_OVERRIDES_PATH = os.path.join(
    os.path.dirname(__file__), "..", "..", "data", "price_overrides.json"
)


class MaterialFamily(BaseModel):
    """
    A class of materials that share stock-selection behavior.

    utilization_band: when set, StockCutOptimizer prefers stock whose
    length / run ratio falls inside [low, high].
    """
    key: str
    name: str
    utilization_band: Optional[Tuple[float, float]] = None

    class Config:
        frozen = True


class CatalogEntry(BaseModel):
    key: str
    name: str
    family: str
    unit: str = "ea"
    stock_prices: Dict[float, float] = Field(default_factory=dict)
    unit_price: Optional[float] = None
    max_span_ft: Optional[float] = None
    attributes: Dict[str, float] = Field(default_factory=dict)

    class Config:
        frozen = True


# --- Families ---

FAMILIES = {
    "lumber": {"name": "Dimensional lumber"},
    "wood_decking": {"name": "Wood decking"},
    "composite": {"name": "Composite decking", "composite": True},
    "pvc": {"name": "PVC trim"},
    "metal": {"name": "Metal stock"},
    "gutter": {"name": "Gutter & downspout"},
    "concrete": {"name": "Concrete & reinforcement"},
    "aggregate": {"name": "Bulk aggregate"},
    "masonry": {"name": "Block & pavers"},
    "fencing": {"name": "Fencing"},
    "sheet_goods": {"name": "Sheet goods"},
    "hardware": {"name": "Hardware & fasteners"},
    "finish": {"name": "Drywall finishing"},
    "flooring": {"name": "Flooring"},
    "tile": {"name": "Tile setting"},
    "paint": {"name": "Paint & coatings"},
    "siding": {"name": "Siding"},
    "roofing": {"name": "Roofing"},
}

_DECK_LENGTHS = (12.0, 16.0, 20.0)


def _lengths(*prices: float) -> dict:
    return dict(zip(_DECK_LENGTHS, prices))


# --- Stock-length materials (price per piece, by length in feet) ---

STOCK_MATERIALS = {
    # Decking boards: width/gap in inches
    "decking_5_4": {"name": "5/4\" Deck Board", "family": "wood_decking",
                    "prices": _lengths(15.98, 21.98, 27.98),
                    "attributes": {"width_in": 5.5, "gap_in": 0.125}},
    "decking_2x6_pt": {"name": "2x6 PT Lumber", "family": "wood_decking",
                       "prices": _lengths(12.98, 17.98, 22.98),
                       "attributes": {"width_in": 5.5, "gap_in": 0.25}},
    "decking_trex_enhance_basic": {"name": "Trex Enhance Basic", "family": "composite",
                                   "prices": _lengths(29.28, 39.04, 48.80),
                                   "attributes": {"width_in": 5.5, "gap_in": 0.25}},
    "decking_trex_enhance_natural": {"name": "Trex Enhance Natural", "family": "composite",
                                     "prices": _lengths(40.92, 54.56, 68.20),
                                     "attributes": {"width_in": 5.5, "gap_in": 0.25}},
    "decking_trex_select": {"name": "Trex Select", "family": "composite",
                            "prices": _lengths(54.24, 72.32, 90.40),
                            "attributes": {"width_in": 5.5, "gap_in": 0.25}},
    "decking_trex_transcend": {"name": "Trex Transcend", "family": "composite",
                               "prices": _lengths(81.60, 108.80, 136.00),
                               "attributes": {"width_in": 5.5, "gap_in": 0.25}},
    "decking_trex_lineage": {"name": "Trex Lineage", "family": "composite",
                             "prices": _lengths(93.84, 125.12, 156.40),
                             "attributes": {"width_in": 5.5, "gap_in": 0.25}},
    "decking_custom": {"name": "Decking Boards", "family": "wood_decking",
                       "prices": _lengths(15.98, 21.98, 27.98),
                       "attributes": {"width_in": 5.5, "gap_in": 0.125}},
    # Framing lumber (joists, beams, stringers)
    "lumber_2x6": {"name": "2x6", "family": "lumber", "prices": _lengths(12.98, 17.98, 22.98)},
    "lumber_2x8": {"name": "2x8", "family": "lumber", "prices": _lengths(17.98, 23.98, 29.98)},
    "lumber_2x10": {"name": "2x10", "family": "lumber", "prices": _lengths(24.98, 32.98, 41.98)},
    "lumber_2x12": {"name": "2x12", "family": "lumber", "prices": _lengths(32.98, 43.98, 54.98)},
    # Fascia: sold in 16 ft boards
    "fascia_pt_2x6": {"name": "Pressure Treated Fascia", "family": "lumber", "prices": {16.0: 12.98}},
    "fascia_pt_2x8": {"name": "Pressure Treated Fascia", "family": "lumber", "prices": {16.0: 17.98}},
    "fascia_pt_2x10": {"name": "Pressure Treated Fascia", "family": "lumber", "prices": {16.0: 24.98}},
    "fascia_pt_2x12": {"name": "Pressure Treated Fascia", "family": "lumber", "prices": {16.0: 32.98}},
    "fascia_azek_2x6": {"name": "Azek PVC Fascia", "family": "pvc", "prices": {16.0: 45.98}},
    "fascia_azek_2x8": {"name": "Azek PVC Fascia", "family": "pvc", "prices": {16.0: 59.98}},
    "fascia_azek_2x10": {"name": "Azek PVC Fascia", "family": "pvc", "prices": {16.0: 79.98}},
    "fascia_azek_2x12": {"name": "Azek PVC Fascia", "family": "pvc", "prices": {16.0: 99.98}},
    "fascia_metal_2x6": {"name": "Metal Stock Fascia", "family": "metal", "prices": {16.0: 29.98}},
    "fascia_metal_2x8": {"name": "Metal Stock Fascia", "family": "metal", "prices": {16.0: 39.98}},
    "fascia_metal_2x10": {"name": "Metal Stock Fascia", "family": "metal", "prices": {16.0: 49.98}},
    "fascia_metal_2x12": {"name": "Metal Stock Fascia", "family": "metal", "prices": {16.0: 59.98}},
    # Reinforcement: 20 ft bars
    "rebar_flatwork": {"name": "Rebar", "family": "concrete", "prices": {20.0: 8.98}},
    "rebar_wall": {"name": "Rebar", "family": "concrete", "prices": {20.0: 12.98}},
    # Timber walls: 8 ft lengths
    "timber_6x6_pt": {"name": "6x6 Pressure Treated Timbers", "family": "lumber", "prices": {8.0: 24.98}},
}

# --- Unit-priced materials ---

UNIT_MATERIALS = {
    # Deck hardware
    "joist_hanger": {"name": "Joist Hangers", "family": "hardware", "unit": "ea", "price": 1.98},
    "hurricane_tie": {"name": "Hurricane Ties", "family": "hardware", "unit": "ea", "price": 1.25},
    "deck_screws_box": {"name": "Deck Screws", "family": "hardware", "unit": "1000ct box", "price": 39.98},
    "post_base": {"name": "Post Bases", "family": "hardware", "unit": "ea", "price": 12.98},
    "railing_pt": {"name": "PT Railing", "family": "lumber", "unit": "linear ft", "price": 12.98},
    "railing_trex": {"name": "TREX Railing", "family": "composite", "unit": "linear ft", "price": 45.98},
    "railing_post_pt": {"name": "PT Railing Posts", "family": "lumber", "unit": "ea", "price": 24.98},
    "railing_post_trex": {"name": "TREX Railing Posts", "family": "composite", "unit": "ea", "price": 89.98},
    # Framing
    "stud_2x4": {"name": "2x4", "family": "lumber", "unit": "ea", "price": 3.98},
    "stud_2x6": {"name": "2x6", "family": "lumber", "unit": "ea", "price": 5.98},
    "sheathing_osb_7_16": {"name": "OSB Sheathing (7/16\")", "family": "sheet_goods", "unit": "4x8 sheet", "price": 15.98},
    "sheathing_osb_15_32": {"name": "OSB Sheathing (15/32\")", "family": "sheet_goods", "unit": "4x8 sheet", "price": 18.98},
    "sheathing_osb_19_32": {"name": "OSB Sheathing (19/32\")", "family": "sheet_goods", "unit": "4x8 sheet", "price": 22.98},
    "sheathing_plywood_7_16": {"name": "PLYWOOD Sheathing (7/16\")", "family": "sheet_goods", "unit": "4x8 sheet", "price": 24.98},
    "sheathing_plywood_15_32": {"name": "PLYWOOD Sheathing (15/32\")", "family": "sheet_goods", "unit": "4x8 sheet", "price": 28.98},
    "sheathing_plywood_19_32": {"name": "PLYWOOD Sheathing (19/32\")", "family": "sheet_goods", "unit": "4x8 sheet", "price": 32.98},
    "tiedown": {"name": "Tie-downs", "family": "hardware", "unit": "ea", "price": 12.98},
    "framing_nails_box": {"name": "3\" Passlode Hot-Dipped Nails", "family": "hardware", "unit": "1000ct box", "price": 89.98},
    # Concrete
    "concrete_bag_80lb": {"name": "Bags of Concrete", "family": "concrete", "unit": "80lb bag", "price": 6.98},
    "concrete_bag_60lb": {"name": "Concrete Mix", "family": "concrete", "unit": "60lb bag", "price": 6.98},
    "ready_mix": {"name": "Ready-Mix Concrete", "family": "concrete", "unit": "cubic yard", "price": 185.00},
    "ready_mix_short_load_fee": {"name": "Short Load Fee", "family": "concrete", "unit": "ea", "price": 150.00},
    "wire_mesh_6x6": {"name": "6x6 Wire Mesh", "family": "concrete", "unit": "100sf sheet", "price": 12.98},
    "wire_mesh_4x4": {"name": "4x4 Wire Mesh", "family": "concrete", "unit": "100sf sheet", "price": 16.98},
    # Aggregate (per cubic yard)
    "gravel_base": {"name": "Gravel Base Material", "family": "aggregate", "unit": "cubic yard", "price": 45.00},
    "drainage_gravel": {"name": "Drainage Gravel", "family": "aggregate", "unit": "cubic yard", "price": 55.00},
    "bedding_sand": {"name": "Sand", "family": "aggregate", "unit": "cubic yard", "price": 55.00},
    "bedding_stone_dust": {"name": "Stone Dust", "family": "aggregate", "unit": "cubic yard", "price": 55.00},
    "bedding_3_8_stone": {"name": "3/8 Stone", "family": "aggregate", "unit": "cubic yard", "price": 55.00},
    "polymeric_sand_bag": {"name": "Polymeric Sand", "family": "aggregate", "unit": "60lb bag", "price": 45.00},
    # Retaining walls: block face sizes in inches
    "block_standard": {"name": "Retaining Wall Blocks (standard)", "family": "masonry", "unit": "block", "price": 5.98,
                       "attributes": {"width_in": 12, "height_in": 8, "depth_in": 12, "weight_lbs": 38}},
    "block_pinned": {"name": "Retaining Wall Blocks (pinned)", "family": "masonry", "unit": "block", "price": 6.98,
                     "attributes": {"width_in": 16, "height_in": 6, "depth_in": 12, "weight_lbs": 42}},
    "block_gravity": {"name": "Retaining Wall Blocks (gravity)", "family": "masonry", "unit": "block", "price": 12.98,
                      "attributes": {"width_in": 18, "height_in": 8, "depth_in": 24, "weight_lbs": 82}},
    "capstone": {"name": "Capstone Blocks", "family": "masonry", "unit": "ea", "price": 8.98},
    "wall_concrete": {"name": "Concrete Needed", "family": "concrete", "unit": "cubic yard", "price": 185.00},
    "drain_pipe": {"name": "Drainage Pipe", "family": "hardware", "unit": "10ft section", "price": 8.98},
    "geogrid_roll": {"name": "Geogrid Reinforcement", "family": "sheet_goods", "unit": "200sf roll", "price": 89.98},
    "filter_fabric_roll": {"name": "Filter Fabric", "family": "sheet_goods", "unit": "300sf roll", "price": 45.98},
    # Paver edging
    "edge_block_4x8": {"name": "Edge Blocks", "family": "masonry", "unit": "ea", "price": 1.50},
    "edge_block_6x9": {"name": "Edge Blocks", "family": "masonry", "unit": "ea", "price": 2.00},
    "edge_block_6x12": {"name": "Edge Blocks", "family": "masonry", "unit": "ea", "price": 2.25},
    "edge_block_custom": {"name": "Edge Blocks", "family": "masonry", "unit": "ea", "price": 2.00},
    # Gutters
    "downspout_2x3": {"name": "2x3 Downspouts", "family": "gutter", "unit": "linear ft", "price": 3.98},
    "downspout_3x4": {"name": "3x4 Downspouts", "family": "gutter", "unit": "linear ft", "price": 5.98},
    "gutter_endcap": {"name": "Endcaps", "family": "gutter", "unit": "ea", "price": 4.98},
    "gutter_endcap_copper": {"name": "Endcaps", "family": "gutter", "unit": "ea", "price": 12.98},
    "gutter_corner": {"name": "Inside/Outside Corners", "family": "gutter", "unit": "ea", "price": 8.98},
    "gutter_corner_copper": {"name": "Inside/Outside Corners", "family": "gutter", "unit": "ea", "price": 24.98},
    "leaf_guard": {"name": "Leaf Guards", "family": "gutter", "unit": "linear ft", "price": 4.98},
    "leaf_guard_copper": {"name": "Leaf Guards", "family": "gutter", "unit": "linear ft", "price": 8.98},
    "heat_tape": {"name": "Heat Tape", "family": "gutter", "unit": "linear ft", "price": 6.98},
    "gutter_hanger": {"name": "Hangers and Hardware", "family": "gutter", "unit": "ea", "price": 1.98},
    "gutter_hanger_copper": {"name": "Hangers and Hardware", "family": "gutter", "unit": "ea", "price": 3.98},
    # Fence mounting & extras
    "post_spike": {"name": "Post Spikes", "family": "hardware", "unit": "ea", "price": 12.98},
    "post_bracket": {"name": "Post Mounting Brackets", "family": "hardware", "unit": "ea", "price": 14.98},
    "kickboard": {"name": "Kickboard", "family": "lumber", "unit": "8ft piece", "price": 8.98},
    "gate_hardware_single": {"name": "Single Gate Hardware", "family": "hardware", "unit": "set", "price": 49.98},
    "gate_hardware_double": {"name": "Double Gate Hardware", "family": "hardware", "unit": "set", "price": 89.98},
    "gate_hardware_rolling": {"name": "Rolling Gate Hardware", "family": "hardware", "unit": "set", "price": 149.98},
    # Drywall: sheet_sq_ft per sheet
    "drywall_4x8_1_2": {"name": "4x8 Drywall Sheets (1/2\")", "family": "sheet_goods", "unit": "sheet", "price": 15.98,
                        "attributes": {"sheet_sq_ft": 32}},
    "drywall_4x8_5_8": {"name": "4x8 Drywall Sheets (5/8\")", "family": "sheet_goods", "unit": "sheet", "price": 17.98,
                        "attributes": {"sheet_sq_ft": 32}},
    "drywall_4x12_1_2": {"name": "4x12 Drywall Sheets (1/2\")", "family": "sheet_goods", "unit": "sheet", "price": 15.98,
                         "attributes": {"sheet_sq_ft": 48}},
    "drywall_4x12_5_8": {"name": "4x12 Drywall Sheets (5/8\")", "family": "sheet_goods", "unit": "sheet", "price": 17.98,
                         "attributes": {"sheet_sq_ft": 48}},
    "drywall_screws_box": {"name": "Drywall Screws", "family": "hardware", "unit": "100ct box", "price": 8.98},
    "joint_compound": {"name": "Joint Compound", "family": "finish", "unit": "5-gallon bucket", "price": 19.98},
    "joint_tape": {"name": "Joint Tape", "family": "finish", "unit": "roll", "price": 4.98},
    # Flooring underlayment (100 sq ft rolls) and trim
    "underlayment_standard": {"name": "Standard Foam", "family": "flooring", "unit": "100sf roll", "price": 45.00},
    "underlayment_premium": {"name": "Premium Foam with Vapor Barrier", "family": "flooring", "unit": "100sf roll", "price": 75.00},
    "underlayment_moisture_barrier": {"name": "Moisture Barrier", "family": "flooring", "unit": "100sf roll", "price": 35.00},
    "transition_strip": {"name": "Transition Strips", "family": "flooring", "unit": "4ft piece", "price": 19.98},
    # Tile setting materials
    "mortar_modified": {"name": "Modified Mortar", "family": "tile", "unit": "50lb bag", "price": 24.98},
    "mortar_unmodified": {"name": "Unmodified Mortar", "family": "tile", "unit": "50lb bag", "price": 19.98},
    "mortar_epoxy": {"name": "Epoxy Mortar", "family": "tile", "unit": "50lb bag", "price": 89.98},
    "grout_sanded": {"name": "Sanded Grout", "family": "tile", "unit": "25lb bag", "price": 19.98},
    "grout_unsanded": {"name": "Unsanded Grout", "family": "tile", "unit": "25lb bag", "price": 22.98},
    "grout_epoxy": {"name": "Epoxy Grout", "family": "tile", "unit": "25lb bag", "price": 79.98},
    "backer_board_1_4": {"name": "1/4\" Backer Board", "family": "sheet_goods", "unit": "3x5 sheet", "price": 15.98},
    "backer_board_1_2": {"name": "1/2\" Backer Board", "family": "sheet_goods", "unit": "3x5 sheet", "price": 19.98},
    "backer_screws_box": {"name": "Backer Board Screws", "family": "hardware", "unit": "100ct box", "price": 12.98},
    "tile_membrane": {"name": "Waterproof Membrane", "family": "tile", "unit": "100sf roll", "price": 89.98},
    "tile_edge_metal": {"name": "Metal Edge Trim", "family": "tile", "unit": "8ft piece", "price": 12.98},
    "tile_edge_stone": {"name": "Stone Edge Trim", "family": "tile", "unit": "8ft piece", "price": 24.98},
    # Paint extras
    "primer_interior": {"name": "Primer", "family": "paint", "unit": "gallon", "price": 25.98,
                        "attributes": {"coverage_sq_ft": 400}},
    "primer_exterior": {"name": "Primer", "family": "paint", "unit": "gallon", "price": 30.98,
                        "attributes": {"coverage_sq_ft": 400}},
    "paint_supplies": {"name": "Painting Supplies", "family": "paint", "unit": "kit", "price": 25.00},
    # Siding accessories
    "house_wrap_roll": {"name": "House Wrap", "family": "siding", "unit": "1000sf roll", "price": 159.98},
    "house_wrap_tape": {"name": "House Wrap Tape", "family": "siding", "unit": "165ft roll", "price": 12.98},
    "siding_foam_insulation": {"name": "Foam Insulation Board", "family": "siding", "unit": "100sf bundle", "price": 49.98},
    "siding_starter_strip": {"name": "Starter Strip", "family": "siding", "unit": "12ft piece", "price": 13.98},
    "j_channel": {"name": "J-Channel", "family": "siding", "unit": "12.5ft piece", "price": 17.98},
    "siding_corner_post": {"name": "Corner Posts", "family": "siding", "unit": "10ft piece", "price": 39.98},
    "siding_trim_vinyl": {"name": "Vinyl Trim", "family": "siding", "unit": "16ft piece", "price": 17.98},
    "siding_trim_wood": {"name": "Wood Trim", "family": "siding", "unit": "16ft piece", "price": 25.98},
    "siding_trim_aluminum": {"name": "Aluminum Trim", "family": "siding", "unit": "16ft piece", "price": 31.98},
    "siding_trim_fiber_cement": {"name": "Fiber Cement Trim", "family": "siding", "unit": "16ft piece", "price": 39.98},
    "siding_fasteners_box": {"name": "Siding Fasteners", "family": "hardware", "unit": "1000ct box", "price": 29.98},
    # Roofing accessories, per square unless noted
    "roof_underlayment": {"name": "Synthetic Underlayment", "family": "roofing", "unit": "square", "price": 26.00},
    "ice_water_shield": {"name": "Ice & Water Shield", "family": "roofing", "unit": "200sf roll", "price": 70.00},
    "ridge_cap": {"name": "Ridge Cap Shingles", "family": "roofing", "unit": "linear ft", "price": 3.25},
    "drip_edge": {"name": "Drip Edge", "family": "roofing", "unit": "linear ft", "price": 2.50},
    "roof_starter_bundle": {"name": "Starter Strips", "family": "roofing", "unit": "bundle", "price": 37.00},
    "pipe_boot": {"name": "Pipe Boots", "family": "roofing", "unit": "ea", "price": 12.00},
    "roofing_fasteners": {"name": "Nails & Fasteners", "family": "hardware", "unit": "square", "price": 32.00},
    "valley_flashing": {"name": "Valley Flashing", "family": "roofing", "unit": "linear ft", "price": 3.50},
    "roof_ventilation": {"name": "Ventilation System (Ridge & Soffit)", "family": "roofing", "unit": "system", "price": 625.00},
    "roof_warranty": {"name": "Extended Manufacturer Warranty", "family": "roofing", "unit": "square", "price": 27.00},
    "roof_disposal": {"name": "Debris Disposal", "family": "roofing", "unit": "square", "price": 32.00},
    "roofing_labor": {"name": "Roofing Labor", "family": "roofing", "unit": "hour", "price": 85.00},
    # Foundation
    "concrete_3000_psi": {"name": "Concrete (3000 PSI)", "family": "concrete", "unit": "cubic yard", "price": 125.00},
    "concrete_3500_psi": {"name": "Concrete (3500 PSI)", "family": "concrete", "unit": "cubic yard", "price": 135.00},
    "concrete_4000_psi": {"name": "Concrete (4000 PSI)", "family": "concrete", "unit": "cubic yard", "price": 145.00},
    "concrete_4500_psi": {"name": "Concrete (4500 PSI)", "family": "concrete", "unit": "cubic yard", "price": 155.00},
    "backfill_native": {"name": "Native Backfill", "family": "aggregate", "unit": "cubic yard", "price": 15.00},
    "backfill_gravel": {"name": "Gravel Backfill", "family": "aggregate", "unit": "cubic yard", "price": 45.00},
    "backfill_sand": {"name": "Sand Backfill", "family": "aggregate", "unit": "cubic yard", "price": 35.00},
    "vapor_barrier_roll": {"name": "10-mil Vapor Barrier", "family": "sheet_goods", "unit": "1000sf roll", "price": 89.98},
    "foundation_waterproofing": {"name": "Waterproofing Membrane", "family": "concrete", "unit": "gallon", "price": 45.98},
    "foundation_drain_pipe": {"name": "Drainage Pipe", "family": "hardware", "unit": "10ft section", "price": 12.98},
}

# Gutter runs: price per linear foot, max_span = max run per downspout
GUTTER_MATERIALS = {
    "aluminum": {"5": (4.98, 35), "6": (6.98, 40)},
    "vinyl": {"5": (3.98, 30), "6": (5.98, 35)},
    "galvanized": {"5": (7.98, 35), "6": (9.98, 40)},
    "copper": {"5": (24.98, 35), "6": (29.98, 40)},
}

# Fencing component prices: fence type → material → component → price
FENCE_MATERIALS = {
    "privacy": {
        "wood": {"panel": 45.98, "post": 24.98, "rail": 12.98, "cap": 4.98},
        "vinyl": {"panel": 89.98, "post": 34.98, "rail": 19.98, "cap": 6.98},
        "metal": {"panel": 79.98, "post": 29.98, "rail": 16.98, "cap": 5.98},
        "composite": {"panel": 129.98, "post": 49.98, "rail": 24.98, "cap": 8.98},
    },
    "picket": {
        "wood": {"picket": 2.98, "post": 19.98, "rail": 9.98, "cap": 3.98},
        "vinyl": {"picket": 4.98, "post": 29.98, "rail": 14.98, "cap": 5.98},
        "metal": {"picket": 3.98, "post": 24.98, "rail": 12.98, "cap": 4.98},
        "composite": {"picket": 6.98, "post": 39.98, "rail": 19.98, "cap": 7.98},
    },
    "chain-link": {
        "metal": {"fabric": 5.98, "post": 19.98, "rail": 8.98, "cap": 2.98},
    },
    "ranch": {
        "wood": {"rail": 14.98, "post": 24.98, "cap": 4.98},
        "vinyl": {"rail": 24.98, "post": 34.98, "cap": 6.98},
    },
    "panel": {
        "wood": {"panel": 69.98, "post": 24.98, "cap": 4.98},
        "vinyl": {"panel": 129.98, "post": 34.98, "cap": 6.98},
        "composite": {"panel": 189.98, "post": 49.98, "cap": 8.98},
    },
}

FENCE_COMPONENT_UNITS = {
    "panel": "8ft panel", "post": "post", "rail": "8ft piece",
    "cap": "cap", "picket": "picket", "fabric": "square yard",
}

GATE_PRICES = {
    "single": {"wood": 129.98, "vinyl": 199.98, "metal": 169.98, "composite": 249.98},
    "double": {"wood": 249.98, "vinyl": 399.98, "metal": 329.98, "composite": 499.98},
    "rolling": {"wood": 399.98, "vinyl": 599.98, "metal": 499.98, "composite": 799.98},
}

# Flooring sold by the box: key → (name, sq ft per box, price per box, needs underlayment)
FLOORING_PRODUCTS = {
    "oak_strip": ("3/4\" Oak Strip", 25, 159.98, False),
    "oak_plank": ("3/4\" Oak Plank", 25, 179.98, False),
    "engineered_oak": ("3/8\" Engineered Oak", 22, 129.98, True),
    "engineered_maple": ("1/2\" Engineered Maple", 20, 149.98, True),
    "laminate_8mm": ("8mm Laminate", 22.5, 49.98, True),
    "laminate_12mm": ("12mm Laminate", 17.5, 69.98, True),
    "lvp": ("Luxury Vinyl Plank", 23.64, 89.98, False),
    "wpc": ("WPC Vinyl Plank", 19.2, 109.98, False),
    "carpet_plush": ("Plush Carpet", 144, 359.98, True),
    "carpet_berber": ("Berber Carpet", 144, 299.98, True),
}

# Paint: location → grade → (price per gallon, sq ft per gallon)
PAINT_GRADES = {
    "interior": {"economy": (25.98, 400), "standard": (35.98, 400), "premium": (45.98, 400)},
    "exterior": {"economy": (30.98, 350), "standard": (40.98, 350), "premium": (50.98, 350)},
}

# Siding: price per square (100 sq ft), type → profile
SIDING_PRICES = {
    "vinyl": {"lap": 179.98, "dutch-lap": 199.98, "vertical": 219.98, "shake": 259.98},
    "fiber-cement": {"lap": 319.98, "dutch-lap": 339.98, "vertical": 359.98, "shake": 399.98},
    "wood": {"lap": 399.98, "dutch-lap": 419.98, "vertical": 439.98, "shake": 479.98},
    "metal": {"lap": 299.98, "dutch-lap": 319.98, "vertical": 279.98, "shake": 379.98},
    "engineered-wood": {"lap": 359.98, "dutch-lap": 379.98, "vertical": 399.98, "shake": 439.98},
}

# Roof coverings: price per square
ROOFING_MATERIALS = {
    "asphalt": ("Architectural Shingles", 130.00),
    "metal": ("Metal Roofing (Standing Seam)", 575.00),
    "tile": ("Clay/Concrete Tile", 450.00),
    "slate": ("Natural Slate", 800.00),
    "tpo": ("TPO Membrane", 280.00),
    "epdm": ("EPDM Rubber", 220.00),
    "wood": ("Cedar Wood Shakes", 400.00),
}


def material_key(prefix: str, *parts: str) -> str:
    """Catalog key for a table entry: ("siding", "fiber-cement", "lap") → siding_fiber_cement_lap."""
    return "_".join([prefix] + [part.replace("-", "_") for part in parts])


def _build_entries() -> Dict[str, dict]:
    """Flatten every default table into CatalogEntry kwargs."""
    entries = {}
    for key, data in STOCK_MATERIALS.items():
        entries[key] = {
            "key": key, "name": data["name"], "family": data["family"], "unit": "board",
            "stock_prices": dict(data["prices"]),
            "attributes": dict(data.get("attributes", {})),
        }
    for key, data in UNIT_MATERIALS.items():
        entries[key] = {
            "key": key, "name": data["name"], "family": data["family"], "unit": data["unit"],
            "unit_price": data["price"],
            "attributes": dict(data.get("attributes", {})),
        }
    for material, sizes in GUTTER_MATERIALS.items():
        for size, (price, span) in sizes.items():
            key = f"gutter_{material}_{size}"
            entries[key] = {
                "key": key, "name": f"{size}\" K-Style {material.capitalize()}", "family": "gutter",
                "unit": "linear ft", "unit_price": price, "max_span_ft": span,
            }
    for fence_type, materials in FENCE_MATERIALS.items():
        for material, components in materials.items():
            for component, price in components.items():
                key = f"fence_{fence_type}_{material}_{component}"
                entries[key] = {
                    "key": key, "name": f"{material.capitalize()} {component.capitalize()}s",
                    "family": "fencing", "unit": FENCE_COMPONENT_UNITS[component], "unit_price": price,
                }
    for gate_type, materials in GATE_PRICES.items():
        for material, price in materials.items():
            key = f"gate_{gate_type}_{material}"
            entries[key] = {
                "key": key, "name": f"{gate_type.capitalize()} Gate", "family": "fencing",
                "unit": "unit", "unit_price": price,
            }
    for product, (name, per_box, price, underlayment) in FLOORING_PRODUCTS.items():
        key = material_key("flooring", product)
        entries[key] = {
            "key": key, "name": name, "family": "flooring", "unit": "box", "unit_price": price,
            "attributes": {"sq_ft_per_box": per_box, "needs_underlayment": float(underlayment)},
        }
    for location, grades in PAINT_GRADES.items():
        for grade, (price, coverage) in grades.items():
            key = material_key("paint", location, grade)
            entries[key] = {
                "key": key, "name": f"{grade.capitalize()} {location.capitalize()} Paint", "family": "paint",
                "unit": "gallon", "unit_price": price, "attributes": {"coverage_sq_ft": coverage},
            }
    for siding_type, profiles in SIDING_PRICES.items():
        for profile, price in profiles.items():
            key = material_key("siding", siding_type, profile)
            entries[key] = {
                "key": key, "name": f"{siding_type.replace('-', ' ').title()} Siding ({profile.replace('-', ' ')})",
                "family": "siding", "unit": "square", "unit_price": price,
            }
    for material, (name, price) in ROOFING_MATERIALS.items():
        key = material_key("roofing", material)
        entries[key] = {
            "key": key, "name": name, "family": "roofing", "unit": "square", "unit_price": price,
        }
    return entries


def _apply_overrides(entries: Dict[str, dict], overrides: dict) -> int:
    """Merge supplier overrides into entry kwargs. Returns count applied."""
    applied = 0
    for key, override in overrides.items():
        entry = entries.get(key)
        if entry is None or not isinstance(override, dict):
            logger.warning("Ignoring price override for unknown material '%s'", key)
            continue
        if "unit_price" in override:
            try:
                entry["unit_price"] = float(override["unit_price"])
                applied += 1
            except (TypeError, ValueError):
                logger.warning("Ignoring non-numeric unit_price override for '%s': %r",
                               key, override["unit_price"])
        if isinstance(override.get("stock_prices"), dict):
            stock = dict(entry.get("stock_prices") or {})
            for length, price in override["stock_prices"].items():
                try:
                    stock[float(length)] = float(price)
                except (TypeError, ValueError):
                    logger.warning("Ignoring non-numeric stock price override for '%s': %r -> %r",
                                   key, length, price)
            entry["stock_prices"] = stock
            applied += 1
    return applied


def _load_overrides(path: Optional[str]) -> dict:
    path = path or settings.PRICE_OVERRIDES_PATH or _DEFAULT_OVERRIDES_PATH
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Price overrides at %s are not valid JSON (%s), using defaults", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Price overrides at %s must be a JSON object, using defaults", path)
        return {}
    return data


class MaterialCatalog:
    """
    Read-only lookup over CatalogEntry records.

    This class wraps the tables so calculators never need to know where a
    price came from.
    """

    def __init__(self, entries: Mapping[str, CatalogEntry],
                 families: Mapping[str, MaterialFamily]):
        self._entries = MappingProxyType(dict(entries))
        self._families = MappingProxyType(dict(families))

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[CatalogEntry]:
        return self._entries.get(key)

    def get_unit_price(self, key: str) -> float:
        """Per-unit price. Falls back to 0.0 if not found."""
        entry = self._entries.get(key)
        if entry is None or entry.unit_price is None:
            return 0.0
        return entry.unit_price

    def get_stock_prices(self, key: str) -> Dict[float, float]:
        entry = self._entries.get(key)
        return dict(entry.stock_prices) if entry else {}

    def utilization_band(self, key: str) -> Optional[Tuple[float, float]]:
        """The stock-selection band for a material's family, if it has one."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        family = self._families.get(entry.family)
        return family.utilization_band if family else None


def build_catalog(overrides: Optional[dict] = None) -> MaterialCatalog:
    """Build a catalog from the default tables plus optional overrides."""
    entries = _build_entries()
    if overrides:
        applied = _apply_overrides(entries, overrides)
        logger.info("Applied %d material price overrides", applied)

    band = (settings.COMPOSITE_UTILIZATION_MIN, settings.COMPOSITE_UTILIZATION_MAX)
    families = {
        key: MaterialFamily(
            key=key,
            name=data["name"],
            utilization_band=band if data.get("composite") else None,
        )
        for key, data in FAMILIES.items()
    }
    return MaterialCatalog(
        {key: CatalogEntry(**kwargs) for key, kwargs in entries.items()},
        families,
    )


def load_catalog(path: Optional[str] = None) -> MaterialCatalog:
    """Build a catalog, applying supplier overrides from a JSON file when present."""
    return build_catalog(_load_overrides(path))


@lru_cache(maxsize=1)
def default_catalog() -> MaterialCatalog:
    """Process-wide shared catalog. Built once."""
    catalog = load_catalog()
    logger.info("Loaded material catalog with %d entries", len(catalog))
    return catalog
