"""
Flooring takeoff: boxes of product, underlayment rolls, transition strips.

The waste factor and the installation pattern factor compound. Underlayment
is only added for products that need it (engineered, laminate, carpet, or a
custom product flagged as needing it).
"""

from ..schemas import FieldKind, FieldSpec
from ..units import area_to_sheets
from .base import TakeoffContext
from .material_lookup import FLOORING_PRODUCTS, material_key

UNDERLAYMENT_ROLL_SQ_FT = 100
TRANSITION_STRIP_FT = 4

PATTERN_FACTORS = {"straight": 1.0, "diagonal": 1.1, "herringbone": 1.15}
UNDERLAYMENT_TYPES = ["standard", "premium", "moisture-barrier"]

FIELDS = [
    FieldSpec(name="input_mode", label="Measure by", kind=FieldKind.CHOICE,
              choices=["dimensions", "area"], default="dimensions"),
    FieldSpec(name="length", label="Length", unit="ft", enabled_by="input_mode", enabled_when="dimensions"),
    FieldSpec(name="width", label="Width", unit="ft", enabled_by="input_mode", enabled_when="dimensions"),
    FieldSpec(name="area", label="Area", unit="sq ft", enabled_by="input_mode", enabled_when="area"),
    FieldSpec(name="product", label="Flooring", kind=FieldKind.CHOICE,
              choices=list(FLOORING_PRODUCTS) + ["custom"], default="oak_strip"),
    FieldSpec(name="custom_sq_ft_per_box", label="Sq ft per box", unit="sq ft",
              enabled_by="product", enabled_when="custom"),
    FieldSpec(name="custom_price_per_box", label="Price per box", unit="USD",
              enabled_by="product", enabled_when="custom"),
    FieldSpec(name="custom_needs_underlayment", label="Needs underlayment", kind=FieldKind.BOOLEAN,
              default=False, enabled_by="product", enabled_when="custom"),
    FieldSpec(name="pattern", label="Install pattern", kind=FieldKind.CHOICE,
              choices=list(PATTERN_FACTORS), default="straight"),
    FieldSpec(name="waste_pct", label="Waste", unit="%", choices=[10, 15, 20], default=10),
    FieldSpec(name="include_underlayment", label="Underlayment", kind=FieldKind.BOOLEAN, default=True),
    FieldSpec(name="underlayment_type", label="Underlayment type", kind=FieldKind.CHOICE,
              choices=UNDERLAYMENT_TYPES, default="standard", enabled_by="include_underlayment"),
    FieldSpec(name="include_transition_strips", label="Transition strips", kind=FieldKind.BOOLEAN,
              default=False),
    FieldSpec(name="transition_strip_length", label="Transition length", unit="ft",
              enabled_by="include_transition_strips"),
]

MATERIALS = (
    [material_key("flooring", product) for product in FLOORING_PRODUCTS]
    + [material_key("underlayment", kind) for kind in UNDERLAYMENT_TYPES]
    + ["transition_strip"]
)


def derive(fields: dict, ctx: TakeoffContext) -> list:
    if fields["input_mode"] == "area":
        area = fields["area"]
    else:
        area = fields["length"] * fields["width"]

    waste, pattern = fields["waste_pct"], fields["pattern"]
    covered = area * (1 + waste / 100.0) * PATTERN_FACTORS[pattern]
    covered_label = f"Area with {waste:g}% Waste"
    if pattern != "straight":
        covered_label += f" & {pattern} Pattern"

    items = [
        ctx.measure("Total Area", area, "square feet"),
        ctx.measure(covered_label, covered, "square feet"),
    ]

    product = fields["product"]
    if product == "custom":
        boxes = area_to_sheets(covered, fields["custom_sq_ft_per_box"])
        items.append(ctx.price_at("Custom Flooring", boxes, "boxes", fields["custom_price_per_box"]))
        needs_underlayment = fields["custom_needs_underlayment"]
    else:
        key = material_key("flooring", product)
        attrs = ctx.attributes(key)
        boxes = area_to_sheets(covered, attrs["sq_ft_per_box"])
        items.append(ctx.price(ctx.name(key), boxes, "boxes", key))
        needs_underlayment = bool(attrs["needs_underlayment"])

    if fields["include_underlayment"] and needs_underlayment:
        key = material_key("underlayment", fields["underlayment_type"])
        items.append(ctx.price(ctx.name(key), area_to_sheets(covered, UNDERLAYMENT_ROLL_SQ_FT),
                               "100sf rolls", key))

    if fields["include_transition_strips"]:
        strips = area_to_sheets(fields["transition_strip_length"], TRANSITION_STRIP_FT)
        items.append(ctx.price("Transition Strips", strips, "4ft pieces", "transition_strip"))

    return items
