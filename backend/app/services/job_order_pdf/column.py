"""Section A product column.

One column holds the detail, specification and requirement blocks for a
single product. Row order follows the enumerations and is part of the printed
form, so it never depends on the data.
"""

from typing import Iterable, List, Optional, Sequence

from app.models.job_order import (
    OTHERS_OPTION,
    PackingType,
    ProductCategory,
    ProductType,
    SupplyChoice,
    SupplyItem,
    UnitType,
)
from app.schemas.job_order import ProductSpec
from app.services.job_order_pdf.layout import CB_H, CB_W, S_BOLD, S_SMALL, S_TEXT
from app.services.job_order_pdf.surface import PageSurface

REQUIREMENT_LABELS = {
    SupplyItem.RAW_MATERIAL: "RAW MATERIAL:",
    SupplyItem.BOTTLE: "BOTTLE:",
    SupplyItem.LABELING: "LABELLING:",
    SupplyItem.INNER_BOX: "INNER BOX:",
    SupplyItem.CAP: "CAP:",
    SupplyItem.CAP_SEAL: "CAP SEAL:",
    SupplyItem.STOPPER: "STOPPER:",
    SupplyItem.PVC_FOIL: "PVC FOIL:",
    SupplyItem.ALUM_FOIL: "ALUMINIUM FOIL:",
    SupplyItem.SHRINKWRAP: "PVC SHRINKWRAP:",
    SupplyItem.CARTON: "CARTON:",
    SupplyItem.INSERT: "INSERT:",
    SupplyItem.OTHERS: "OTHERS :",
}

UNIT_ROW_H = 12
SPEC_ROW_STEP = 11
REQUIREMENT_ROW_STEP = 11
REQUIREMENT_LABEL_W = 85
REQUIREMENT_BOX_W = 55


def render_product_column(
    surface: PageSurface,
    spec: Optional[ProductSpec],
    x: float,
    top_y: float,
    width: float,
) -> float:
    """Draw one product column from ``top_y`` down and return the y below it.

    A missing ``spec`` draws the blank form.
    """
    p = spec or ProductSpec()
    filled = spec is not None  # blank form keeps the default unit type unmarked
    inner_x = x + 5
    content_w = width - 10
    cy = top_y - 10

    # A. Product detail
    surface.text(inner_x, cy, "A. PRODUCT DETAIL", S_BOLD, bold=True)
    cy -= 15

    surface.text(inner_x, cy, "PRODUCT NAME :", S_TEXT)
    surface.line(inner_x + 80, cy, inner_x + content_w, cy)
    surface.text(inner_x + 82, cy + 2, p.product_name, S_TEXT)
    cy -= 18

    cy = draw_quantity_grid(surface, p, inner_x, cy, content_w, filled)

    # B. Product specification
    surface.text(inner_x, cy, "B. PRODUCT SPECIFICATION (PLEASE TICK /)", S_BOLD, bold=True)
    cy -= 12

    cy = draw_spec_group(
        surface, "PRODUCT CATEGORY", [c.value for c in ProductCategory],
        p.categories, p.categories_others, inner_x, cy, content_w,
    )
    cy = draw_spec_group(
        surface, "PRODUCT TYPE", [t.value for t in ProductType],
        p.product_types, p.product_types_others, inner_x, cy, content_w,
    )
    cy = draw_spec_group(
        surface, "PACKING TYPE", [t.value for t in PackingType],
        p.packing_types, p.packing_types_others, inner_x, cy, content_w,
    )

    cy -= 2
    surface.text(inner_x, cy, "WEIGHT / ITEM", S_TEXT)
    surface.box(inner_x + 95, cy - 2, content_w - 95, 11)
    surface.text(inner_x + 98, cy + 1, p.weight_per_item, S_TEXT)
    cy -= 15

    quantity_rows = [
        ("QUANTITY PER BOTTLE", p.qty_per_bottle),
        ("QUANTITY PER BLISTER", p.qty_per_blister),
        ("QUANTITY PER BOX / SET", p.qty_per_box_set),
        ("QUANTITY PER CARTON", p.qty_per_carton),
    ]
    for label, value in quantity_rows:
        surface.text(inner_x, cy, label, S_SMALL)
        surface.box(inner_x + 115, cy - 2, content_w - 115, 11)
        surface.text(inner_x + 118, cy + 1, value, S_TEXT)
        cy -= 13

    # C. Requirement
    cy -= 5
    surface.text(inner_x, cy, "C. REQUIREMENT (PLEASE TICK /)", S_BOLD, bold=True)
    cy -= 10

    entries = p.supply_source.entries()
    for index, (item, choice) in enumerate(entries):
        draw_requirement_row(surface, REQUIREMENT_LABELS[item], choice, inner_x, cy)
        if index < len(entries) - 1:
            cy -= REQUIREMENT_ROW_STEP

    return cy - 8


def draw_quantity_grid(
    surface: PageSurface,
    p: ProductSpec,
    inner_x: float,
    cy: float,
    content_w: float,
    filled: bool = True,
) -> float:
    """Unit type grid; the quantity appears only in the selected unit's row."""
    surface.text(inner_x, cy - 6, "QUANTITY ORDER :", S_TEXT)

    tbl_x = inner_x + 90
    tbl_w = content_w - 90
    ty = cy + 4
    for unit in UnitType:
        surface.box(tbl_x, ty - UNIT_ROW_H, 60, UNIT_ROW_H)
        surface.text(tbl_x + 2, ty - 9, unit.value, S_TEXT)
        surface.box(tbl_x + 60, ty - UNIT_ROW_H, tbl_w - 60, UNIT_ROW_H)
        if filled and p.unit_type == unit:
            surface.text(tbl_x + 65, ty - 9, p.order_quantity, S_TEXT)
        ty -= UNIT_ROW_H

    return ty - 12


def draw_spec_group(
    surface: PageSurface,
    label: str,
    items: Sequence[str],
    selection: Optional[Iterable[str]],
    others_text: Optional[str],
    inner_x: float,
    cy: float,
    content_w: float,
) -> float:
    """Checkbox list for one specification group followed by its Others row."""
    selected: List[str] = list(selection or [])
    surface.text(inner_x, cy, label, S_TEXT)

    bx = inner_x + 95
    bw = content_w - 95
    by = cy + 2
    for item in items:
        surface.checkbox(bx, by - CB_H, item in selected)
        surface.text(bx + CB_W + 5, by - CB_H + 1, item, S_SMALL)
        by -= SPEC_ROW_STEP

    others_ticked = OTHERS_OPTION in selected
    surface.checkbox(bx, by - CB_H, others_ticked)
    if others_ticked and others_text:
        surface.text(bx + CB_W + 40, by - CB_H + 1, others_text, S_SMALL)
    surface.text(bx + CB_W + 5, by - CB_H + 1, "Others :", S_SMALL)
    surface.line(bx + CB_W + 35, by - 9, bx + bw, by - 9)
    by -= SPEC_ROW_STEP

    return by - 4


def draw_requirement_row(
    surface: PageSurface,
    label: str,
    choice: Optional[SupplyChoice],
    inner_x: float,
    cy: float,
) -> None:
    customer_x = inner_x + REQUIREMENT_LABEL_W
    halagel_x = customer_x + REQUIREMENT_BOX_W + 5

    surface.text(inner_x, cy, label, S_SMALL)
    surface.checkbox(customer_x, cy - 2, choice == SupplyChoice.CUSTOMER)
    surface.text(customer_x + CB_W + 5, cy + 1, "Customer", S_SMALL)
    surface.checkbox(halagel_x, cy - 2, choice == SupplyChoice.HALAGEL)
    surface.text(halagel_x + CB_W + 5, cy + 1, "Halagel", S_SMALL)
