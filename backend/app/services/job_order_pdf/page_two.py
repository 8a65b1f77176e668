"""Page 2: section B (planner)."""

import logging
from typing import List, Optional, Sequence

from app.models.job_order import FinalStatus
from app.schemas.job_order import JobOrder, MaterialRow
from app.services.job_order_pdf.layout import (
    CB_W,
    CONTENT_WIDTH,
    MARGIN,
    PAGE_HEIGHT,
    PAGE_WIDTH,
    S_HEADER,
    S_SMALL,
    S_TEXT,
    SECTION_SHADE,
    SIGNATURE_BLOCK_H,
    TABLE_HEADER_SHADE,
)
from app.services.job_order_pdf.signatures import SignatureCell, draw_signature_block
from app.services.job_order_pdf.surface import PageSurface

logger = logging.getLogger(__name__)

MATERIAL_ROW_COUNT = 25
MATERIAL_ROW_H = 14
TABLE_HEADER_H = 25
MATERIAL_COLUMN_WIDTHS = (55, 140, 85, 85, 85, 85)
MATERIAL_HEADERS = (
    "Item Code",
    "Raw @ Packaging Material",
    "Quantity Required\n(kg/pcs)",
    "Stock Balance\n(kg/pcs)",
    "Quantity to Order\n(kg/pcs)",
    "PR No",
)

# x offset of each status box from the margin, in print order
STATUS_BOXES = (
    (FinalStatus.CLOSED, 140),
    (FinalStatus.PENDING, 280),
    (FinalStatus.DELIVERED, 420),
)
STATUS_BOX_H = 14


def format_quantity(value: float) -> str:
    """Whole numbers without a trailing ``.0``."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(number)


def material_cells(row: MaterialRow) -> List[str]:
    """The six table cells for a material row, in column order."""
    return [
        row.item_code,
        row.material_name,
        format_quantity(row.qty_required),
        format_quantity(row.stock_balance),
        format_quantity(row.qty_to_order),
        row.pr_no,
    ]


def compose_page_two(surface: PageSurface, order: JobOrder, remarks_max_length: int = 1000) -> float:
    """Draw page 2 and return the lowest y used."""
    py = PAGE_HEIGHT - 30

    surface.filled_box(MARGIN, py - 18, CONTENT_WIDTH, 18, SECTION_SHADE)
    surface.box(MARGIN, py - 18, CONTENT_WIDTH, 18)
    surface.text(PAGE_WIDTH / 2, py - 13, "SECTION B (To be completed by Planner)", S_HEADER, bold=True, align="center")

    py -= 35
    surface.text(MARGIN + 20, py, "JOB ORDER NO :", S_TEXT, bold=True)
    surface.box(MARGIN + 100, py - 5, 250, 18)
    surface.text(MARGIN + 105, py, order.job_order_no, S_TEXT)

    surface.text(MARGIN + 370, py, "Date:", S_TEXT)
    surface.box(MARGIN + 400, py - 5, 135, 18)
    surface.text(MARGIN + 405, py, order.section_b_date, S_TEXT)

    py -= 25
    py = draw_materials_table(surface, order.materials, py)

    py -= 10
    surface.text(MARGIN, py, "Remarks:", S_TEXT, bold=True)
    py -= 5
    surface.box(MARGIN, py - 50, CONTENT_WIDTH, 55)
    surface.text(MARGIN + 5, py - 5, order.remarks, S_TEXT, max_length=remarks_max_length)
    py -= 60

    draw_signature_block(surface, py - SIGNATURE_BLOCK_H, [
        SignatureCell("Prepared by", order.planner_prepared_by, order.planner_prepared_date),
        SignatureCell("Reviewed by", order.planner_reviewed_by, order.planner_reviewed_date),
        SignatureCell("Approved by", order.planner_approved_by, order.planner_approved_date),
        SignatureCell("Received by", order.planner_received_by, order.planner_received_date),
    ])
    py -= SIGNATURE_BLOCK_H + 15

    return draw_status_footer(surface, order, py)


def draw_materials_table(surface: PageSurface, materials: Sequence[MaterialRow], top_y: float) -> float:
    """Header plus a fixed grid of material rows. Returns the y below the grid.

    Rows past the data are drawn empty; data past the grid is not printed.
    """
    if len(materials) > MATERIAL_ROW_COUNT:
        logger.warning(
            f"{len(materials)} material rows exceed the {MATERIAL_ROW_COUNT}-row table; "
            f"printing the first {MATERIAL_ROW_COUNT}"
        )

    py = top_y
    surface.filled_box(MARGIN, py - TABLE_HEADER_H, CONTENT_WIDTH, TABLE_HEADER_H, TABLE_HEADER_SHADE)
    surface.box(MARGIN, py - TABLE_HEADER_H, CONTENT_WIDTH, TABLE_HEADER_H)

    x = MARGIN
    for width, header in zip(MATERIAL_COLUMN_WIDTHS, MATERIAL_HEADERS):
        surface.box(x, py - TABLE_HEADER_H, width, TABLE_HEADER_H)
        surface.text(x + 3, py - 10, header, S_SMALL, bold=True)
        x += width
    py -= TABLE_HEADER_H

    for index in range(MATERIAL_ROW_COUNT):
        row: Optional[MaterialRow] = materials[index] if index < len(materials) else None
        cells = material_cells(row) if row is not None else None
        x = MARGIN
        for col, width in enumerate(MATERIAL_COLUMN_WIDTHS):
            surface.box(x, py - MATERIAL_ROW_H, width, MATERIAL_ROW_H)
            if cells is not None:
                surface.text(x + 3, py - 10, cells[col], S_TEXT)
            x += width
        py -= MATERIAL_ROW_H

    return py


def draw_status_footer(surface: PageSurface, order: JobOrder, top_y: float) -> float:
    """Completion details, status ticks and pending reason."""
    py = top_y
    surface.line(MARGIN, py, PAGE_WIDTH - MARGIN, py)
    surface.line(MARGIN, py - 2, PAGE_WIDTH - MARGIN, py - 2)

    py -= 15
    surface.text(MARGIN, py, "Date of Job Order completion :", S_TEXT)
    surface.box(MARGIN + 140, py - 4, 120, 14)
    surface.text(MARGIN + 145, py + 1, order.completion_date, S_TEXT)

    surface.text(MARGIN + 280, py, "Quantity delivered :", S_TEXT)
    surface.box(MARGIN + 370, py - 4, 120, 14)
    surface.text(MARGIN + 375, py + 1, order.qty_delivered, S_TEXT)

    py -= 20
    surface.text(MARGIN, py, "Status of Job Order:", S_TEXT)
    for status, offset in STATUS_BOXES:
        x = MARGIN + offset
        surface.box(x, py - 2, CB_W + 4, STATUS_BOX_H)
        if order.final_status == status:
            surface.tick(x, py - 2)
        surface.text(x + 20, py + 2, status.value, S_TEXT)

    py -= 20
    surface.text(MARGIN, py, "Reason of pending :", S_TEXT)
    surface.line(MARGIN + 100, py - 2, PAGE_WIDTH - MARGIN, py - 2)
    surface.text(MARGIN + 105, py, order.pending_reason, S_TEXT)

    return py - 2
