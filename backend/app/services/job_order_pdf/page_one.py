"""Page 1: masthead, order header and section A (sales)."""

import logging
from typing import Optional

from reportlab.lib.utils import ImageReader

from app.models.job_order import Company, SkuType
from app.schemas.job_order import JobOrder
from app.services.job_order_pdf.column import render_product_column
from app.services.job_order_pdf.layout import (
    CB_H,
    CB_W,
    COLUMN_WIDTH,
    CONTENT_WIDTH,
    MARGIN,
    PAGE_HEIGHT,
    PAGE_WIDTH,
    S_BOLD,
    S_HEADER,
    S_SMALL,
    S_TEXT,
    SECTION_HEADER_H,
    SECTION_SHADE,
    SIGNATURE_BLOCK_H,
)
from app.services.job_order_pdf.signatures import SignatureCell, draw_signature_block
from app.services.job_order_pdf.surface import PageSurface

logger = logging.getLogger(__name__)

LOGO_HEIGHT = 35
MASTHEAD_TEXT_W = 190
COMPANY_SPACING = 180
HEADER_ROW_H = 30
HEADER_LABEL_COL_W = 340


def compose_page_one(surface: PageSurface, order: JobOrder, logo: Optional[ImageReader] = None) -> float:
    """Draw page 1 and return the lowest y used."""
    y = PAGE_HEIGHT - 30

    surface.text(PAGE_WIDTH / 2, y, "HALAGEL GROUP OF COMPANIES", 11, bold=True, align="center")
    y -= 10
    surface.text(PAGE_WIDTH / 2, y, "JOB ORDER", S_HEADER, bold=True, align="center")
    if logo is not None:
        draw_logo(surface, logo, y)

    y -= 25
    draw_company_row(surface, order.company, y)

    y -= 20
    y = draw_order_header(surface, order, y)

    y -= 20
    return draw_section_a(surface, order, y)


def draw_logo(surface: PageSurface, logo: ImageReader, title_y: float) -> None:
    """Logo scaled to a fixed height, placed left of the centered title."""
    try:
        img_w, img_h = logo.getSize()
    except Exception as e:
        logger.warning(f"Logo skipped, cannot read image size: {e}")
        return
    if not img_w or not img_h:
        logger.warning("Logo skipped, image has no size")
        return

    width = img_w * LOGO_HEIGHT / img_h
    x = PAGE_WIDTH / 2 - MASTHEAD_TEXT_W / 2 - width - 15
    surface.image(logo, x, title_y - 5, width, LOGO_HEIGHT)


def draw_company_row(surface: PageSurface, company: Company, y: float) -> None:
    """One checkbox per legal entity; only the order's company is ticked."""
    x = MARGIN
    for entity in Company:
        surface.checkbox(x, y, company == entity)
        surface.text(x + CB_W + 5, y + 1, entity.value, S_SMALL)
        x += COMPANY_SPACING


def draw_order_header(surface: PageSurface, order: JobOrder, y: float) -> float:
    """Customer/PO row and SKU/delivery row. Returns the y below both rows."""
    right_x = MARGIN + HEADER_LABEL_COL_W
    right_w = CONTENT_WIDTH - HEADER_LABEL_COL_W

    surface.box(MARGIN, y - HEADER_ROW_H, HEADER_LABEL_COL_W, HEADER_ROW_H)
    surface.text(MARGIN + 5, y - 18, "CUSTOMER NAME :", S_TEXT)
    surface.text(MARGIN + 100, y - 18, order.customer_name, S_BOLD, bold=True)

    surface.box(right_x, y - HEADER_ROW_H, right_w, HEADER_ROW_H)
    surface.text(right_x + 5, y - 18, "PO NUMBER :", S_TEXT)
    surface.text(right_x + 80, y - 18, order.po_number, S_BOLD, bold=True)

    y -= HEADER_ROW_H
    surface.box(MARGIN, y - HEADER_ROW_H, HEADER_LABEL_COL_W, HEADER_ROW_H)

    center_y = y - HEADER_ROW_H / 2
    text_y = center_y - 3
    box_y = center_y - CB_H / 2

    surface.text(MARGIN + 40, text_y, "EXISTING SKU", S_TEXT)
    surface.checkbox(MARGIN + 110, box_y, order.sku_type == SkuType.EXISTING)
    surface.text(MARGIN + 180, text_y, "NEW SKU", S_TEXT)
    surface.checkbox(MARGIN + 230, box_y, order.sku_type == SkuType.NEW)

    surface.box(right_x, y - HEADER_ROW_H, right_w, HEADER_ROW_H)
    surface.text(right_x + 5, y - 18, "ESTIMATE DELIVERY DATE :", S_TEXT)
    surface.text(right_x + 130, y - 18, order.est_delivery_date, S_BOLD, bold=True)

    return y - HEADER_ROW_H


def draw_section_a(surface: PageSurface, order: JobOrder, top_y: float) -> float:
    """Section band, both product columns, the frame and the sales signatures.

    Returns the bottom of the section.
    """
    surface.filled_box(MARGIN, top_y - SECTION_HEADER_H, CONTENT_WIDTH, SECTION_HEADER_H, SECTION_SHADE)
    surface.box(MARGIN, top_y - SECTION_HEADER_H, CONTENT_WIDTH, SECTION_HEADER_H)
    surface.text(
        PAGE_WIDTH / 2, top_y - 11,
        "SECTION A (To be completed by Sales Representative)",
        S_HEADER, bold=True, align="center",
    )

    content_top = top_y - SECTION_HEADER_H
    end_y1 = render_product_column(surface, order.product, MARGIN, content_top, COLUMN_WIDTH)
    end_y2 = render_product_column(surface, order.product2, PAGE_WIDTH / 2, content_top, COLUMN_WIDTH)

    bottom_y = min(end_y1, end_y2) - SIGNATURE_BLOCK_H - 10
    signature_top = bottom_y + SIGNATURE_BLOCK_H

    surface.box(MARGIN, bottom_y, CONTENT_WIDTH, content_top - bottom_y)
    surface.box(MARGIN, signature_top, CONTENT_WIDTH, content_top - signature_top)
    surface.line(PAGE_WIDTH / 2, content_top, PAGE_WIDTH / 2, signature_top)

    draw_signature_block(surface, bottom_y, [
        SignatureCell("Prepared by :", order.sales_prepared_by, order.sales_date),
        SignatureCell("Approved by :", order.sales_approved_by),
        SignatureCell("Received by :", order.sales_received_by),
    ])

    return bottom_y
