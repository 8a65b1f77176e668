"""Signature grid used at the foot of both sections."""

from dataclasses import dataclass
from typing import Optional, Sequence

from app.services.job_order_pdf.layout import CONTENT_WIDTH, MARGIN, S_LABEL, S_SMALL, SIGNATURE_BLOCK_H
from app.services.job_order_pdf.surface import PageSurface

NAME_LINE_OFFSET = 30
DATE_LINE_OFFSET = 15
TITLE_BAND_H = 12


@dataclass(frozen=True)
class SignatureCell:
    title: str
    name: Optional[str] = None
    date: Optional[str] = None


def draw_signature_block(surface: PageSurface, bottom_y: float, cells: Sequence[SignatureCell]) -> None:
    """Full-width block split into equal cells, each with a title, name and date line."""
    top_y = bottom_y + SIGNATURE_BLOCK_H
    cell_w = CONTENT_WIDTH / len(cells)
    name_line_y = bottom_y + NAME_LINE_OFFSET
    date_line_y = bottom_y + DATE_LINE_OFFSET

    surface.box(MARGIN, bottom_y, CONTENT_WIDTH, SIGNATURE_BLOCK_H)
    for i in range(1, len(cells)):
        x = MARGIN + i * cell_w
        surface.line(x, bottom_y, x, top_y)
    surface.line(MARGIN, top_y - TITLE_BAND_H, MARGIN + CONTENT_WIDTH, top_y - TITLE_BAND_H)
    surface.line(MARGIN, name_line_y, MARGIN + CONTENT_WIDTH, name_line_y)
    surface.line(MARGIN, date_line_y, MARGIN + CONTENT_WIDTH, date_line_y)

    for i, cell in enumerate(cells):
        x = MARGIN + i * cell_w
        surface.text(x + 3, top_y - 9, cell.title, S_SMALL, bold=True)
        surface.text(x + 3, name_line_y - 9, "Name :", S_LABEL)
        surface.text(x + 30, name_line_y - 9, cell.name, S_SMALL)
        surface.text(x + 3, date_line_y - 9, "Date :", S_LABEL)
        surface.text(x + 30, date_line_y - 9, cell.date, S_SMALL)
