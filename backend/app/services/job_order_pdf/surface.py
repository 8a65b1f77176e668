"""Drawing primitives for one PDF page.

Primitives never raise on well-formed geometry. A text run the font cannot
measure or draw is logged and left blank so the rest of the page still
renders.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from reportlab.lib.colors import Color
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from app.services.job_order_pdf.layout import (
    BLACK,
    CB_H,
    CB_W,
    LINE_SPACING,
    S_TEXT,
    STROKE_WIDTH,
    TICK_INSET_X,
    TICK_INSET_Y,
    TICK_WIDTH,
)
from app.services.job_order_pdf.text_safety import safe_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontPair:
    """Registered font names used for regular and bold runs."""

    regular: str = "Helvetica"
    bold: str = "Helvetica-Bold"


class PageSurface:
    """Stateless drawing operations over a reportlab canvas."""

    def __init__(self, c: canvas.Canvas, fonts: FontPair = FontPair(), default_max_length: int = 100):
        self.c = c
        self.fonts = fonts
        self.default_max_length = default_max_length

    def text(
        self,
        x: float,
        y: float,
        value: Any,
        size: float = S_TEXT,
        bold: bool = False,
        align: str = "left",
        max_length: Optional[int] = None,
    ) -> None:
        """Draw text anchored at ``x``.

        Explicit line breaks start a new line below; nothing is wrapped.
        """
        font = self.fonts.bold if bold else self.fonts.regular
        text = safe_text(value, self.default_max_length if max_length is None else max_length)
        if not text:
            return

        for offset, line in enumerate(text.split("\n")):
            if not line:
                continue
            line_y = y - offset * size * LINE_SPACING
            try:
                x_pos = x
                if align == "center":
                    x_pos = x - self.c.stringWidth(line, font, size) / 2
                elif align == "right":
                    x_pos = x - self.c.stringWidth(line, font, size)
            except Exception as e:
                logger.warning(f"Skipped text {line!r} at ({x}, {line_y}): cannot measure: {e}")
                continue

            self.c.saveState()
            try:
                self.c.setFont(font, size)
                self.c.setFillColor(BLACK)
                self.c.drawString(x_pos, line_y, line)
            except Exception as e:
                logger.warning(f"Skipped text {line!r} at ({x}, {line_y}): {e}")
            finally:
                self.c.restoreState()

    def box(self, x: float, y: float, w: float, h: float) -> None:
        self.c.saveState()
        self.c.setStrokeColor(BLACK)
        self.c.setLineWidth(STROKE_WIDTH)
        self.c.rect(x, y, w, h, fill=0, stroke=1)
        self.c.restoreState()

    def filled_box(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        self.c.saveState()
        self.c.setFillColor(color)
        self.c.rect(x, y, w, h, fill=1, stroke=0)
        self.c.restoreState()

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.c.saveState()
        self.c.setStrokeColor(BLACK)
        self.c.setLineWidth(STROKE_WIDTH)
        self.c.line(x1, y1, x2, y2)
        self.c.restoreState()

    def tick(self, x: float, y: float) -> None:
        """Slash mark inside the checkbox whose lower-left corner is (x, y)."""
        self.c.saveState()
        self.c.setStrokeColor(BLACK)
        self.c.setLineWidth(TICK_WIDTH)
        self.c.line(
            x + TICK_INSET_X,
            y + TICK_INSET_Y,
            x + CB_W - TICK_INSET_X,
            y + CB_H - TICK_INSET_Y,
        )
        self.c.restoreState()

    def checkbox(self, x: float, y: float, checked: bool) -> None:
        self.box(x, y, CB_W, CB_H)
        if checked:
            self.tick(x, y)

    def image(self, image: ImageReader, x: float, y: float, w: float, h: float) -> None:
        try:
            self.c.drawImage(image, x, y, width=w, height=h, mask="auto")
        except Exception as e:
            logger.warning(f"Skipped image at ({x}, {y}): {e}")
