"""Job order document assembly.

Builds the two-page PDF for one order. Font setup and serialization are the
only steps that fail the whole document; everything else degrades to blank
cells.
"""

import io
import logging
import re
import threading
from pathlib import Path
from typing import Dict, Optional, Union

from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from app.core.config import settings
from app.schemas.job_order import JobOrder
from app.services.job_order_pdf.layout import PAGE_SIZE
from app.services.job_order_pdf.page_one import compose_page_one
from app.services.job_order_pdf.page_two import compose_page_two
from app.services.job_order_pdf.surface import FontPair, PageSurface
from app.services.job_order_pdf.text_safety import safe_text

logger = logging.getLogger(__name__)

LogoSource = Union[bytes, str, Path]
_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/"]')

TTF_REGULAR_NAME = "JobOrder-Regular"
TTF_BOLD_NAME = "JobOrder-Bold"

# font name -> file it was registered from
_registered_ttf: Dict[str, str] = {}
_font_lock = threading.Lock()


class PdfGenerationError(RuntimeError):
    """The job order PDF could not be produced."""


def resolve_fonts(regular_path: Optional[str] = None, bold_path: Optional[str] = None) -> FontPair:
    """Register the regular/bold faces and return their names.

    Without paths the built-in Helvetica pair is used. TrueType faces must be
    given as a pair.
    """
    if not regular_path and not bold_path:
        fonts = FontPair()
        try:
            pdfmetrics.getFont(fonts.regular)
            pdfmetrics.getFont(fonts.bold)
        except Exception as e:
            raise PdfGenerationError(f"Built-in fonts unavailable: {e}") from e
        return fonts

    if not regular_path or not bold_path:
        raise PdfGenerationError("Both regular and bold font files are required")

    _register_ttf(TTF_REGULAR_NAME, regular_path)
    _register_ttf(TTF_BOLD_NAME, bold_path)
    return FontPair(regular=TTF_REGULAR_NAME, bold=TTF_BOLD_NAME)


def _register_ttf(name: str, path: str) -> None:
    """Register ``path`` under ``name`` unless it is already registered from that file."""
    with _font_lock:
        if _registered_ttf.get(name) == path:
            return
        try:
            pdfmetrics.registerFont(TTFont(name, path))
        except Exception as e:
            raise PdfGenerationError(f"Failed to load font {path}: {e}") from e
        _registered_ttf[name] = path
        logger.info(f"Registered font {name} from {path}")


def load_logo(source: Optional[LogoSource]) -> Optional[ImageReader]:
    """Decode the logo image, or return None when it cannot be read."""
    if source is None:
        return None
    try:
        reader = ImageReader(io.BytesIO(source) if isinstance(source, bytes) else str(source))
        reader.getSize()
    except Exception as e:
        logger.warning(f"Logo could not be decoded, rendering without it: {e}")
        return None
    return reader


def generate_job_order_pdf(
    order: JobOrder,
    logo: Optional[LogoSource] = None,
    fonts: Optional[FontPair] = None,
) -> bytes:
    """Render ``order`` as a two-page A4 PDF.

    ``logo`` falls back to ``settings.pdf_logo_path``. Output is byte-identical
    for identical input.
    """
    if fonts is None:
        fonts = resolve_fonts(settings.pdf_font_regular_path, settings.pdf_font_bold_path)
    if logo is None:
        logo = settings.pdf_logo_path

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=PAGE_SIZE, invariant=1)
    c.setTitle(safe_text(f"Job Order {order.po_number}"))
    c.setAuthor("Halagel Group of Companies")

    surface = PageSurface(c, fonts, default_max_length=settings.pdf_default_max_length)

    compose_page_one(surface, order, load_logo(logo))
    c.showPage()
    compose_page_two(surface, order, remarks_max_length=settings.pdf_remarks_max_length)
    c.showPage()

    try:
        c.save()
    except Exception as e:
        raise PdfGenerationError(f"Failed to serialize job order {order.id}: {e}") from e

    pdf_bytes = buffer.getvalue()
    logger.info(f"Rendered job order {order.id} ({len(pdf_bytes)} bytes)")
    return pdf_bytes


def pdf_filename(order: JobOrder) -> str:
    """Download name used by clients, ``JobOrder_<po>.pdf``."""
    po_number = _UNSAFE_FILENAME_CHARS.sub("_", safe_text(order.po_number).replace("\n", " "))
    return f"JobOrder_{po_number}.pdf"
