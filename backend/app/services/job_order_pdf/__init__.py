# Job order PDF rendering

from app.services.job_order_pdf.document import (
    PdfGenerationError,
    generate_job_order_pdf,
    load_logo,
    pdf_filename,
    resolve_fonts,
)
from app.services.job_order_pdf.surface import FontPair, PageSurface

__all__ = [
    "PdfGenerationError",
    "generate_job_order_pdf",
    "load_logo",
    "pdf_filename",
    "resolve_fonts",
    "FontPair",
    "PageSurface",
]
