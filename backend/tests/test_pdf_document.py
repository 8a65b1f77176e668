"""Tests for job order PDF assembly."""

import logging
import re
from pathlib import Path

import pytest
import reportlab
from reportlab.pdfbase import pdfmetrics

from app.services.job_order_pdf import (
    FontPair,
    PdfGenerationError,
    generate_job_order_pdf,
    load_logo,
    pdf_filename,
    resolve_fonts,
)
from app.services.job_order_pdf import document

PAGE_OBJECT = re.compile(rb"/Type\s*/Page(?![a-zA-Z])")
BUNDLED_FONTS = Path(reportlab.__file__).parent / "fonts"


class TestGenerateJobOrderPdf:
    def test_two_page_pdf(self, completed_order):
        pdf = generate_job_order_pdf(completed_order, fonts=FontPair())

        assert pdf.startswith(b"%PDF")
        assert pdf.rstrip().endswith(b"%%EOF")
        assert len(PAGE_OBJECT.findall(pdf)) == 2

    def test_pending_order_still_two_pages(self, make_order):
        pdf = generate_job_order_pdf(make_order(), fonts=FontPair())
        assert len(PAGE_OBJECT.findall(pdf)) == 2

    def test_output_is_deterministic(self, completed_order):
        first = generate_job_order_pdf(completed_order, fonts=FontPair())
        second = generate_job_order_pdf(completed_order, fonts=FontPair())
        assert first == second

    def test_with_logo(self, completed_order, png_logo):
        with_logo = generate_job_order_pdf(completed_order, logo=png_logo, fonts=FontPair())
        without_logo = generate_job_order_pdf(completed_order, fonts=FontPair())

        assert len(PAGE_OBJECT.findall(with_logo)) == 2
        assert b"/Subtype /Image" in with_logo
        assert b"/Subtype /Image" not in without_logo

    def test_undecodable_logo_is_ignored(self, completed_order, caplog):
        with caplog.at_level(logging.WARNING):
            pdf = generate_job_order_pdf(completed_order, logo=b"not an image", fonts=FontPair())

        assert len(PAGE_OBJECT.findall(pdf)) == 2
        assert "Logo could not be decoded" in caplog.text

    def test_hostile_text_still_renders(self, make_order):
        order = make_order(
            customer_name="\u0000‮ Ünïcødé \U0001F600" * 15,
            po_number="PO\t\r\n#1",
            remarks="x" * 10000,
        )
        pdf = generate_job_order_pdf(order, fonts=FontPair())
        assert len(PAGE_OBJECT.findall(pdf)) == 2


class TestResolveFonts:
    @pytest.fixture
    def same_stem_faces(self, tmp_path, monkeypatch):
        """Regular and bold faces stored under the same file name in different folders."""
        monkeypatch.setattr(document, "_registered_ttf", {})
        faces = []
        for folder, source in (("regular", "Vera.ttf"), ("bold", "VeraBd.ttf")):
            target = tmp_path / folder / "Face.ttf"
            target.parent.mkdir()
            target.write_bytes((BUNDLED_FONTS / source).read_bytes())
            faces.append(str(target))
        return faces

    @pytest.fixture
    def registrations(self, monkeypatch):
        names = []
        register = pdfmetrics.registerFont

        def _counting(font):
            names.append(font.fontName)
            return register(font)

        monkeypatch.setattr(pdfmetrics, "registerFont", _counting)
        return names

    def test_builtin_pair_by_default(self):
        fonts = resolve_fonts()
        assert fonts == FontPair(regular="Helvetica", bold="Helvetica-Bold")

    def test_truetype_faces_get_fixed_names(self, same_stem_faces, completed_order):
        fonts = resolve_fonts(*same_stem_faces)

        assert fonts == FontPair(regular="JobOrder-Regular", bold="JobOrder-Bold")
        assert pdfmetrics.stringWidth("Halagel", fonts.regular, 10) != pdfmetrics.stringWidth("Halagel", fonts.bold, 10)
        pdf = generate_job_order_pdf(completed_order, fonts=fonts)
        assert len(PAGE_OBJECT.findall(pdf)) == 2

    def test_truetype_registered_once(self, same_stem_faces, registrations):
        resolve_fonts(*same_stem_faces)
        resolve_fonts(*same_stem_faces)

        assert registrations == ["JobOrder-Regular", "JobOrder-Bold"]

    def test_new_file_registered_again(self, same_stem_faces, registrations):
        regular, bold = same_stem_faces
        resolve_fonts(regular, bold)
        resolve_fonts(bold, bold)

        assert registrations == ["JobOrder-Regular", "JobOrder-Bold", "JobOrder-Regular"]

    def test_missing_font_file(self, tmp_path):
        with pytest.raises(PdfGenerationError):
            resolve_fonts(str(tmp_path / "Regular.ttf"), str(tmp_path / "Bold.ttf"))

    def test_corrupt_font_file(self, tmp_path):
        regular = tmp_path / "Regular.ttf"
        bold = tmp_path / "Bold.ttf"
        regular.write_bytes(b"not a font")
        bold.write_bytes(b"not a font")

        with pytest.raises(PdfGenerationError):
            resolve_fonts(str(regular), str(bold))

    def test_pair_required(self, tmp_path):
        with pytest.raises(PdfGenerationError, match="Both regular and bold"):
            resolve_fonts(str(tmp_path / "Regular.ttf"), None)

    def test_generation_fails_without_fonts(self, completed_order, monkeypatch):
        from app.core.config import settings

        monkeypatch.setattr(settings, "pdf_font_regular_path", "/nonexistent/Regular.ttf")
        monkeypatch.setattr(settings, "pdf_font_bold_path", "/nonexistent/Bold.ttf")

        with pytest.raises(PdfGenerationError):
            generate_job_order_pdf(completed_order)


class TestLoadLogo:
    def test_none(self):
        assert load_logo(None) is None

    def test_png_bytes(self, png_logo):
        reader = load_logo(png_logo)
        assert reader.getSize() == (20, 10)

    def test_path(self, png_logo, tmp_path):
        path = tmp_path / "logo.png"
        path.write_bytes(png_logo)

        assert load_logo(path).getSize() == (20, 10)
        assert load_logo(str(path)).getSize() == (20, 10)

    def test_missing_file(self, tmp_path):
        assert load_logo(tmp_path / "missing.png") is None

    def test_garbage(self):
        assert load_logo(b"\x00\x01garbage") is None


class TestPdfFilename:
    def test_po_number_in_name(self, make_order):
        assert pdf_filename(make_order(po_number="PO-1001")) == "JobOrder_PO-1001.pdf"

    def test_unsafe_characters_replaced(self, make_order):
        assert pdf_filename(make_order(po_number='PO/12\\3"')) == "JobOrder_PO_12_3_.pdf"

    def test_non_ascii_dropped(self, make_order):
        assert pdf_filename(make_order(po_number="PO-ü1")) == "JobOrder_PO-1.pdf"
