"""
Unit Tests for PDF Output

Generated PDFs are inspected with PyMuPDF.
"""

import base64
import logging
import time
from pathlib import Path

import fitz
import pytest
from PIL import Image
from reportlab.pdfbase.pdfmetrics import stringWidth

from docgen_toolkit.core.models import ImageElement, Page, TextElement, Template
from docgen_toolkit.output import RenderError, render_pdf_bytes, render_template, render_to_pdf
from docgen_toolkit.output.pdf_writer import (
    ELLIPSIS,
    _px_to_pt,
    _transform_y,
    _truncate,
)


class TestCoordinateConversion:

    def test_px_to_pt_when_96_dpi_then_three_quarters(self):
        assert _px_to_pt(96) == 72
        assert _px_to_pt(794) == pytest.approx(595.5)

    def test_transform_y_when_top_of_page_then_page_height_minus_box(self):
        # 96px box at the top of a 720pt page
        assert _transform_y(720, 0, 96) == 648


class TestTruncate:

    def test_truncate_when_fits_then_unchanged(self):
        assert _truncate("Total", "Helvetica", 12, 200) == "Total"

    def test_truncate_when_too_wide_then_ellipsis_and_fits(self):
        text = "A very long customer name that cannot fit"
        limit = stringWidth("A very long", "Helvetica", 12)

        result = _truncate(text, "Helvetica", 12, limit)

        assert result.endswith(ELLIPSIS)
        assert stringWidth(result, "Helvetica", 12) <= limit

    def test_truncate_when_no_room_then_empty(self):
        assert _truncate("abc", "Helvetica", 12, 1) == ""

    def test_truncate_when_cut_then_longest_prefix_kept(self):
        text = "x" * 50
        limit = stringWidth("x" * 10, "Helvetica", 12)

        kept = len(_truncate(text, "Helvetica", 12, limit)) - len(ELLIPSIS)

        assert stringWidth(text[:kept] + ELLIPSIS, "Helvetica", 12) <= limit
        assert stringWidth(text[:kept + 1] + ELLIPSIS, "Helvetica", 12) > limit

    def test_truncate_when_very_long_text_then_fast(self):
        start = time.perf_counter()

        result = _truncate("x" * 20_000, "Helvetica", 12, 150)

        assert time.perf_counter() - start < 1.0
        assert result.endswith(ELLIPSIS)
        assert stringWidth(result, "Helvetica", 12) <= 150


class TestRenderToPdf:

    def test_render_when_invoice_then_single_page_with_text(self, tmp_path: Path, invoice_template, invoice_data):
        path = render_to_pdf(render_template(invoice_template, invoice_data), tmp_path / "invoice.pdf")

        with fitz.open(path) as doc:
            assert doc.page_count == 1
            page = doc[0]
            assert page.rect.width == pytest.approx(595.5)
            assert page.rect.height == pytest.approx(842.25)
            text = page.get_text()

        for expected in ("INVOICE", "INV-001", "Development", "6000", "9720", "Quantity"):
            assert expected in text

    def test_render_when_text_repositioned_then_drawn_at_final_y(self, tmp_path: Path, invoice_template, invoice_data):
        path = render_to_pdf(render_template(invoice_template, invoice_data), tmp_path / "invoice.pdf")

        with fitz.open(path) as doc:
            hits = doc[0].search_for("9720")

        # total row box: top 248px, height 40px -> 186pt..216pt from the top
        assert hits
        assert 186 <= hits[0].y0 and hits[0].y1 <= 216

    def test_render_when_image_file_then_embedded(self, tmp_path: Path, a4_page, image_element):
        template = Template("t", "T", page=a4_page, elements=[image_element])

        path = render_to_pdf(render_template(template, {}), tmp_path / "image.pdf")

        with fitz.open(path) as doc:
            assert len(doc[0].get_images()) == 1

    def test_render_when_data_uri_image_then_embedded(self, tmp_path: Path, a4_page, sample_image):
        uri = "data:image/png;base64," + base64.b64encode(sample_image.read_bytes()).decode("ascii")
        template = Template("t", "T", page=a4_page, elements=[
            ImageElement("logo", 0, 0, 100, 100, src=uri),
        ])

        path = render_to_pdf(render_template(template, {}), tmp_path / "uri.pdf")

        with fitz.open(path) as doc:
            assert len(doc[0].get_images()) == 1

    def test_render_when_image_unloadable_then_placeholder_and_warning(self, tmp_path: Path, a4_page, caplog):
        template = Template("t", "T", page=a4_page, elements=[
            ImageElement("logo", 0, 0, 100, 100, src=str(tmp_path / "missing.png")),
        ])

        with caplog.at_level(logging.WARNING, logger="docgen_toolkit.output.pdf_writer"):
            path = render_to_pdf(render_template(template, {}), tmp_path / "missing.pdf")

        with fitz.open(path) as doc:
            assert "[Image]" in doc[0].get_text()
            assert doc[0].get_images() == []
        assert "Could not load image for logo" in caplog.text

    def test_render_when_image_file_truncated_then_placeholder(self, tmp_path: Path, a4_page, caplog):
        full = tmp_path / "full.png"
        Image.effect_noise((400, 400), 64).convert("RGB").save(full)
        cut = tmp_path / "cut.png"
        raw = full.read_bytes()
        cut.write_bytes(raw[: len(raw) // 2])
        template = Template("t", "T", page=a4_page, elements=[
            ImageElement("logo", 0, 0, 100, 100, src=str(cut)),
        ])

        with caplog.at_level(logging.WARNING, logger="docgen_toolkit.output.pdf_writer"):
            path = render_to_pdf(render_template(template, {}), tmp_path / "cut.pdf")

        with fitz.open(path) as doc:
            assert "[Image]" in doc[0].get_text()
            assert doc[0].get_images() == []
        assert "Could not load image for logo" in caplog.text

    def test_render_when_empty_tree_then_blank_page(self, tmp_path: Path, a4_page):
        path = render_to_pdf(render_template(Template("t", "T", page=a4_page)), tmp_path / "blank.pdf")

        with fitz.open(path) as doc:
            assert doc.page_count == 1
            assert doc[0].get_text().strip() == ""

    def test_render_when_long_text_then_truncated(self, tmp_path: Path):
        template = Template("t", "T", page=Page(400, 200), elements=[
            TextElement("name", 0, 0, 100, 40, content="Supercalifragilistic Expialidocious Ltd"),
        ])

        path = render_to_pdf(render_template(template), tmp_path / "long.pdf")

        with fitz.open(path) as doc:
            text = doc[0].get_text()
        assert "Supercal" in text
        assert "Expialidocious" not in text

    def test_render_when_bound_text_very_long_then_truncated_quickly(self, tmp_path: Path):
        template = Template("t", "T", page=Page(400, 200), elements=[
            TextElement("notes", 0, 0, 200, 40, binding="notes"),
        ])
        tree = render_template(template, {"notes": "x" * 20_000})
        start = time.perf_counter()

        path = render_to_pdf(tree, tmp_path / "notes.pdf")

        assert time.perf_counter() - start < 2.0
        with fitz.open(path) as doc:
            text = doc[0].get_text().strip()
        assert text.startswith("xxx")
        assert len(text) < 100

    def test_render_when_output_is_directory_then_render_error(self, tmp_path: Path, invoice_template):
        target = tmp_path / "taken.pdf"
        target.mkdir()

        with pytest.raises(RenderError, match="Failed to write PDF"):
            render_to_pdf(render_template(invoice_template), target)

    def test_render_when_dpi_zero_then_render_error(self, tmp_path: Path, invoice_template):
        with pytest.raises(RenderError, match="dpi"):
            render_to_pdf(render_template(invoice_template), tmp_path / "x.pdf", dpi=0)


class TestRenderPdfBytes:

    def test_bytes_when_rendered_then_pdf_document(self, invoice_template, invoice_data):
        data = render_pdf_bytes(render_template(invoice_template, invoice_data))

        assert data.startswith(b"%PDF")
        with fitz.open(stream=data, filetype="pdf") as doc:
            assert "INV-001" in doc[0].get_text()
