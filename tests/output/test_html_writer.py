"""
Unit Tests for HTML Output
"""

from pathlib import Path

from docgen_toolkit.core.models import ImageElement, Page, TableElement, TextElement, Template
from docgen_toolkit.output import generate_html, render_template, write_html


class TestGenerateHtml:

    def test_generate_when_rendered_then_absolute_boxes(self, invoice_template, invoice_data):
        html = generate_html(render_template(invoice_template, invoice_data))

        assert html.startswith("<!DOCTYPE html>")
        assert "width: 794px; min-height: 1123px;" in html
        assert ('data-element-id="items" data-element-type="table" '
                'style="position: absolute; left: 40px; top: 102px; width: 714px; height: 136px;"') in html

    def test_generate_when_text_has_markup_then_escaped(self):
        template = Template("t", "T", page=Page(500, 500), elements=[
            TextElement("x", 0, 0, 200, 40, binding="name"),
        ])

        html = generate_html(render_template(template, {"name": "<b>Tom & \"Jerry\"</b>"}))

        assert "&lt;b&gt;Tom &amp; &quot;Jerry&quot;&lt;/b&gt;" in html
        assert "<b>Tom" not in html

    def test_generate_when_table_rows_then_cells_emitted(self, invoice_template, invoice_data):
        html = generate_html(render_template(invoice_template, invoice_data))

        assert ">Development</td>" in html
        assert ">6000</td>" in html
        assert html.count("<tr>") == 1 + 3

    def test_generate_when_table_then_rows_on_estimator_grid(self):
        template = Template("t", "T", page=Page(500, 500), elements=[
            TableElement("items", 0, 0, 300, 100, columns=("A", "B"), binding="rows"),
        ])
        data = {"rows": [{"a": i, "b": i * 2} for i in range(5)]}

        html = generate_html(render_template(template, data))

        table = html[html.index("<table"):html.index("</table>")]
        assert table.count("height: 40px;") == 2
        assert table.count("height: 32px;") == 5 * 2
        assert 'data-element-id="items"' in html and "height: 200px;" in html

    def test_generate_when_empty_table_then_muted_placeholder_row(self):
        template = Template("t", "T", page=Page(500, 500), elements=[
            TableElement("items", 0, 0, 300, 100, columns=("A", "B"), binding="rows"),
        ])

        html = generate_html(render_template(template, {"rows": []}))

        assert html.count("color: #737373;\">—</td>") == 2

    def test_generate_when_image_placeholder_then_marker(self, a4_page):
        template = Template("t", "T", page=a4_page, elements=[ImageElement("i", 0, 0, 50, 50)])

        assert "[Image]" in generate_html(render_template(template, {}))

    def test_generate_when_margin_guides_then_guide_drawn(self, invoice_template):
        tree = render_template(invoice_template)

        assert "margin-guide" not in generate_html(tree)
        assert 'class="margin-guide"' in generate_html(tree, show_margin_guides=True)

    def test_generate_when_fractional_px_then_trimmed(self):
        template = Template("t", "T", page=Page(500.5, 500), elements=[
            TextElement("x", 10.25, 0, 200, 40, content="a"),
        ])

        html = generate_html(render_template(template))

        assert "width: 500.5px" in html
        assert "left: 10.25px" in html

    def test_generate_when_same_tree_then_identical(self, invoice_template, invoice_data):
        tree = render_template(invoice_template, invoice_data)

        assert generate_html(tree) == generate_html(tree)


class TestWriteHtml:

    def test_write_when_called_then_file_created(self, tmp_path: Path, invoice_template):
        path = write_html(render_template(invoice_template), tmp_path / "out" / "preview.html")

        assert path.exists()
        assert "INVOICE" in path.read_text(encoding="utf-8")
