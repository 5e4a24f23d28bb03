"""
Tests for the document build pipeline.

Covers per-format outputs, warnings, file naming, metadata and
building stored templates.
"""

import json
from pathlib import Path

import fitz
import pytest

from docgen_toolkit import __version__
from docgen_toolkit.config import BuildConfig
from docgen_toolkit.controller import (
    BuildError,
    _default_stem,
    build_document,
    build_from_store,
)
from docgen_toolkit.core.models import Page, TableElement, Template
from docgen_toolkit.storage import InMemoryTemplateStore, TemplateNotFoundError


class TestBuildDocument:

    def test_build_when_all_formats_then_file_per_format(self, tmp_path: Path, invoice_template, invoice_data):
        config = BuildConfig(output_dir=tmp_path, formats=("pdf", "html", "json"))

        result = build_document(invoice_template, invoice_data, config)

        assert set(result.outputs) == {"pdf", "html", "json"}
        assert result.pdf_path == tmp_path / "invoice.pdf"
        assert result.html_path == tmp_path / "invoice.html"
        assert result.json_path == tmp_path / "invoice.json"
        for path in result.outputs.values():
            assert path.exists()

    def test_build_when_default_config_then_pdf_only(self, tmp_path: Path, invoice_template, invoice_data):
        result = build_document(invoice_template, invoice_data, BuildConfig(output_dir=tmp_path))

        assert list(result.outputs) == ["pdf"]
        assert result.html_path is None
        with fitz.open(result.pdf_path) as doc:
            assert "INV-001" in doc[0].get_text()

    def test_build_when_json_format_then_tree_written(self, tmp_path: Path, invoice_template, invoice_data):
        config = BuildConfig(output_dir=tmp_path, formats="json")

        result = build_document(invoice_template, invoice_data, config)

        text = result.json_path.read_text(encoding="utf-8")
        assert text == result.tree.to_json() + "\n"
        nodes = {n["id"]: n for n in json.loads(text)["nodes"]}
        assert nodes["items"]["box"] == {"left": 40, "top": 102, "width": 714, "height": 136}
        assert nodes["total"]["box"]["top"] == 248

    def test_build_when_output_dir_missing_then_created(self, tmp_path: Path, invoice_template, invoice_data):
        config = BuildConfig(output_dir=tmp_path / "a" / "b", formats=("json",))

        result = build_document(invoice_template, invoice_data, config)

        assert result.json_path.parent == tmp_path / "a" / "b"

    def test_build_when_file_stem_given_then_used(self, tmp_path: Path, invoice_template, invoice_data):
        config = BuildConfig(output_dir=tmp_path, formats=("html",), file_stem="march")

        result = build_document(invoice_template, invoice_data, config)

        assert result.html_path == tmp_path / "march.html"

    def test_build_when_no_data_then_authored_layout(self, tmp_path: Path, invoice_template):
        config = BuildConfig(output_dir=tmp_path, formats=("json",))

        result = build_document(invoice_template, None, config)

        assert result.warnings == ()
        assert result.tree.find("rule").box.top == 100
        assert result.tree.find("total").content.text == "{{invoice.total}}"


class TestBuildWarnings:

    def test_build_when_bindings_missing_then_warned(self, tmp_path: Path, invoice_template):
        config = BuildConfig(output_dir=tmp_path, formats=("json",))

        result = build_document(invoice_template, {"invoice": {"number": "INV-9"}}, config)

        assert result.warnings == (
            "Unresolved binding: invoice.items",
            "Unresolved binding: invoice.total",
        )

    def test_build_when_binding_warnings_disabled_then_silent(self, tmp_path: Path, invoice_template):
        config = BuildConfig(output_dir=tmp_path, formats=("json",), warn_unresolved_bindings=False)

        result = build_document(invoice_template, {}, config)

        assert result.warnings == ()

    def test_build_when_all_bound_then_no_warnings(self, tmp_path: Path, invoice_template, invoice_data):
        config = BuildConfig(output_dir=tmp_path, formats=("json",))

        assert build_document(invoice_template, invoice_data, config).warnings == ()

    def test_build_when_content_overflows_page_then_warned_not_clipped(self, tmp_path: Path):
        template = Template("t", "Long", page=Page(400, 300), elements=[
            TableElement("rows", 0, 0, 400, 100, columns=("N",), binding="rows"),
        ])
        data = {"rows": [{"n": i} for i in range(20)]}

        result = build_document(template, data, BuildConfig(output_dir=tmp_path, formats=("json",)))

        assert any(w.startswith("Content overflows page") for w in result.warnings)
        assert result.tree.find("rows").box.height == 40 + 20 * 32


class TestBuildErrors:

    def test_build_when_output_dir_is_file_then_build_error(self, tmp_path: Path, invoice_template):
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        config = BuildConfig(output_dir=blocker, formats=("json",))

        with pytest.raises(BuildError, match="Cannot create output directory"):
            build_document(invoice_template, None, config)

    def test_build_when_target_is_directory_then_build_error(self, tmp_path: Path, invoice_template):
        (tmp_path / "invoice.pdf").mkdir()
        config = BuildConfig(output_dir=tmp_path, formats=("pdf",))

        with pytest.raises(BuildError, match="Failed to write pdf output"):
            build_document(invoice_template, None, config)


class TestBuildMetadata:

    def test_metadata_when_built_then_template_and_layout_recorded(self, tmp_path: Path, invoice_template, invoice_data):
        config = BuildConfig(output_dir=tmp_path, formats=("json", "html"))

        metadata = build_document(invoice_template, invoice_data, config).metadata

        assert metadata["generator_version"] == __version__
        assert metadata["template"] == {
            "id": "tpl-1",
            "name": "Invoice",
            "version": 1,
            "element_count": 5,
        }
        assert metadata["layout"] == {
            "row_count": 4,
            "content_bottom": 288,
            "page_height": 1123,
            "max_y_shift": 8,
            "rows": [
                {"index": 0, "authored_top": 40, "top": 40, "height": 40},
                {"index": 1, "authored_top": 100, "top": 90, "height": 2},
                {"index": 2, "authored_top": 120, "top": 102, "height": 136},
                {"index": 3, "authored_top": 240, "top": 248, "height": 40},
            ],
        }
        assert metadata["formats"] == ["json", "html"]
        assert metadata["elapsed_seconds"] >= 0
        assert "generated_at" in metadata

    def test_metadata_when_built_then_json_serializable(self, tmp_path: Path, invoice_template, invoice_data):
        config = BuildConfig(output_dir=tmp_path, formats=("json",))

        metadata = build_document(invoice_template, invoice_data, config).metadata

        assert json.loads(json.dumps(metadata)) == metadata

    def test_metadata_when_no_data_then_no_rows_or_shift(self, tmp_path: Path, invoice_template):
        config = BuildConfig(output_dir=tmp_path, formats=("json",))

        layout = build_document(invoice_template, None, config).metadata["layout"]

        assert layout["rows"] == []
        assert layout["max_y_shift"] == 0


class TestDefaultStem:

    @pytest.mark.parametrize("name,expected", [
        ("Invoice", "invoice"),
        ("Invoice (2024)", "invoice-2024"),
        ("  Quarterly   Report  ", "quarterly-report"),
        ("???", "document"),
    ])
    def test_stem_when_named_then_slugified(self, a4_page, name, expected):
        assert _default_stem(Template("t1", name, page=a4_page)) == expected

    def test_stem_when_name_empty_then_id_used(self, a4_page):
        assert _default_stem(Template("Tpl_42", "", page=a4_page)) == "tpl-42"


class TestBuildFromStore:

    def test_build_when_owner_then_stored_template_rendered(self, tmp_path: Path, invoice_elements, invoice_data, a4_page):
        store = InMemoryTemplateStore()
        record = store.create("alice", "Stored Invoice", a4_page, invoice_elements)

        result = build_from_store(store, record.id, "alice", invoice_data,
                                  BuildConfig(output_dir=tmp_path, formats=("json",)))

        assert result.json_path == tmp_path / "stored-invoice.json"
        assert result.metadata["template"]["id"] == record.id
        assert result.tree.find("number").content.text == "INV-001"

    def test_build_when_other_user_then_not_found(self, tmp_path: Path, a4_page):
        store = InMemoryTemplateStore()
        record = store.create("alice", "Private", a4_page)

        with pytest.raises(TemplateNotFoundError):
            build_from_store(store, record.id, "bob", {}, BuildConfig(output_dir=tmp_path))

        assert not list(tmp_path.iterdir())
