"""
Unit Tests for Template Model
"""

import pytest

from docgen_toolkit.core.models import A4_PAGE, LineElement, Template, TextElement


class TestTemplate:
    """Tests for Template construction and helpers."""

    def test_template_when_duplicate_ids_then_raises(self):
        elements = [
            TextElement("dup", 0, 0, 10, 10),
            LineElement("dup", 0, 20, 10, 1),
        ]

        with pytest.raises(ValueError, match="Duplicate element id"):
            Template("t", "T", elements=elements)

    def test_template_when_version_zero_then_raises(self):
        with pytest.raises(ValueError, match="version"):
            Template("t", "T", version=0)

    def test_template_when_elements_list_then_stored_as_tuple(self):
        template = Template("t", "T", elements=[TextElement("a", 0, 0, 1, 1)])

        assert isinstance(template.elements, tuple)
        assert template.element_count == 1
        assert not template.is_empty

    def test_find_when_missing_then_none(self, invoice_template):
        assert invoice_template.find("items").id == "items"
        assert invoice_template.find("nope") is None

    def test_bumped_when_renamed_then_version_incremented(self, invoice_template):
        bumped = invoice_template.bumped(name="Receipt")

        assert bumped.version == invoice_template.version + 1
        assert bumped.name == "Receipt"
        assert invoice_template.name == "Invoice"

    def test_from_dict_when_bare_layout_then_defaults_used(self):
        template = Template.from_dict({
            "page": {"width": 794, "height": 1123},
            "elements": [],
        })

        assert template.version == 1
        assert template.id == ""
        assert template.is_empty

    def test_to_dict_when_round_tripped_then_equal(self, invoice_template):
        assert Template.from_dict(invoice_template.to_dict()) == invoice_template

    def test_to_dict_when_description_none_then_omitted(self):
        assert "description" not in Template("t", "T", page=A4_PAGE).to_dict()
