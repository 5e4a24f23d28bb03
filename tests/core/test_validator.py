"""
Unit Tests for Schema Validation

Tests for the validator module.
"""

import pytest

from docgen_toolkit.core.models import Page
from docgen_toolkit.core.models.page import DEFAULT_MARGIN_PX
from docgen_toolkit.core.schemas.validator import (
    ValidationError,
    validate_element,
    validate_page,
    validate_template,
)


class TestValidateTemplate:
    """Tests for validate_template function."""

    @pytest.fixture
    def valid_template_data(self) -> dict:
        """Create valid template data for testing."""
        return {
            "id": "tpl-1",
            "name": "Invoice",
            "version": 3,
            "page": {"width": 794, "height": 1123, "margin": 20, "size": "A4",
                     "orientation": "portrait"},
            "elements": [
                {"id": "title", "type": "text", "x": 40, "y": 40, "width": 300,
                 "height": 40, "content": "INVOICE", "fontSize": 24,
                 "fontWeight": "bold", "align": "left"},
                {"id": "rule", "type": "line", "x": 40, "y": 100, "width": 714,
                 "height": 2, "thickness": 2},
                {"id": "items", "type": "table", "x": 40, "y": 120, "width": 714,
                 "height": 100, "minHeight": 100, "columns": ["Item", "Qty"],
                 "binding": "invoice.items"},
                {"id": "logo", "type": "image", "x": 600, "y": 40, "width": 100,
                 "height": 50, "src": "", "maintainAspectRatio": True},
            ],
            "createdBy": "editor",
        }

    def test_validate_when_valid_data_then_no_error(self, valid_template_data):
        """Valid template data should pass validation."""
        # Should not raise
        validate_template(valid_template_data, strict=False)

    def test_validate_when_strict_and_valid_then_no_error(self, valid_template_data):
        """Valid data should also pass the JSON Schema."""
        validate_template(valid_template_data, strict=True)

    def test_validate_when_bare_layout_then_no_error(self):
        """A layout without id/name/version is accepted."""
        validate_template({"page": {"width": 10, "height": 10}, "elements": []})

    def test_validate_when_not_a_dict_then_raises_error(self):
        with pytest.raises(ValidationError, match="must be a JSON object"):
            validate_template([])

    def test_validate_when_missing_elements_then_raises_error(self, valid_template_data):
        """Missing required field should raise ValidationError."""
        del valid_template_data["elements"]

        with pytest.raises(ValidationError, match="Missing required fields") as exc:
            validate_template(valid_template_data)

        assert exc.value.errors == ["Missing field: elements"]

    def test_validate_when_version_zero_then_raises_error(self, valid_template_data):
        valid_template_data["version"] = 0

        with pytest.raises(ValidationError, match="Invalid version"):
            validate_template(valid_template_data)

    def test_validate_when_duplicate_ids_then_raises_error(self, valid_template_data):
        valid_template_data["elements"][1]["id"] = "title"

        with pytest.raises(ValidationError, match="Duplicate element id") as exc:
            validate_template(valid_template_data)

        assert exc.value.path == "elements[1].id"

    def test_validate_when_element_invalid_then_path_points_at_element(self, valid_template_data):
        valid_template_data["elements"][2]["columns"] = "Item,Qty"

        with pytest.raises(ValidationError) as exc:
            validate_template(valid_template_data)

        assert exc.value.path == "elements[2].columns"

    def test_validate_when_strict_and_schema_violation_then_raises_error(self, valid_template_data):
        """Strict mode catches what the structural checks let through."""
        valid_template_data["elements"][3]["maintainAspectRatio"] = "yes"

        # Structural checks accept it
        validate_template(valid_template_data, strict=False)

        with pytest.raises(ValidationError, match="Schema validation failed"):
            validate_template(valid_template_data, strict=True)


class TestValidatePage:
    """Tests for validate_page function."""

    def test_validate_page_when_zero_height_then_raises_error(self):
        with pytest.raises(ValidationError, match="Invalid height"):
            validate_page({"width": 10, "height": 0})

    def test_validate_page_when_bool_width_then_raises_error(self):
        with pytest.raises(ValidationError, match="Invalid width"):
            validate_page({"width": True, "height": 10})

    def test_validate_page_when_unknown_size_then_raises_error(self):
        with pytest.raises(ValidationError, match="Invalid page size"):
            validate_page({"width": 10, "height": 10, "size": "B5"})

    def test_validate_page_when_margin_omitted_then_model_default_applies(self):
        data = {"width": 794, "height": 1123}

        validate_page(data)
        page = Page.from_dict(data)

        assert page.margin == DEFAULT_MARGIN_PX
        assert page.content_width == 794 - 2 * DEFAULT_MARGIN_PX

    def test_validate_page_when_negative_margin_then_raises_error(self):
        with pytest.raises(ValidationError, match="Invalid margin"):
            validate_page({"width": 10, "height": 10, "margin": -1})


class TestValidateElement:
    """Tests for validate_element function."""

    @pytest.fixture
    def base(self) -> dict:
        return {"id": "e", "type": "text", "x": 0, "y": 0, "width": 10, "height": 10}

    def test_validate_element_when_unknown_type_then_raises_error(self, base):
        base["type"] = "chart"

        with pytest.raises(ValidationError, match="Invalid element type"):
            validate_element(base)

    def test_validate_element_when_missing_geometry_then_lists_fields(self, base):
        del base["x"]
        del base["height"]

        with pytest.raises(ValidationError) as exc:
            validate_element(base)

        assert exc.value.errors == ["Missing field: x", "Missing field: height"]

    def test_validate_element_when_table_without_columns_then_raises_error(self, base):
        base["type"] = "table"

        with pytest.raises(ValidationError, match="columns"):
            validate_element(base)

    def test_validate_element_when_bad_font_weight_then_raises_error(self, base):
        base["fontWeight"] = "heavy"

        with pytest.raises(ValidationError, match="Invalid fontWeight"):
            validate_element(base)

    def test_validate_element_when_binding_not_string_then_raises_error(self, base):
        base["binding"] = ["a", "b"]

        with pytest.raises(ValidationError, match="Invalid binding"):
            validate_element(base)

    def test_validate_element_when_negative_thickness_then_raises_error(self, base):
        base["type"] = "line"
        base["thickness"] = -1

        with pytest.raises(ValidationError, match="Invalid thickness"):
            validate_element(base)
