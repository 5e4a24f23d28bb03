"""
Schema Validation Utilities

Validates template JSON before it is turned into models.

Elements arrive from the design surface and from API callers as loose
JSON. Malformed shapes (a table without columns, an unknown type tag)
are authoring defects and are rejected here, at the boundary, so the
layout engine can assume well-formed elements.

- `validate_template()` / `validate_page()` / `validate_element()`:
  fast structural checks with precise error paths
- `strict=True` additionally runs the bundled JSON Schema via jsonschema
"""

from __future__ import annotations

import json
from numbers import Real
from pathlib import Path
from typing import Any

import jsonschema

from ..models.page import DEFAULT_MARGIN_PX


ELEMENT_TYPES = ("text", "line", "table", "image")
PAGE_SIZES = ("A4", "Letter", "Legal", "A3", "A5")
ORIENTATIONS = ("portrait", "landscape")


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_template(data: Any, *, strict: bool = False) -> None:
    """
    Validate template data.

    Accepts both a full stored template ({id, name, version, page,
    elements}) and a bare layout ({page, elements}). Extra keys are
    ignored.

    Args:
        data: Template dictionary to validate
        strict: If True, also validate against template.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Template must be a JSON object", path="")

    required = ["page", "elements"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    version = data.get("version", 1)
    if not isinstance(version, int) or isinstance(version, bool) or version < 1:
        raise ValidationError(
            f"Invalid version: {version!r} (must be a positive integer)",
            path="version"
        )

    validate_page(data["page"], path="page")

    elements = data["elements"]
    if not isinstance(elements, list):
        raise ValidationError("elements must be a list", path="elements")

    seen_ids: set[str] = set()
    for i, element in enumerate(elements):
        validate_element(element, path=f"elements[{i}]")
        element_id = element["id"]
        if element_id in seen_ids:
            raise ValidationError(
                f"Duplicate element id: {element_id!r}",
                path=f"elements[{i}].id"
            )
        seen_ids.add(element_id)

    # Full schema validation in strict mode
    if strict:
        schema = _load_schema("template")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message]
            ) from e


def validate_page(data: Any, path: str = "page") -> None:
    """Validate page geometry."""
    if not isinstance(data, dict):
        raise ValidationError("page must be a dict", path=path)

    for key in ("width", "height"):
        if key not in data:
            raise ValidationError(f"page must have {key}", path=path)
        value = data[key]
        if not _is_number(value) or value <= 0:
            raise ValidationError(
                f"Invalid {key}: {value!r} (must be a positive number)",
                path=f"{path}.{key}"
            )

    margin = data.get("margin", DEFAULT_MARGIN_PX)
    if not _is_number(margin) or margin < 0:
        raise ValidationError(
            f"Invalid margin: {margin!r} (must be a non-negative number)",
            path=f"{path}.margin"
        )

    if "size" in data and data["size"] not in PAGE_SIZES:
        raise ValidationError(f"Invalid page size: {data['size']!r}", path=f"{path}.size")
    if "orientation" in data and data["orientation"] not in ORIENTATIONS:
        raise ValidationError(
            f"Invalid orientation: {data['orientation']!r}",
            path=f"{path}.orientation"
        )


def validate_element(data: Any, path: str = "element") -> None:
    """Validate a single element, including its variant-specific fields."""
    if not isinstance(data, dict):
        raise ValidationError("element must be a dict", path=path)

    required = ["id", "type", "x", "y", "width", "height"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Element missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing]
        )

    if not isinstance(data["id"], str) or not data["id"]:
        raise ValidationError(f"Invalid id: {data['id']!r}", path=f"{path}.id")

    element_type = data["type"]
    if element_type not in ELEMENT_TYPES:
        raise ValidationError(
            f"Invalid element type: {element_type!r}",
            path=f"{path}.type"
        )

    for key in ("x", "y"):
        if not _is_number(data[key]):
            raise ValidationError(
                f"Invalid {key}: {data[key]!r} (must be a number)",
                path=f"{path}.{key}"
            )
    for key in ("width", "height"):
        if not _is_number(data[key]) or data[key] < 0:
            raise ValidationError(
                f"Invalid {key}: {data[key]!r} (must be a non-negative number)",
                path=f"{path}.{key}"
            )

    min_height = data.get("minHeight")
    if min_height is not None and (not _is_number(min_height) or min_height < 0):
        raise ValidationError(
            f"Invalid minHeight: {min_height!r}",
            path=f"{path}.minHeight"
        )

    binding = data.get("binding")
    if binding is not None and not isinstance(binding, str):
        raise ValidationError(
            f"Invalid binding: {binding!r} (must be a string)",
            path=f"{path}.binding"
        )

    if element_type == "table":
        columns = data.get("columns")
        if not isinstance(columns, list) or not all(isinstance(c, str) for c in columns):
            raise ValidationError(
                "table columns must be a list of strings",
                path=f"{path}.columns"
            )
    elif element_type == "text":
        font_size = data.get("fontSize", 14)
        if not _is_number(font_size) or font_size <= 0:
            raise ValidationError(
                f"Invalid fontSize: {font_size!r}",
                path=f"{path}.fontSize"
            )
        if data.get("fontWeight", "normal") not in ("normal", "bold"):
            raise ValidationError(
                f"Invalid fontWeight: {data.get('fontWeight')!r}",
                path=f"{path}.fontWeight"
            )
        if data.get("align", "left") not in ("left", "center", "right"):
            raise ValidationError(
                f"Invalid align: {data.get('align')!r}",
                path=f"{path}.align"
            )
    elif element_type == "line":
        thickness = data.get("thickness", 1)
        if not _is_number(thickness) or thickness < 0:
            raise ValidationError(
                f"Invalid thickness: {thickness!r}",
                path=f"{path}.thickness"
            )
    elif element_type == "image":
        src = data.get("src", "")
        if src is not None and not isinstance(src, str):
            raise ValidationError(f"Invalid src: {src!r}", path=f"{path}.src")
        ratio = data.get("naturalAspectRatio")
        if ratio is not None and (not _is_number(ratio) or ratio <= 0):
            raise ValidationError(
                f"Invalid naturalAspectRatio: {ratio!r}",
                path=f"{path}.naturalAspectRatio"
            )
