"""
Serialization Utilities

Provides to/from JSON utilities for templates and data payloads.

- `serialize_template()` / `deserialize_template()`: dict <-> Template
- `load_template_json()` / `save_template_json()`: file round-trips
- `load_data_json()`: runtime data payload (must be a JSON object)
- Validation runs before deserialization so models never see
  malformed element shapes
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.templates import Template
from ..schemas.validator import ValidationError, validate_template


# ─────────────────────────────────────────────────────────────────────────────
# Template Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_template(template: Template) -> dict[str, Any]:
    """
    Serialize a Template to a dictionary.

    The output uses the persisted camelCase keys and passes validation.
    """
    return template.to_dict()


def deserialize_template(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Template:
    """
    Deserialize a Template from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate before deserializing
        strict: Also validate against the JSON Schema

    Returns:
        Template instance

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If data cannot be parsed into models
    """
    if validate:
        validate_template(data, strict=strict)
    return Template.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# File Utilities
# ─────────────────────────────────────────────────────────────────────────────

def load_template_json(path: Path, *, validate: bool = True, strict: bool = False) -> Template:
    """
    Load a template from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the JSON is unreadable or the template is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Template file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"Invalid JSON in {path}: {e}",
            path=str(path),
            errors=[str(e)]
        ) from e

    try:
        return deserialize_template(data, validate=validate, strict=strict)
    except ValidationError as e:
        e.errors.insert(0, f"in file {path}")
        raise


def save_template_json(template: Template, path: Path) -> None:
    """Save a template to a JSON file (creates parent directories)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_template(template), f, ensure_ascii=False, indent=2)
        f.write("\n")


def load_data_json(path: Path) -> dict[str, Any]:
    """
    Load a runtime data payload from a JSON file.

    The payload has no required shape beyond being a JSON object;
    unresolvable bindings degrade to placeholders at render time.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the file is not a JSON object
    """
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {path}: {e}", path=str(path), errors=[str(e)]) from e

    if not isinstance(data, dict):
        raise ValidationError(
            f"Data payload must be a JSON object, got {type(data).__name__}",
            path=str(path)
        )
    return data
