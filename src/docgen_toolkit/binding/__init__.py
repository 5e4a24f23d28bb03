"""
Module: binding

Purpose:
    Data binding resolution for template elements.

Key Functions:
    - resolve_scalar(): Resolve a dotted path to display text
    - resolve_array(): Resolve a dotted path to a list of records
    - extract_bindings(): Unique bindings used by a template

Used By:
    - docgen_toolkit.layout: Height estimation
    - docgen_toolkit.output: Rendering
"""

from .resolver import (
    extract_bindings,
    find_unresolved_bindings,
    placeholder,
    resolve_array,
    resolve_scalar,
    to_display_text,
)

__all__ = [
    "extract_bindings",
    "find_unresolved_bindings",
    "placeholder",
    "resolve_array",
    "resolve_scalar",
    "to_display_text",
]
