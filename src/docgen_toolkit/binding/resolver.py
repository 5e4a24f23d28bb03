"""
Module: binding.resolver

Purpose:
    Resolve dotted binding paths ("invoice.customer.name") against a
    runtime data payload. Resolution is pure and never raises: anything
    that cannot be resolved renders as the literal placeholder
    "{{path}}" (scalars) or an empty list (arrays), so unbound templates
    stay debuggable instead of failing.

Key Functions:
    - resolve_scalar(): Path -> display string or placeholder
    - resolve_array(): Path -> list of records or []
    - placeholder(): Build the "{{path}}" marker
    - to_display_text(): Text form of a resolved value
    - extract_bindings(): Unique bindings used by a set of elements
    - find_unresolved_bindings(): Bindings the payload cannot satisfy

Traversal:
    1. Split the path on "."
    2. Mappings are walked by key; lists/tuples by decimal index
    3. A missing key, an out-of-range index or a scalar before the path
       is exhausted stops resolution

Dependencies:
    - json (std): Text form of nested values

Used By:
    - layout.heights: Table row counts
    - output.renderer: Text and table content
    - controller: Unresolved-binding warnings
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional

from docgen_toolkit.core.models.elements import Element, TableElement, TextElement

_MISSING = object()


def placeholder(path: Optional[str]) -> str:
    """
    Build the placeholder text for an unresolved path.

    Example:
        >>> placeholder("invoice.total")
        '{{invoice.total}}'
    """
    return "{{" + (path or "") + "}}"


def _walk(path: Optional[str], data: Any) -> Any:
    """Walk path through data, returning _MISSING when it cannot be followed."""
    if not path or not data or not isinstance(data, Mapping):
        return _MISSING

    current: Any = data
    for segment in path.split("."):
        if isinstance(current, Mapping):
            if segment not in current:
                return _MISSING
            current = current[segment]
        elif isinstance(current, (list, tuple)):
            if not (segment.isascii() and segment.isdigit()):
                return _MISSING
            index = int(segment)
            if index >= len(current):
                return _MISSING
            current = current[index]
        else:
            return _MISSING
    return current


def to_display_text(value: Any) -> str:
    """
    Convert a resolved value to its display text.

    Booleans render lowercase, integral floats drop the trailing ".0",
    nested mappings and lists render as compact JSON.

    Example:
        >>> to_display_text(9720.0)
        '9720'
        >>> to_display_text(True)
        'true'
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)


def resolve_scalar(path: Optional[str], data: Any) -> str:
    """
    Resolve a binding path to display text.

    Args:
        path: Dotted path like "invoice.customer.name"
        data: Runtime data payload

    Returns:
        Text form of the resolved value, or "{{path}}" when the path is
        empty, the payload is empty, any segment is missing, or the
        final value is None.

    Example:
        >>> resolve_scalar("invoice.total", {"invoice": {"total": "$50"}})
        '$50'
        >>> resolve_scalar("invoice.total", {})
        '{{invoice.total}}'
    """
    value = _walk(path, data)
    if value is _MISSING or value is None:
        return placeholder(path)
    return to_display_text(value)


def resolve_array(path: Optional[str], data: Any) -> List[Any]:
    """
    Resolve a binding path to a list of records.

    Args:
        path: Dotted path to an array, or None
        data: Runtime data payload

    Returns:
        A new list with the resolved items, or [] when the path is
        absent, unresolvable, or does not point at a list.
    """
    value = _walk(path, data)
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def extract_bindings(elements: Iterable[Element]) -> List[str]:
    """
    Collect the unique bindings used by elements, in first-seen order.

    Only text and table elements carry bindings.
    """
    bindings: List[str] = []
    for element in elements:
        if isinstance(element, (TextElement, TableElement)) and element.binding:
            if element.binding not in bindings:
                bindings.append(element.binding)
    return bindings


def find_unresolved_bindings(elements: Iterable[Element], data: Any) -> List[str]:
    """
    List bindings the payload cannot satisfy, in first-seen order.

    A text binding is unresolved when it would render as a placeholder.
    A table binding is unresolved when it does not point at a list (an
    empty list is a valid, resolved binding).
    """
    unresolved: List[str] = []
    for element in elements:
        if isinstance(element, TextElement) and element.binding:
            value = _walk(element.binding, data)
            missing = value is _MISSING or value is None
        elif isinstance(element, TableElement) and element.binding:
            missing = not isinstance(_walk(element.binding, data), (list, tuple))
        else:
            continue
        if missing and element.binding not in unresolved:
            unresolved.append(element.binding)
    return unresolved
