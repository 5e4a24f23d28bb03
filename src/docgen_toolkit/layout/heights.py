"""
Module: layout.heights

Purpose:
    Estimate the rendered height of an element for a given payload.
    Tables grow with their bound row count; everything else keeps its
    authored height. Growth only: an estimate never drops below the
    authored size, so sparse data cannot compress the layout.

Key Functions:
    - estimate_height(): Actual height for (element, data)

Dependencies:
    - binding.resolver: Array resolution for tables
    - layout.config: Table header/row metrics

Used By:
    - layout.repositioner: Row heights
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from docgen_toolkit.binding.resolver import resolve_array
from docgen_toolkit.core.models.elements import Element, TableElement

from .config import LayoutConfig

logger = logging.getLogger(__name__)


def estimate_height(
    element: Element,
    data: Any,
    config: Optional[LayoutConfig] = None,
) -> float:
    """
    Compute the actual rendered height of an element.

    For a table whose binding resolves to a non-empty list:
        max(floor, header_height + rows * row_height)
    where floor is min_height when set (never below the authored
    height), otherwise the authored height. All other elements,
    including unbound tables and tables bound to an empty list,
    keep their authored height.

    Args:
        element: Element to measure
        data: Runtime data payload (may be None)
        config: Layout configuration (defaults to LayoutConfig())

    Returns:
        Height in pixels, always >= element.height

    Example:
        >>> table = TableElement("items", 0, 100, 500, 100, min_height=100,
        ...                      columns=("Item", "Qty"), binding="items")
        >>> estimate_height(table, {"items": [{}] * 5})
        200
    """
    if isinstance(element, TableElement) and element.binding:
        records = resolve_array(element.binding, data)
        if records:
            config = config or LayoutConfig()
            computed = config.table_height(len(records))
            floor = element.height
            if element.min_height is not None:
                floor = max(element.min_height, element.height)
            height = max(floor, computed)
            logger.debug(
                f"Table {element.id}: {len(records)} rows -> {height}px "
                f"(authored {element.height}px)"
            )
            return height
    return element.height
