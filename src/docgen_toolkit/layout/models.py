"""
Module: layout.models

Purpose:
    Data models for the repositioned layout.
    Immutable dataclasses representing placed elements, rows and the
    final layout. These are derived per render and never persisted.

Key Classes:
    - PositionedElement: Element with its final Y and actual height
    - Row: Elements grouped by authored Y, stacked as one band
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)

Used By:
    - layout.repositioner: Creates LayoutResults
    - output.renderer: Consumes placements
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from docgen_toolkit.core.models.elements import Element


@dataclass(frozen=True)
class PositionedElement:
    """
    An element placed by the layout engine.

    Horizontal position and width always come from the authored
    element; only the vertical placement is recomputed.

    Attributes:
        element: The authored element (unchanged)
        final_y: Top edge after repositioning (px)
        actual_height: Height after data-driven estimation (px)
        order: Index of the element in the template (paint order)
        row_index: Index of the row the element was grouped into

    Example:
        >>> placed = PositionedElement(el, final_y=100, actual_height=200, order=2)
        >>> placed.bottom
        300
    """

    element: Element
    final_y: float
    actual_height: float
    order: int
    row_index: int = 0

    @property
    def id(self) -> str:
        return self.element.id

    @property
    def x(self) -> float:
        return self.element.x

    @property
    def width(self) -> float:
        return self.element.width

    @property
    def bottom(self) -> float:
        """Bottom Y coordinate (final_y + actual_height)."""
        return self.final_y + self.actual_height

    @property
    def y_shift(self) -> float:
        """How far the element moved from its authored Y."""
        return self.final_y - self.element.y


@dataclass(frozen=True)
class Row:
    """
    A band of elements sharing an approximate authored Y.

    Attributes:
        index: Row number, top to bottom
        elements: Elements in the row (sorted by authored Y)
        top: Final Y of every element in the row
        height: Tallest actual height in the row
    """

    index: int
    elements: Tuple[Element, ...]
    top: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def authored_top(self) -> float:
        """Authored Y of the row's first element."""
        return self.elements[0].y


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Placements are in row order (top to bottom); use in_paint_order()
    for the template's original order.

    Attributes:
        placements: Every input element exactly once
        rows: Row bands (empty for the authored, data-free path)
        warnings: List of warning messages

    Example:
        >>> result = reposition(elements, data)
        >>> result.by_id()["items"].actual_height
        200
    """

    placements: Tuple[PositionedElement, ...]
    rows: Tuple[Row, ...] = ()
    warnings: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.placements)

    def __iter__(self) -> Iterator[PositionedElement]:
        return iter(self.placements)

    @property
    def is_empty(self) -> bool:
        return not self.placements

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def bottom(self) -> float:
        """Lowest bottom edge across placements (0 when empty)."""
        return max((p.bottom for p in self.placements), default=0)

    def by_id(self) -> Dict[str, PositionedElement]:
        """Map element id to placement."""
        return {p.id: p for p in self.placements}

    def in_paint_order(self) -> List[PositionedElement]:
        """Placements sorted by original template order."""
        return sorted(self.placements, key=lambda p: p.order)
