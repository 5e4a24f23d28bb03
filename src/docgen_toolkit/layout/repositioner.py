"""
Module: layout.repositioner

Purpose:
    Re-stack a template's elements so data-driven growth (tables with
    more rows than at design time) never overlaps content below.
    Elements are grouped into rows by authored Y and each row is placed
    as a rigid band under the previous one.

Key Functions:
    - group_rows(): Partition elements into rows by authored Y
    - reposition(): Main layout function (data-bound path)
    - place_authored(): Authored coordinates only (data-free path)

Algorithm:
    1. Stable-sort elements by authored Y
    2. Scan once; start a new row when an element's Y differs from the
       previous element's Y by more than the tolerance (chained, so a
       slow diagonal run can merge into one tall row)
    3. The cursor starts at the topmost authored Y
    4. For each row: height = max actual height, every element gets
       final_y = cursor, then cursor += height + gap
    X is never touched.

Dependencies:
    - layout.heights: Actual heights
    - layout.config: Tolerance and gap
    - layout.models: PositionedElement, Row, LayoutResult

Used By:
    - output.renderer: render_template()
    - layout.collision: Row bands for authored overlap repair
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from docgen_toolkit.core.models.elements import Element
from docgen_toolkit.core.models.page import Page

from .config import DEFAULT_ROW_TOLERANCE_PX, LayoutConfig
from .heights import estimate_height
from .models import LayoutResult, PositionedElement, Row

logger = logging.getLogger(__name__)

_IndexedElement = Tuple[int, Element]


def group_rows(
    elements: Sequence[Element],
    tolerance: float = DEFAULT_ROW_TOLERANCE_PX,
) -> List[Tuple[Element, ...]]:
    """
    Partition elements into rows by authored Y.

    Each element is compared with the previous element in Y order, not
    with the row's first element.

    Args:
        elements: Elements in any order
        tolerance: Max Y difference (px) that keeps two neighbours together

    Returns:
        Rows top to bottom, each a tuple of elements in Y order

    Example:
        >>> [[e.id for e in row] for row in group_rows([a_at_50, b_at_53, c_at_200])]
        [['a', 'b'], ['c']]
    """
    return [
        tuple(element for _, element in row)
        for row in _group_indexed(list(enumerate(elements)), tolerance)
    ]


def _group_indexed(
    indexed: List[_IndexedElement],
    tolerance: float,
) -> List[List[_IndexedElement]]:
    """Group (index, element) pairs into rows, keeping the original index."""
    ordered = sorted(indexed, key=lambda pair: pair[1].y)

    rows: List[List[_IndexedElement]] = []
    current_row: List[_IndexedElement] = []
    last_y: Optional[float] = None

    for pair in ordered:
        y = pair[1].y
        if current_row and abs(y - last_y) > tolerance:
            rows.append(current_row)
            current_row = []
        current_row.append(pair)
        last_y = y

    if current_row:
        rows.append(current_row)
    return rows


def reposition(
    elements: Sequence[Element],
    data: Any = None,
    config: Optional[LayoutConfig] = None,
    *,
    page: Optional[Page] = None,
) -> LayoutResult:
    """
    Recompute vertical positions using data-driven heights.

    Rules:
    1. The topmost row keeps its authored Y exactly.
    2. Every later row starts at the previous row's top plus its height
       plus the row gap; its own authored Y is ignored.
    3. All elements in a row share one final Y.
    4. Heights only grow (see estimate_height), so rows never overlap.

    Args:
        elements: Authored elements
        data: Runtime data payload
        config: Layout configuration
        page: If given, a warning is recorded when content runs past
            the page bottom (content is never clipped)

    Returns:
        LayoutResult with every input element placed exactly once
    """
    if not elements:
        return LayoutResult(placements=())

    config = config or LayoutConfig()
    grouped = _group_indexed(list(enumerate(elements)), config.row_tolerance)

    placements: List[PositionedElement] = []
    rows: List[Row] = []
    warnings: List[str] = []

    # Start from the topmost element's authored Y
    current_y = grouped[0][0][1].y

    for row_index, row in enumerate(grouped):
        heights = [estimate_height(element, data, config) for _, element in row]
        row_height = max(heights)

        for (order, element), height in zip(row, heights):
            placements.append(PositionedElement(
                element=element,
                final_y=current_y,
                actual_height=height,
                order=order,
                row_index=row_index,
            ))

        rows.append(Row(
            index=row_index,
            elements=tuple(element for _, element in row),
            top=current_y,
            height=row_height,
        ))
        current_y += row_height + config.row_gap

    content_bottom = max(p.bottom for p in placements)
    if page is not None and content_bottom > page.height:
        message = (
            f"Content overflows page: bottom at {content_bottom}px, "
            f"page height {page.height}px"
        )
        logger.warning(message)
        warnings.append(message)

    logger.debug(f"Repositioned {len(elements)} elements into {len(rows)} rows")

    return LayoutResult(placements=tuple(placements), rows=tuple(rows), warnings=warnings)


def place_authored(elements: Sequence[Element]) -> LayoutResult:
    """
    Place elements at their authored coordinates and heights.

    Used for previewing a template without data: no height can change
    without data, so no repositioning is needed.
    """
    return LayoutResult(
        placements=tuple(
            PositionedElement(
                element=element,
                final_y=element.y,
                actual_height=element.height,
                order=order,
            )
            for order, element in enumerate(elements)
        ),
    )
