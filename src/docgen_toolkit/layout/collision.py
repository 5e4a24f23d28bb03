"""
Module: layout.collision

Purpose:
    Overlap checks used by the design surface when elements are dropped
    or resized. Operates on authored geometry only; data-driven growth
    is handled by the repositioner.

Key Functions:
    - elements_overlap(): Axis-aligned box intersection test
    - find_non_overlapping_position(): Push an element down until clear
    - adjust_elements_to_prevent_overlap(): Re-stack authored rows

Dependencies:
    - layout.repositioner: Row grouping

Used By:
    - Editor integrations (drop/resize handlers)
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from docgen_toolkit.core.models.elements import Element

from .config import DEFAULT_ROW_GAP_PX, DEFAULT_ROW_TOLERANCE_PX
from .repositioner import group_rows

logger = logging.getLogger(__name__)

PUSH_STEP_PX = 10
MAX_PUSH_ATTEMPTS = 100


def elements_overlap(first: Element, second: Element) -> bool:
    """
    Check whether two elements' authored boxes intersect.

    Touching edges do not count as overlap.
    """
    return not (
        first.x + first.width <= second.x
        or first.x >= second.x + second.width
        or first.y + first.height <= second.y
        or first.y >= second.y + second.height
    )


def find_non_overlapping_position(
    element: Element,
    elements: Sequence[Element],
    page_height: float,
) -> Tuple[float, float]:
    """
    Find the nearest clear position for an element by pushing it down.

    Tries the current position first, then moves down in 10px steps
    (at most 100 attempts). A candidate must not overlap any other
    element and must end above the page bottom. If nothing fits the
    original position is returned.

    Args:
        element: Element being placed
        elements: All elements on the page (the element itself is skipped by id)
        page_height: Page height in pixels

    Returns:
        (x, y) for the element
    """
    others = [other for other in elements if other.id != element.id]
    if not others:
        return element.x, element.y

    if not any(elements_overlap(element, other) for other in others):
        return element.x, element.y

    test_y = element.y
    for _ in range(MAX_PUSH_ATTEMPTS):
        candidate = element.moved_to(y=test_y)
        clear = not any(elements_overlap(candidate, other) for other in others)
        if clear and test_y + element.height <= page_height:
            return element.x, test_y
        test_y += PUSH_STEP_PX

    logger.debug(f"No clear position found for {element.id}; keeping original")
    return element.x, element.y


def adjust_elements_to_prevent_overlap(
    elements: Sequence[Element],
    tolerance: float = DEFAULT_ROW_TOLERANCE_PX,
    gap: float = DEFAULT_ROW_GAP_PX,
) -> List[Element]:
    """
    Re-stack authored rows so no two rows overlap.

    Unlike reposition(), this uses authored heights and the first row
    keeps every element's own authored Y. Later rows start below the
    tallest element of the previous row plus the gap.

    Returns:
        Moved copies of the elements, in row order
    """
    adjusted: List[Element] = []
    current_y = 0.0

    for row_index, row in enumerate(group_rows(elements, tolerance)):
        row_height = max(element.height for element in row)
        for element in row:
            if row_index == 0:
                adjusted.append(element)
            else:
                adjusted.append(element.moved_to(y=current_y))

        if row_index == 0:
            current_y = row[0].y + row_height + gap
        else:
            current_y += row_height + gap

    return adjusted
