"""
Module: layout

Purpose:
    Data-driven layout for templates.
    Converts authored elements plus a data payload into positioned,
    non-overlapping elements.

Key Functions:
    - estimate_height(): Data-driven element height
    - group_rows(): Row grouping by authored Y
    - reposition(): Main entry point for layout
    - place_authored(): Data-free placement

Key Classes:
    - LayoutConfig: Configuration for the layout engine
    - PositionedElement: Element with final Y and actual height
    - LayoutResult: Layout output

Used By:
    - docgen_toolkit.output.renderer
    - docgen_toolkit.controller
"""

from .config import LayoutConfig
from .models import PositionedElement, Row, LayoutResult
from .heights import estimate_height
from .repositioner import group_rows, reposition, place_authored
from .collision import (
    elements_overlap,
    find_non_overlapping_position,
    adjust_elements_to_prevent_overlap,
)

__all__ = [
    # Config
    "LayoutConfig",
    # Models
    "PositionedElement",
    "Row",
    "LayoutResult",
    # Functions
    "estimate_height",
    "group_rows",
    "reposition",
    "place_authored",
    "elements_overlap",
    "find_non_overlapping_position",
    "adjust_elements_to_prevent_overlap",
]
