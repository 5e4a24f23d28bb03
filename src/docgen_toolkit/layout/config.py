"""
Module: layout.config

Purpose:
    Configuration for the layout engine.
    Defines row grouping tolerance, inter-row spacing and the table
    metrics used to estimate data-driven heights.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - layout.heights: Table height estimation
    - layout.repositioner: Row grouping and stacking
    - output.pdf_writer: Table row geometry
"""

from __future__ import annotations

from dataclasses import dataclass


# Elements whose authored Y differ by no more than this share a row
DEFAULT_ROW_TOLERANCE_PX = 5
DEFAULT_ROW_GAP_PX = 10
TABLE_HEADER_HEIGHT_PX = 40
TABLE_ROW_HEIGHT_PX = 32


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for repositioning (immutable).

    Attributes:
        row_tolerance: Max Y distance (px) between an element and the
            previous one for both to share a row
        row_gap: Vertical spacing between stacked rows (px)
        table_header_height: Height of a table header row (px)
        table_row_height: Height of each table body row (px)

    Example:
        >>> config = LayoutConfig()
        >>> config.table_height(5)
        200
    """

    row_tolerance: float = DEFAULT_ROW_TOLERANCE_PX
    row_gap: float = DEFAULT_ROW_GAP_PX
    table_header_height: float = TABLE_HEADER_HEIGHT_PX
    table_row_height: float = TABLE_ROW_HEIGHT_PX

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.row_tolerance < 0:
            raise ValueError(f"row_tolerance must be non-negative: {self.row_tolerance}")
        if self.row_gap < 0:
            raise ValueError(f"row_gap must be non-negative: {self.row_gap}")
        if self.table_header_height <= 0:
            raise ValueError(f"table_header_height must be positive: {self.table_header_height}")
        if self.table_row_height <= 0:
            raise ValueError(f"table_row_height must be positive: {self.table_row_height}")

    def table_height(self, row_count: int) -> float:
        """Height needed for a header plus row_count body rows."""
        return self.table_header_height + row_count * self.table_row_height
