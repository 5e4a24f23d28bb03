"""
Module: page

Purpose:
    Provides the Page dataclass - the fixed-size canvas a template is
    authored against. Dimensions are pixels at 96 DPI, matching the
    design surface, and are immutable during rendering.

Key Functions:
    - get_page_dimensions(size, orientation): Preset lookup with orientation swap
    - Page.from_preset(): Build a page from a named size
    - Page.to_dict() / Page.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.templates.Template
    - layout.repositioner (page overflow warnings)
    - output.renderer, output.html_writer, output.pdf_writer
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class PageSize(str, Enum):
    """Named page size presets."""
    A4 = "A4"
    LETTER = "Letter"
    LEGAL = "Legal"
    A3 = "A3"
    A5 = "A5"

    def __str__(self) -> str:
        return self.value


class PageOrientation(str, Enum):
    """Page orientation. Landscape swaps the preset width and height."""
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    def __str__(self) -> str:
        return self.value


# Page size presets (in pixels at 96 DPI)
PAGE_SIZES: Dict[PageSize, Tuple[int, int]] = {
    PageSize.A4: (794, 1123),
    PageSize.LETTER: (816, 1056),
    PageSize.LEGAL: (816, 1344),
    PageSize.A3: (1123, 1587),
    PageSize.A5: (559, 794),
}

DEFAULT_MARGIN_PX = 20


def get_page_dimensions(
    size: PageSize | str,
    orientation: PageOrientation | str = PageOrientation.PORTRAIT,
) -> Tuple[int, int]:
    """
    Get (width, height) in pixels for a named size and orientation.

    Example:
        >>> get_page_dimensions(PageSize.A4, PageOrientation.LANDSCAPE)
        (1123, 794)
    """
    width, height = PAGE_SIZES[PageSize(size)]
    if PageOrientation(orientation) is PageOrientation.LANDSCAPE:
        return height, width
    return width, height


@dataclass(frozen=True, slots=True)
class Page:
    """
    Page geometry for a template (immutable).

    Attributes:
        width: Page width in pixels
        height: Page height in pixels
        margin: Margin guide in pixels (informational, never clips content)
        size: Named size the dimensions were derived from
        orientation: Portrait or landscape

    Invariants:
        - width > 0 and height > 0
        - margin >= 0

    Example:
        >>> page = Page.from_preset(PageSize.A4)
        >>> (page.width, page.height)
        (794, 1123)
    """

    width: float
    height: float
    margin: float = DEFAULT_MARGIN_PX
    size: PageSize = PageSize.A4
    orientation: PageOrientation = PageOrientation.PORTRAIT

    def __post_init__(self) -> None:
        """Validate page geometry on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        if self.margin < 0:
            raise ValueError(f"margin must be non-negative: {self.margin}")

    @classmethod
    def from_preset(
        cls,
        size: PageSize | str = PageSize.A4,
        orientation: PageOrientation | str = PageOrientation.PORTRAIT,
        margin: float = DEFAULT_MARGIN_PX,
    ) -> Page:
        """Create a page from a named size preset."""
        width, height = get_page_dimensions(size, orientation)
        return cls(
            width=width,
            height=height,
            margin=margin,
            size=PageSize(size),
            orientation=PageOrientation(orientation),
        )

    @property
    def content_width(self) -> float:
        """Width inside the margin guides."""
        return self.width - self.margin * 2

    @property
    def content_height(self) -> float:
        """Height inside the margin guides."""
        return self.height - self.margin * 2

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted JSON shape."""
        return {
            "width": self.width,
            "height": self.height,
            "margin": self.margin,
            "size": self.size.value,
            "orientation": self.orientation.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Page:
        """
        Deserialize from dictionary. Unknown keys are ignored.

        Args:
            data: Dict with width and height, optionally margin, size, orientation

        Returns:
            Page instance
        """
        return cls(
            width=data["width"],
            height=data["height"],
            margin=data.get("margin", DEFAULT_MARGIN_PX),
            size=PageSize(data.get("size", PageSize.A4.value)),
            orientation=PageOrientation(data.get("orientation", PageOrientation.PORTRAIT.value)),
        )


A4_PAGE = Page.from_preset(PageSize.A4, PageOrientation.PORTRAIT, margin=DEFAULT_MARGIN_PX)
