"""
Core Models Package

Immutable, validated data models shared by every other package.

All models are frozen dataclasses:
1. Rendering never mutates an authored template
2. Safe to share between concurrent renders
3. Edits produce new instances (see Template.bumped)
"""

from .page import (
    A4_PAGE,
    PAGE_SIZES,
    Page,
    PageOrientation,
    PageSize,
    get_page_dimensions,
)
from .elements import (
    Element,
    ElementBase,
    ElementType,
    FontWeight,
    ImageElement,
    LineElement,
    TableElement,
    TextAlign,
    TextElement,
    element_from_dict,
)
from .templates import Template

__all__ = [
    # Page
    "A4_PAGE",
    "PAGE_SIZES",
    "Page",
    "PageOrientation",
    "PageSize",
    "get_page_dimensions",
    # Elements
    "Element",
    "ElementBase",
    "ElementType",
    "FontWeight",
    "ImageElement",
    "LineElement",
    "TableElement",
    "TextAlign",
    "TextElement",
    "element_from_dict",
    # Template
    "Template",
]
