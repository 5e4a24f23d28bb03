"""
Module: output.visual

Purpose:
    Target-agnostic visual tree produced by the renderer.
    Each node is an absolute box in page pixel space plus a resolved
    content description. The HTML and PDF writers both consume the
    same tree, which keeps preview and PDF output in step.

Key Classes:
    - Box: Absolute position and size
    - TextContent / LineContent / TableContent / ImageContent
    - VisualNode: One rendered element
    - VisualTree: Page plus nodes in paint order

Dependencies:
    - dataclasses (std)
    - json (std): Deterministic serialization

Used By:
    - output.renderer: Creates trees
    - output.html_writer, output.pdf_writer: Consume trees
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional, Tuple, Union

from docgen_toolkit.core.models.elements import ElementType, FontWeight, TextAlign
from docgen_toolkit.core.models.page import Page

# Shown for table cells with no value and for empty tables
NO_DATA_MARKER = "—"
IMAGE_PLACEHOLDER = "[Image]"


class Justify(str, Enum):
    """Horizontal placement of text within its box."""
    START = "start"
    CENTER = "center"
    END = "end"

    def __str__(self) -> str:
        return self.value


ALIGN_TO_JUSTIFY = {
    TextAlign.LEFT: Justify.START,
    TextAlign.CENTER: Justify.CENTER,
    TextAlign.RIGHT: Justify.END,
}


@dataclass(frozen=True, slots=True)
class Box:
    """
    Absolute box in page pixel space.

    Example:
        >>> Box(left=40, top=350, width=300, height=40).bottom
        390
    """

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def to_dict(self) -> dict[str, float]:
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class TextContent:
    text: str
    font_size: float
    font_weight: FontWeight
    justify: Justify
    bound: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "text",
            "text": self.text,
            "fontSize": self.font_size,
            "fontWeight": self.font_weight.value,
            "justify": self.justify.value,
            "bound": self.bound,
        }


@dataclass(frozen=True)
class LineContent:
    """Filled bar spanning the box width, `thickness` pixels high."""

    thickness: float

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "line", "thickness": self.thickness}


@dataclass(frozen=True)
class TableContent:
    """
    Resolved table.

    Attributes:
        columns: Header strings
        rows: Cell text, one tuple per body row
        is_placeholder: True when the binding produced no records and
            rows holds a single row of NO_DATA_MARKER cells
    """

    columns: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]
    is_placeholder: bool = False

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "table",
            "columns": list(self.columns),
            "rows": [list(row) for row in self.rows],
            "isPlaceholder": self.is_placeholder,
        }


@dataclass(frozen=True)
class ImageContent:
    """
    Image reference, or a placeholder marker when there is no source.

    Attributes:
        src: Image URL/path/data URI (None for placeholders)
        preserve_aspect_ratio: Fit inside the box without distortion
        natural_aspect_ratio: width / height of the asset, when known
    """

    src: Optional[str]
    preserve_aspect_ratio: bool = True
    natural_aspect_ratio: Optional[float] = None

    @property
    def is_placeholder(self) -> bool:
        return not self.src

    def fit(self, box: Box) -> Box:
        """
        Box the image actually occupies inside `box`.

        With a known aspect ratio and preservation on, the image is
        scaled to fit and centred (CSS object-fit: contain); otherwise
        it fills the box.
        """
        ratio = self.natural_aspect_ratio
        if not self.preserve_aspect_ratio or not ratio or box.width <= 0 or box.height <= 0:
            return box
        if box.width / box.height > ratio:
            width = box.height * ratio
            return Box(box.left + (box.width - width) / 2, box.top, width, box.height)
        height = box.width / ratio
        return Box(box.left, box.top + (box.height - height) / 2, box.width, height)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "kind": "image",
            "src": self.src,
            "preserveAspectRatio": self.preserve_aspect_ratio,
            "placeholder": IMAGE_PLACEHOLDER if self.is_placeholder else None,
        }
        if self.natural_aspect_ratio is not None:
            d["naturalAspectRatio"] = self.natural_aspect_ratio
        return d


Content = Union[TextContent, LineContent, TableContent, ImageContent]


@dataclass(frozen=True)
class VisualNode:
    """A rendered element: identity, absolute box and content."""

    element_id: str
    element_type: ElementType
    box: Box
    content: Content

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.element_id,
            "type": self.element_type.value,
            "box": self.box.to_dict(),
            "content": self.content.to_dict(),
        }


@dataclass(frozen=True)
class VisualTree:
    """
    Complete render output for one page.

    Nodes are in template (paint) order. Serialization is
    deterministic: the same tree always produces the same JSON text.
    """

    page: Page
    nodes: Tuple[VisualNode, ...]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[VisualNode]:
        return iter(self.nodes)

    def find(self, element_id: str) -> Optional[VisualNode]:
        for node in self.nodes:
            if node.element_id == element_id:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page.to_dict(),
            "nodes": [node.to_dict() for node in self.nodes],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent, sort_keys=True)
