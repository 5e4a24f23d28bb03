"""
Module: elements

Purpose:
    Provides the element dataclasses - the positioned building blocks of a
    template. Elements form a tagged union discriminated by ElementType;
    every consumer dispatches on the concrete class and rejects anything
    else with TypeError.

Key Classes:
    - TextElement: Literal or data-bound text
    - LineElement: Horizontal rule
    - TableElement: Column headers plus a binding to an array of records
    - ImageElement: Image reference with aspect-ratio handling

Key Functions:
    - element_from_dict(data): Deserialize any element by its "type" tag
    - <Element>.to_dict(): Serialize with the persisted camelCase keys

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.templates.Template
    - core.utils.serialization
    - layout, output (all consumers of the union)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple, Type, Union


class ElementType(str, Enum):
    """Discriminator tag for the element union."""
    TEXT = "text"
    LINE = "line"
    TABLE = "table"
    IMAGE = "image"

    def __str__(self) -> str:
        return self.value


class FontWeight(str, Enum):
    NORMAL = "normal"
    BOLD = "bold"

    def __str__(self) -> str:
        return self.value


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ElementBase:
    """
    Fields shared by every element variant (immutable).

    Positions and sizes are author-time values in page pixel space.
    The layout engine never mutates them; it produces PositionedElements
    carrying the final Y and actual height instead.

    Attributes:
        id: Identity within a template (never used for ordering)
        x: Left edge in pixels
        y: Top edge in pixels as authored
        width: Width in pixels
        height: Authored height in pixels
        min_height: Optional floor for data-driven growth

    Invariants:
        - id is a non-empty string
        - width >= 0, height >= 0
        - min_height is None or >= 0
    """

    element_type: ClassVar[ElementType]

    id: str
    x: float
    y: float
    width: float
    height: float
    min_height: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate common geometry on construction."""
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"id must be a non-empty string: {self.id!r}")
        if self.width < 0:
            raise ValueError(f"width must be >= 0: {self.width}")
        if self.height < 0:
            raise ValueError(f"height must be >= 0: {self.height}")
        if self.min_height is not None and self.min_height < 0:
            raise ValueError(f"min_height must be >= 0: {self.min_height}")

    @property
    def type(self) -> ElementType:
        """The union tag for this element."""
        return self.element_type

    @property
    def bottom(self) -> float:
        """Authored bottom edge (y + height)."""
        return self.y + self.height

    def moved_to(self, x: Optional[float] = None, y: Optional[float] = None) -> ElementBase:
        """Return a copy at a new position (size unchanged)."""
        return replace(
            self,
            x=self.x if x is None else x,
            y=self.y if y is None else y,
        )

    def _base_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "type": self.element_type.value,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }
        if self.min_height is not None:
            d["minHeight"] = self.min_height
        return d

    @staticmethod
    def _base_kwargs(data: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": data["id"],
            "x": data["x"],
            "y": data["y"],
            "width": data["width"],
            "height": data["height"],
            "min_height": data.get("minHeight"),
        }


@dataclass(frozen=True)
class TextElement(ElementBase):
    """
    Text element.

    When binding is set, the displayed text is resolved from the data
    payload at render time and content is only the design-time fallback.

    Example:
        >>> el = TextElement("total", x=500, y=900, width=200, height=40,
        ...                  content="Total", binding="invoice.total")
        >>> el.is_bound
        True
    """

    element_type: ClassVar[ElementType] = ElementType.TEXT

    content: str = ""
    font_size: float = 14
    font_weight: FontWeight = FontWeight.NORMAL
    align: TextAlign = TextAlign.LEFT
    binding: Optional[str] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive: {self.font_size}")

    @property
    def is_bound(self) -> bool:
        return bool(self.binding)

    def to_dict(self) -> dict[str, Any]:
        d = self._base_dict()
        d.update({
            "content": self.content,
            "fontSize": self.font_size,
            "fontWeight": self.font_weight.value,
            "align": self.align.value,
        })
        if self.binding:
            d["binding"] = self.binding
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TextElement:
        return cls(
            **cls._base_kwargs(data),
            content=data.get("content", ""),
            font_size=data.get("fontSize", 14),
            font_weight=FontWeight(data.get("fontWeight", FontWeight.NORMAL.value)),
            align=TextAlign(data.get("align", TextAlign.LEFT.value)),
            binding=data.get("binding") or None,
        )


@dataclass(frozen=True)
class LineElement(ElementBase):
    """Horizontal rule drawn as a filled bar `thickness` pixels high."""

    element_type: ClassVar[ElementType] = ElementType.LINE

    thickness: float = 1

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.thickness < 0:
            raise ValueError(f"thickness must be >= 0: {self.thickness}")

    def to_dict(self) -> dict[str, Any]:
        d = self._base_dict()
        d["thickness"] = self.thickness
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LineElement:
        return cls(**cls._base_kwargs(data), thickness=data.get("thickness", 1))


@dataclass(frozen=True)
class TableElement(ElementBase):
    """
    Table element.

    The binding points at an array of records; each record becomes a body
    row. This is the only element whose rendered height depends on data.

    Attributes:
        columns: Ordered column header strings
        binding: Dotted path to an array in the data payload
    """

    element_type: ClassVar[ElementType] = ElementType.TABLE

    columns: Tuple[str, ...] = ()
    binding: Optional[str] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if not isinstance(self.columns, tuple):
            object.__setattr__(self, "columns", tuple(self.columns))

    @property
    def is_bound(self) -> bool:
        return bool(self.binding)

    def to_dict(self) -> dict[str, Any]:
        d = self._base_dict()
        d["columns"] = list(self.columns)
        if self.binding:
            d["binding"] = self.binding
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TableElement:
        return cls(
            **cls._base_kwargs(data),
            columns=tuple(str(c) for c in data.get("columns", ())),
            binding=data.get("binding") or None,
        )


@dataclass(frozen=True)
class ImageElement(ElementBase):
    """
    Image element.

    Attributes:
        src: Image URL, file path or data URI (empty renders a placeholder)
        maintain_aspect_ratio: Fit the image inside its box without distortion
        natural_aspect_ratio: width / height of the source asset, once known
    """

    element_type: ClassVar[ElementType] = ElementType.IMAGE

    src: str = ""
    maintain_aspect_ratio: bool = True
    natural_aspect_ratio: Optional[float] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.natural_aspect_ratio is not None and self.natural_aspect_ratio <= 0:
            raise ValueError(
                f"natural_aspect_ratio must be positive: {self.natural_aspect_ratio}"
            )

    @property
    def has_source(self) -> bool:
        return isinstance(self.src, str) and bool(self.src)

    def to_dict(self) -> dict[str, Any]:
        d = self._base_dict()
        d["src"] = self.src
        d["maintainAspectRatio"] = self.maintain_aspect_ratio
        if self.natural_aspect_ratio is not None:
            d["naturalAspectRatio"] = self.natural_aspect_ratio
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImageElement:
        maintain = data.get("maintainAspectRatio")
        return cls(
            **cls._base_kwargs(data),
            src=data.get("src") or "",
            # Absent means "maintain", matching the editor default
            maintain_aspect_ratio=maintain is not False,
            natural_aspect_ratio=data.get("naturalAspectRatio"),
        )


Element = Union[TextElement, LineElement, TableElement, ImageElement]

ELEMENT_CLASSES: Dict[ElementType, Type[ElementBase]] = {
    ElementType.TEXT: TextElement,
    ElementType.LINE: LineElement,
    ElementType.TABLE: TableElement,
    ElementType.IMAGE: ImageElement,
}


def element_from_dict(data: dict[str, Any]) -> Element:
    """
    Deserialize an element using its "type" tag.

    Args:
        data: Element dictionary in the persisted camelCase shape

    Returns:
        Concrete element instance

    Raises:
        ValueError: If the type tag is unknown
        KeyError: If a common field is missing
    """
    try:
        element_type = ElementType(data.get("type"))
    except ValueError as e:
        raise ValueError(f"Unknown element type: {data.get('type')!r}") from e
    return ELEMENT_CLASSES[element_type].from_dict(data)
