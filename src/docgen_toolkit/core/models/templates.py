"""
Module: templates

Purpose:
    Provides the Template dataclass - a named page plus an ordered
    sequence of elements. Element order is insertion order and drives
    paint order only; layout order is derived from authored Y.

Key Functions:
    - Template.bumped(**changes): Copy with version incremented
    - Template.find(element_id): Element lookup by id
    - Template.to_dict() / Template.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - .page.Page
    - .elements

Used By:
    - core.utils.serialization
    - storage.store
    - controller
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

from .elements import Element, element_from_dict
from .page import A4_PAGE, Page


@dataclass(frozen=True)
class Template:
    """
    Document template (immutable).

    Attributes:
        id: Template identifier
        name: Display name
        version: Incremented on every persisted update (last writer wins)
        page: Page geometry
        elements: Elements in insertion (paint) order
        description: Optional free text

    Invariants:
        - version >= 1
        - element ids are unique

    Example:
        >>> t = Template("t1", "Invoice", 1, A4_PAGE, ())
        >>> t.bumped(name="Receipt").version
        2
    """

    id: str
    name: str
    version: int = 1
    page: Page = A4_PAGE
    elements: Tuple[Element, ...] = ()
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate template on construction."""
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))
        if self.version < 1:
            raise ValueError(f"version must be >= 1: {self.version}")
        seen: set[str] = set()
        for element in self.elements:
            if element.id in seen:
                raise ValueError(f"Duplicate element id: {element.id!r}")
            seen.add(element.id)

    @property
    def element_count(self) -> int:
        return len(self.elements)

    @property
    def is_empty(self) -> bool:
        return not self.elements

    def find(self, element_id: str) -> Optional[Element]:
        """Find an element by id, or None."""
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def bumped(self, **changes: Any) -> Template:
        """Return a copy with changes applied and the version incremented."""
        return replace(self, version=self.version + 1, **changes)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "page": self.page.to_dict(),
            "elements": [element.to_dict() for element in self.elements],
        }
        if self.description is not None:
            d["description"] = self.description
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Template:
        """
        Deserialize from dictionary.

        Only page and elements are required; id, name and version fall
        back to defaults so bare {page, elements} layouts load too.
        """
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            version=data.get("version", 1),
            page=Page.from_dict(data["page"]),
            elements=tuple(element_from_dict(e) for e in data.get("elements", [])),
            description=data.get("description"),
        )
