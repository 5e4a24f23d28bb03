"""
Document Template Core Package

Shared data models and utilities. These models are the single source
of truth for every other package:

1. **Immutable Data Models**
   Frozen dataclasses; edits create new instances.

2. **Validated at the Boundary**
   Template JSON is checked by core.schemas before models are built,
   so the layout engine can assume well-formed elements.

3. **Persisted Shape Preserved**
   to_dict()/from_dict() use the camelCase keys the design surface
   stores, and ignore unknown keys.
"""

from .models import Page, Template, Element, ElementType
from .schemas import ValidationError

__all__ = [
    "Page",
    "Template",
    "Element",
    "ElementType",
    "ValidationError",
]
