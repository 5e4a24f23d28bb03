"""
Module: storage

Purpose:
    Template persistence scoped by owner.

Key Classes:
    - TemplateStore, InMemoryTemplateStore, JsonDirectoryTemplateStore
    - TemplateRecord
    - TemplateNotFoundError
"""

from .store import (
    InMemoryTemplateStore,
    JsonDirectoryTemplateStore,
    TemplateNotFoundError,
    TemplateRecord,
    TemplateStore,
)

__all__ = [
    "TemplateStore",
    "InMemoryTemplateStore",
    "JsonDirectoryTemplateStore",
    "TemplateRecord",
    "TemplateNotFoundError",
]
