"""
Module: storage.store

Purpose:
    Persistence interface for templates.
    Each record is a Template owned by one user, with creation and
    update timestamps. Lookups are scoped by owner: a template that
    exists but belongs to someone else is reported as not found.

Key Classes:
    - TemplateRecord: Template plus ownership/timestamps
    - TemplateStore: Abstract store (create/get/list/update/delete)
    - InMemoryTemplateStore: Dict-backed store
    - JsonDirectoryTemplateStore: One JSON file per template
    - TemplateNotFoundError: Missing or foreign template

Dependencies:
    - core.utils.serialization: Template validation on load

Used By:
    - controller.build_from_store()
"""

from __future__ import annotations

import json
import logging
import os
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from docgen_toolkit.core.models.elements import Element
from docgen_toolkit.core.models.page import Page
from docgen_toolkit.core.models.templates import Template
from docgen_toolkit.core.schemas.validator import ValidationError
from docgen_toolkit.core.utils.serialization import deserialize_template

logger = logging.getLogger(__name__)


class TemplateNotFoundError(Exception):
    """Template does not exist or is not owned by the caller."""

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Template not found: {template_id}")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TemplateRecord:
    """
    Stored template (immutable).

    Attributes:
        template: The template itself (id and version live here)
        user_id: Owner
        created_at: Creation time (UTC)
        updated_at: Last update time (UTC)
    """

    template: Template
    user_id: str
    created_at: datetime
    updated_at: datetime

    @property
    def id(self) -> str:
        return self.template.id

    @property
    def version(self) -> int:
        return self.template.version

    def to_dict(self) -> dict[str, Any]:
        d = self.template.to_dict()
        d["userId"] = self.user_id
        d["createdAt"] = self.created_at.isoformat()
        d["updatedAt"] = self.updated_at.isoformat()
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TemplateRecord:
        return cls(
            template=deserialize_template(data),
            user_id=str(data["userId"]),
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
        )


class TemplateStore(ABC):
    """
    Abstract template store.

    Subclasses provide raw record access (_load/_save/_remove/_all);
    ownership checks, id generation, timestamps and version bumps live
    here. Concurrent updates are last-writer-wins.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or _utcnow
        self._lock = threading.RLock()

    # ─────────────────────────────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────────────────────────────

    def create(
        self,
        user_id: str,
        name: str,
        page: Page,
        elements: Sequence[Element] = (),
        description: Optional[str] = None,
    ) -> TemplateRecord:
        """Create a new template at version 1 and return its record."""
        now = self._clock()
        template = Template(
            id=uuid.uuid4().hex,
            name=name,
            version=1,
            page=page,
            elements=tuple(elements),
            description=description,
        )
        record = TemplateRecord(template, user_id, created_at=now, updated_at=now)
        with self._lock:
            self._save(record)
        logger.info(f"Created template {template.id} for user {user_id}")
        return record

    def get(self, template_id: str, user_id: str) -> TemplateRecord:
        """
        Fetch a template owned by user_id.

        Raises:
            TemplateNotFoundError: If missing or owned by another user
        """
        with self._lock:
            record = self._load(template_id)
        if record is None or record.user_id != user_id:
            raise TemplateNotFoundError(template_id)
        return record

    def list(self, user_id: str) -> List[TemplateRecord]:
        """All templates owned by user_id, most recently updated first."""
        with self._lock:
            records = [r for r in self._all() if r.user_id == user_id]
        return sorted(records, key=lambda r: r.updated_at, reverse=True)

    def update(
        self,
        template_id: str,
        user_id: str,
        *,
        name: Optional[str] = None,
        page: Optional[Page] = None,
        elements: Optional[Sequence[Element]] = None,
        description: Optional[str] = None,
    ) -> TemplateRecord:
        """
        Apply changes and increment the version.

        Raises:
            TemplateNotFoundError: If missing or owned by another user
        """
        changes: Dict[str, Any] = {}
        if name is not None:
            changes["name"] = name
        if page is not None:
            changes["page"] = page
        if elements is not None:
            changes["elements"] = tuple(elements)
        if description is not None:
            changes["description"] = description

        with self._lock:
            current = self.get(template_id, user_id)
            record = replace(
                current,
                template=current.template.bumped(**changes),
                updated_at=self._clock(),
            )
            self._save(record)
        logger.info(f"Updated template {template_id} to version {record.version}")
        return record

    def delete(self, template_id: str, user_id: str) -> None:
        """
        Delete a template.

        Raises:
            TemplateNotFoundError: If missing or owned by another user
        """
        with self._lock:
            self.get(template_id, user_id)
            self._remove(template_id)
        logger.info(f"Deleted template {template_id}")

    # ─────────────────────────────────────────────────────────────────────
    # Storage hooks
    # ─────────────────────────────────────────────────────────────────────

    @abstractmethod
    def _load(self, template_id: str) -> Optional[TemplateRecord]:
        ...

    @abstractmethod
    def _save(self, record: TemplateRecord) -> None:
        ...

    @abstractmethod
    def _remove(self, template_id: str) -> None:
        ...

    @abstractmethod
    def _all(self) -> List[TemplateRecord]:
        ...


class InMemoryTemplateStore(TemplateStore):
    """Dict-backed store, mainly for tests and embedding."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        super().__init__(clock)
        self._records: Dict[str, TemplateRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def _load(self, template_id: str) -> Optional[TemplateRecord]:
        return self._records.get(template_id)

    def _save(self, record: TemplateRecord) -> None:
        self._records[record.id] = record

    def _remove(self, template_id: str) -> None:
        self._records.pop(template_id, None)

    def _all(self) -> List[TemplateRecord]:
        return list(self._records.values())


class JsonDirectoryTemplateStore(TemplateStore):
    """
    Store templates as `<root>/<id>.json`.

    Files are written to a temporary sibling and renamed into place so
    readers never see a partial file. Unreadable files are skipped by
    list() with a warning; get() on one raises the validation error.
    """

    SUFFIX = ".json"

    def __init__(self, root: Path, clock: Optional[Callable[[], datetime]] = None):
        super().__init__(clock)
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path_for(self, template_id: str) -> Optional[Path]:
        # Ids never contain path separators
        if not template_id or "/" in template_id or "\\" in template_id or template_id.startswith("."):
            return None
        return self.root / f"{template_id}{self.SUFFIX}"

    def _load(self, template_id: str) -> Optional[TemplateRecord]:
        path = self._path_for(template_id)
        if path is None or not path.exists():
            return None
        return self._read(path)

    def _read(self, path: Path) -> TemplateRecord:
        with open(path, "r", encoding="utf-8") as f:
            return TemplateRecord.from_dict(json.load(f))

    def _save(self, record: TemplateRecord) -> None:
        path = self._path_for(record.id)
        if path is None:
            raise ValueError(f"Invalid template id: {record.id!r}")
        tmp = path.with_suffix(".json.tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(record.to_dict(), f, indent=2, ensure_ascii=False)
        os.replace(tmp, path)

    def _remove(self, template_id: str) -> None:
        path = self._path_for(template_id)
        if path is not None and path.exists():
            path.unlink()

    def _all(self) -> List[TemplateRecord]:
        records: List[TemplateRecord] = []
        for path in sorted(self.root.glob(f"*{self.SUFFIX}")):
            try:
                records.append(self._read(path))
            except (OSError, ValueError, KeyError, ValidationError) as e:
                logger.warning(f"Skipping unreadable template file {path.name}: {e}")
        return records
