"""
Storage backend interface.

Every backend implements the same async surface over named collections of
JSON documents (see ``refix.utils.collections``):

    get(collection, id)              → dict | None
    find_one(collection, field, v)   → dict | None
    list(collection)                 → list[dict]     insertion order
    insert(collection, record)       → dict           raises DuplicateRecordError
    upsert(collection, record)       → dict
    update(collection, id, partial)  → dict | None    shallow merge
    delete(collection, id)           → None           unknown id is a no-op
    query_tutorials(filters)         → list[dict]
    get_categories()                 → list[dict]
    replace_categories(list)         → list[dict]

Backends know nothing about validation, id generation or the category
migration beyond carrying its in-progress marker; repositories own that.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from refix.db.queries import TutorialFilters


def merge_record(existing: Mapping[str, Any], partial: Mapping[str, Any], record_id: str) -> Dict[str, Any]:
    """Shallow merge: ``partial`` overrides, the id never changes."""
    merged = {**existing, **partial}
    merged["id"] = record_id
    return merged


class StorageBackend(ABC):
    """Document storage selected once at startup and injected into repositories."""

    #: short name used in logs ("json-file", "document")
    name: str = "abstract"

    #: set by the category migration while it runs against this backend
    migration_in_progress: bool = False

    @abstractmethod
    async def initialize(self) -> None:
        """Make the backing store usable. Idempotent and never destructive."""
        ...

    @abstractmethod
    async def get(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def find_one(self, collection: str, field: str, value: Any) -> Optional[Dict[str, Any]]:
        """First record (insertion order) whose ``field`` equals ``value`` exactly."""
        ...

    @abstractmethod
    async def list(self, collection: str) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def insert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def upsert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def update(
        self, collection: str, record_id: str, partial: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def delete(self, collection: str, record_id: str) -> None:
        ...

    @abstractmethod
    async def query_tutorials(self, filters: TutorialFilters) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_categories(self) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def replace_categories(self, categories: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Overwrite the entire categories collection."""
        ...

    async def close(self) -> None:
        """Release held resources. Optional."""
        return None

    def __repr__(self):
        return f"<{self.__class__.__name__}>"
