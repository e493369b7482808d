"""
Local JSON file backend.

All collections live in one UTF-8, pretty-printed JSON document. Every write
re-reads the whole file, applies the change and writes it back; there is no
locking, so concurrent writers race and the last write wins.
"""
from __future__ import annotations

import asyncio
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from refix.db.backends.base import StorageBackend, merge_record
from refix.db.errors import CorruptStoreError, DuplicateRecordError, StorageError
from refix.db.queries import TutorialFilters, matches_tutorial
from refix.utils.collections import (
    COLLECTION_CATEGORIES,
    COLLECTION_TUTORIALS,
    CORE_COLLECTIONS,
    is_valid_collection,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def empty_container() -> Dict[str, list]:
    return {name: [] for name in CORE_COLLECTIONS}


def _require_collection(collection: str) -> str:
    if not is_valid_collection(collection):
        raise ValueError(f"Unknown collection: {collection}")
    return collection


class JsonFileBackend(StorageBackend):
    name = "json-file"

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    # ── file plumbing ─────────────────────────────────────────

    def ensure_file(self) -> bool:
        """Create the file with empty collections if missing. Returns True if created."""
        if self.path.exists():
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._write(empty_container())
        logger.info(f"Created JSON store at {self.path}")
        return True

    def _read(self) -> Dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e
        try:
            data = json.loads(raw or "{}")
        except json.JSONDecodeError as e:
            raise CorruptStoreError(f"{self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise CorruptStoreError(f"{self.path} must contain a JSON object, got {type(data).__name__}")
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to write {self.path}: {e}") from e

    def _mutate(self, fn: Callable[[Dict[str, Any]], T]) -> T:
        data = self._read()
        result = fn(data)
        self._write(data)
        return result

    async def _run(self, fn: Callable[..., T], *args) -> T:
        return await asyncio.to_thread(fn, *args)

    def _items(self, collection: str) -> List[Dict[str, Any]]:
        return list(self._read().get(_require_collection(collection)) or [])

    # ── StorageBackend ────────────────────────────────────────

    async def initialize(self) -> None:
        await self._run(self.ensure_file)
        # surface a malformed file at startup rather than on first request
        await self._run(self._read)

    async def get(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        items = await self._run(self._items, collection)
        return next((item for item in items if item.get("id") == record_id), None)

    async def find_one(self, collection: str, field: str, value: Any) -> Optional[Dict[str, Any]]:
        items = await self._run(self._items, collection)
        return next((item for item in items if item.get(field) == value), None)

    async def list(self, collection: str) -> List[Dict[str, Any]]:
        return await self._run(self._items, collection)

    async def insert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        _require_collection(collection)

        def _insert(data):
            items = data.setdefault(collection, [])
            if any(item.get("id") == record["id"] for item in items):
                raise DuplicateRecordError(collection, record["id"])
            items.append(copy.deepcopy(record))
            return record

        return await self._run(self._mutate, _insert)

    async def upsert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        _require_collection(collection)

        def _upsert(data):
            items = data.setdefault(collection, [])
            for idx, item in enumerate(items):
                if item.get("id") == record["id"]:
                    items[idx] = copy.deepcopy(record)
                    break
            else:
                items.append(copy.deepcopy(record))
            return record

        return await self._run(self._mutate, _upsert)

    async def update(
        self, collection: str, record_id: str, partial: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        _require_collection(collection)

        def _update():
            data = self._read()
            items = data.get(collection) or []
            for idx, item in enumerate(items):
                if item.get("id") == record_id:
                    items[idx] = merge_record(item, copy.deepcopy(dict(partial)), record_id)
                    self._write(data)
                    return items[idx]
            return None

        return await self._run(_update)

    async def delete(self, collection: str, record_id: str) -> None:
        _require_collection(collection)

        def _delete(data):
            data[collection] = [item for item in data.get(collection) or [] if item.get("id") != record_id]

        await self._run(self._mutate, _delete)

    async def query_tutorials(self, filters: TutorialFilters) -> List[Dict[str, Any]]:
        items = await self._run(self._items, COLLECTION_TUTORIALS)
        return [t for t in items if matches_tutorial(t, filters)]

    async def get_categories(self) -> List[Dict[str, Any]]:
        return await self._run(self._items, COLLECTION_CATEGORIES)

    async def replace_categories(self, categories: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        def _replace(data):
            data[COLLECTION_CATEGORIES] = copy.deepcopy(list(categories))
            return categories

        return await self._run(self._mutate, _replace)

    def __repr__(self):
        return f"<{self.__class__.__name__} path={self.path}>"
