"""
Managed document store backend.

Each collection is a table of JSON documents (``refix.db.models``). Single
record operations run in their own short session/transaction, so they are
individually atomic. The category tree is kept as one ``categories-root``
document, so replacing it is a single-row upsert.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from sqlalchemy import delete, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from refix.db import models
from refix.db.backends.base import StorageBackend, merge_record
from refix.db.errors import DuplicateRecordError, StorageError
from refix.db.queries import TutorialFilters, build_tutorial_query
from refix.utils.collections import CATEGORIES_ROOT_ID, COLLECTION_CATEGORIES

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _model_for(collection: str):
    try:
        return models.DOCUMENT_MODELS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection: {collection}") from None


class DocumentStoreBackend(StorageBackend):
    name = "document"

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    # ── plumbing ──────────────────────────────────────────────

    def ping(self) -> None:
        """Round-trip to the server; raises on connection or auth failure."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def create_schema(self) -> None:
        """Create missing collection tables. Existing tables are left untouched."""
        models.Base.metadata.create_all(bind=self.engine, checkfirst=True)

    def _read(self, fn: Callable[[Session], T]) -> T:
        with self.SessionLocal() as db:
            try:
                return fn(db)
            except SQLAlchemyError as e:
                raise StorageError(f"Document store read failed: {e}") from e

    def _write(self, fn: Callable[[Session], T], collection: str, record_id: Optional[str] = None) -> T:
        with self.SessionLocal() as db:
            try:
                result = fn(db)
                db.commit()
                return result
            except IntegrityError as e:
                db.rollback()
                if record_id is not None:
                    raise DuplicateRecordError(collection, record_id) from e
                raise StorageError(f"Document store write to {collection} failed: {e}") from e
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Error writing to {collection}: {e}")
                raise StorageError(f"Document store write to {collection} failed: {e}") from e

    async def _run(self, fn: Callable[..., T], *args) -> T:
        return await asyncio.to_thread(fn, *args)

    # ── StorageBackend ────────────────────────────────────────

    async def initialize(self) -> None:
        await self._run(self.ping)
        await self._run(self.create_schema)

    async def get(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        model = _model_for(collection)
        return await self._run(
            self._read,
            lambda db: db.execute(select(model.body).where(model.id == record_id)).scalar_one_or_none(),
        )

    async def find_one(self, collection: str, field: str, value: Any) -> Optional[Dict[str, Any]]:
        model = _model_for(collection)
        stmt = (
            select(model.body)
            .where(model.body[field].as_string() == value)
            .order_by(model.seq)
            .limit(1)
        )
        return await self._run(self._read, lambda db: db.execute(stmt).scalar_one_or_none())

    async def list(self, collection: str) -> List[Dict[str, Any]]:
        model = _model_for(collection)
        stmt = select(model.body).order_by(model.seq)
        return await self._run(self._read, lambda db: list(db.execute(stmt).scalars()))

    async def insert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        model = _model_for(collection)

        def _insert(db: Session):
            db.add(model(id=record["id"], body=record))
            db.flush()
            return record

        return await self._run(self._write, _insert, collection, record["id"])

    async def upsert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        model = _model_for(collection)

        def _upsert(db: Session):
            row = db.execute(select(model).where(model.id == record["id"])).scalar_one_or_none()
            if row is None:
                db.add(model(id=record["id"], body=record))
            else:
                row.body = record
            return record

        return await self._run(self._write, _upsert, collection)

    async def update(
        self, collection: str, record_id: str, partial: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        model = _model_for(collection)

        def _update(db: Session):
            row = db.execute(select(model).where(model.id == record_id)).scalar_one_or_none()
            if row is None:
                return None
            row.body = merge_record(row.body, partial, record_id)
            return row.body

        return await self._run(self._write, _update, collection)

    async def delete(self, collection: str, record_id: str) -> None:
        model = _model_for(collection)
        await self._run(
            self._write,
            lambda db: db.execute(delete(model).where(model.id == record_id)),
            collection,
        )

    async def query_tutorials(self, filters: TutorialFilters) -> List[Dict[str, Any]]:
        stmt = build_tutorial_query(filters)
        return await self._run(self._read, lambda db: list(db.execute(stmt).scalars()))

    async def get_categories(self) -> List[Dict[str, Any]]:
        docs = await self.list(COLLECTION_CATEGORIES)
        ids = [d.get("id") for d in docs]
        if CATEGORIES_ROOT_ID in ids:
            root = docs[ids.index(CATEGORIES_ROOT_ID)]
            return list(root.get("list") or [])
        # older deployments stored one document per category
        return docs

    async def replace_categories(self, categories: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        await self.upsert(COLLECTION_CATEGORIES, {"id": CATEGORIES_ROOT_ID, "list": list(categories)})
        return categories

    async def close(self) -> None:
        await self._run(self.engine.dispose)

    def __repr__(self):
        return f"<{self.__class__.__name__} url={self.engine.url!r}>"
