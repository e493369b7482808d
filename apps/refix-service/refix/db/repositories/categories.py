"""
Category repository functions.

The unified ``categories`` collection is the single source of truth for the
catalog and for public metadata. It is read and written as a whole list.
The legacy flat ``publicCategories`` collection is still reachable for old
read paths and for the one-shot migration.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from refix.db import schemas
from refix.db.backends import StorageBackend
from refix.utils.collections import COLLECTION_PUBLIC_CATEGORIES
from ._common import RecordInput, as_record, slugify

logger = logging.getLogger(__name__)

DEFAULT_ICON = "📁"


def default_category_path(category: Dict[str, Any]) -> str:
    return f"/device/{slugify(category.get('id') or category.get('name'))}"


async def get_categories(backend: StorageBackend) -> List[Dict[str, Any]]:
    return await backend.get_categories()


def _with_validated_orders(doc: Dict[str, Any], category: schemas.Category) -> Dict[str, Any]:
    if "displayOrder" in doc:
        doc["displayOrder"] = category.display_order
    subcategories = doc.get("subcategories")
    if isinstance(subcategories, list):
        doc["subcategories"] = [
            {**sub, "displayOrder": parsed.display_order}
            if isinstance(sub, dict) and "displayOrder" in sub
            else sub
            for sub, parsed in zip(subcategories, category.subcategories)
        ]
    return doc


async def set_categories(backend: StorageBackend, categories: Sequence[RecordInput]) -> List[Dict[str, Any]]:
    """Replace the whole collection; callers read-modify-write the full tree.

    Records are stored as given except ``displayOrder``, which is stored as
    its validated number.
    """
    documents = [
        _with_validated_orders(doc, schemas.Category.model_validate(doc))
        for doc in (as_record(c) for c in categories)
    ]
    stored = await backend.replace_categories(documents)
    logger.info(f"Stored {len(stored)} categories")
    return stored


def _public_view(category: Dict[str, Any], idx: int) -> Dict[str, Any]:
    display_order = category.get("displayOrder")
    try:
        display_order = schemas.parse_display_order(display_order)
    except ValueError:
        # unparseable values stay as stored and sort last
        pass
    return {
        "id": category.get("id") or f"cat-derived-{idx}",
        "name": category.get("name"),
        "icon": category.get("icon") or DEFAULT_ICON,
        "path": category.get("path") or default_category_path(category),
        "displayOrder": display_order if display_order is not None else idx + 1,
        "parentId": category.get("parentId"),
        "imageUrl": category.get("imageUrl"),
        "createdAt": category.get("createdAt"),
        "updatedAt": category.get("updatedAt"),
    }


async def get_public_categories(backend: StorageBackend) -> List[Dict[str, Any]]:
    """Public view derived from unified categories only.

    Excludes categories with ``isPublic is False`` and sorts by
    ``(displayOrder, name)``.
    """
    categories = await backend.get_categories()
    views = [
        _public_view(category, idx)
        for idx, category in enumerate(categories)
        if category.get("isPublic") is not False
    ]
    return sorted(views, key=lambda v: (schemas.display_order_key(v["displayOrder"]), v["name"] or ""))


# ── legacy public categories (deprecated) ─────────────────────


async def list_legacy_public_categories(backend: StorageBackend) -> List[Dict[str, Any]]:
    return await backend.list(COLLECTION_PUBLIC_CATEGORIES)


async def get_public_category_by_id(backend: StorageBackend, category_id: str) -> Optional[Dict[str, Any]]:
    if not category_id:
        return None
    return await backend.get(COLLECTION_PUBLIC_CATEGORIES, category_id)


async def get_public_subcategories(backend: StorageBackend, parent_id: str) -> List[Dict[str, Any]]:
    entries = await backend.list(COLLECTION_PUBLIC_CATEGORIES)
    children = [e for e in entries if e.get("parentId") == parent_id]
    return sorted(children, key=lambda e: schemas.display_order_key(e.get("displayOrder"), missing=0))


async def create_public_category(backend: StorageBackend, category: RecordInput) -> Dict[str, Any]:
    """Upsert by id so repeated seeding does not conflict."""
    record = as_record(category)
    validated = schemas.PublicCategory.model_validate(record)
    if not record.get("id"):
        record["id"] = slugify(validated.name).strip("-") or schemas.new_record_id("pubcat")
    return await backend.upsert(COLLECTION_PUBLIC_CATEGORIES, record)


async def update_public_category(
    backend: StorageBackend, category_id: str, partial: RecordInput
) -> Optional[Dict[str, Any]]:
    changes = as_record(partial)
    changes.pop("id", None)
    return await backend.update(COLLECTION_PUBLIC_CATEGORIES, category_id, changes)


async def delete_public_category(backend: StorageBackend, category_id: str) -> None:
    if not category_id:
        return None
    await backend.delete(COLLECTION_PUBLIC_CATEGORIES, category_id)
