"""
Product repository functions (spare-parts store).
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from refix.db import schemas
from refix.db.backends import StorageBackend
from refix.utils.collections import COLLECTION_PRODUCTS
from ._common import RecordInput, as_record

logger = logging.getLogger(__name__)


def _created_key(product: Dict[str, Any]) -> float:
    raw = product.get("createdAt")
    if not raw:
        return float("-inf")
    try:
        return datetime.fromisoformat(str(raw).replace("Z", "+00:00")).timestamp()
    except ValueError:
        return float("-inf")


async def list_products(backend: StorageBackend) -> List[Dict[str, Any]]:
    """Newest first; products without a parseable createdAt sort last."""
    products = await backend.list(COLLECTION_PRODUCTS)
    return sorted(products, key=_created_key, reverse=True)


async def get_product(backend: StorageBackend, product_id: str) -> Optional[Dict[str, Any]]:
    if not product_id:
        return None
    return await backend.get(COLLECTION_PRODUCTS, product_id)


async def create_product(backend: StorageBackend, product: RecordInput) -> Dict[str, Any]:
    record = as_record(product)
    schemas.ProductCreate.model_validate(record)
    now = schemas.utc_timestamp()
    record.setdefault("id", schemas.new_record_id("product"))
    record.setdefault("createdAt", now)
    record.setdefault("updatedAt", now)
    return await backend.insert(COLLECTION_PRODUCTS, record)


async def update_product(
    backend: StorageBackend, product_id: str, partial: RecordInput
) -> Optional[Dict[str, Any]]:
    changes = as_record(partial)
    schemas.ProductUpdate.model_validate(changes)
    changes.pop("id", None)
    updated = await backend.update(COLLECTION_PRODUCTS, product_id, changes)
    if updated is None:
        logger.warning(f"Product {product_id} not found for update.")
    return updated


async def delete_product(backend: StorageBackend, product_id: str) -> None:
    if not product_id:
        return None
    await backend.delete(COLLECTION_PRODUCTS, product_id)
