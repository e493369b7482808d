"""
Tutorial repository functions.

Implements tutorial CRUD and filtered listing. Updates are shallow merges:
provided fields overwrite, everything else (steps included) is kept.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from refix.db import schemas
from refix.db.backends import StorageBackend
from refix.db.queries import TutorialFilters
from refix.utils.collections import COLLECTION_TUTORIALS
from ._common import RecordInput, as_record

logger = logging.getLogger(__name__)


async def list_tutorials(
    backend: StorageBackend,
    filters: TutorialFilters | Mapping[str, Any] | None = None,
    **kwargs,
) -> List[Dict[str, Any]]:
    return await backend.query_tutorials(TutorialFilters.coerce(filters, **kwargs))


async def get_tutorial(backend: StorageBackend, tutorial_id: str) -> Optional[Dict[str, Any]]:
    if not tutorial_id:
        return None
    return await backend.get(COLLECTION_TUTORIALS, tutorial_id)


async def create_tutorial(backend: StorageBackend, tutorial: RecordInput) -> Dict[str, Any]:
    record = as_record(tutorial)
    schemas.TutorialCreate.model_validate(record)
    if not record.get("id"):
        record["id"] = schemas.new_record_id("tutorial")
    return await backend.insert(COLLECTION_TUTORIALS, record)


async def update_tutorial(
    backend: StorageBackend, tutorial_id: str, partial: RecordInput
) -> Optional[Dict[str, Any]]:
    changes = as_record(partial)
    schemas.TutorialUpdate.model_validate(changes)
    changes.pop("id", None)
    updated = await backend.update(COLLECTION_TUTORIALS, tutorial_id, changes)
    if updated is None:
        logger.warning(f"Tutorial {tutorial_id} not found for update.")
    return updated


async def delete_tutorial(backend: StorageBackend, tutorial_id: str) -> None:
    if not tutorial_id:
        return None
    await backend.delete(COLLECTION_TUTORIALS, tutorial_id)
    logger.info(f"Deleted tutorial {tutorial_id} (if present)")
