"""
Feedback repository functions. Feedback is append-only.
"""
from __future__ import annotations

from typing import Any, Dict, List

from refix.db import schemas
from refix.db.backends import StorageBackend
from refix.utils.collections import COLLECTION_FEEDBACK
from ._common import RecordInput, as_record


async def create_feedback(backend: StorageBackend, item: RecordInput) -> Dict[str, Any]:
    record = as_record(item)
    schemas.FeedbackCreate.model_validate(record)
    record.setdefault("id", schemas.new_record_id("feedback"))
    record.setdefault("timestamp", schemas.utc_timestamp())
    return await backend.insert(COLLECTION_FEEDBACK, record)


async def list_feedback(backend: StorageBackend) -> List[Dict[str, Any]]:
    return await backend.list(COLLECTION_FEEDBACK)
