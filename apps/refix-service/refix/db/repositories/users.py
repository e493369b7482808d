"""
User repository functions.

Users are created once (seed or admin action) and read afterwards; there is
no update path here.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from refix.db import schemas
from refix.db.backends import StorageBackend
from refix.db.errors import DuplicateRecordError
from refix.utils.collections import COLLECTION_USERS
from ._common import RecordInput, as_record

logger = logging.getLogger(__name__)


async def get_user_by_username(backend: StorageBackend, username: str) -> Optional[Dict[str, Any]]:
    if not username:
        return None
    return await backend.find_one(COLLECTION_USERS, "username", username)


async def get_user_by_id(backend: StorageBackend, user_id: str) -> Optional[Dict[str, Any]]:
    if not user_id:
        return None
    return await backend.get(COLLECTION_USERS, user_id)


async def create_user(backend: StorageBackend, user: RecordInput) -> Dict[str, Any]:
    record = as_record(user)
    validated = schemas.UserCreate.model_validate(record)
    if await get_user_by_username(backend, validated.username) is not None:
        raise DuplicateRecordError(COLLECTION_USERS, validated.username)

    record.setdefault("id", schemas.new_record_id("user"))
    record.setdefault("role", validated.role.value)
    record.setdefault("createdAt", schemas.utc_timestamp())
    created = await backend.insert(COLLECTION_USERS, record)
    logger.info(f"Created user {created['id']} ({created['username']}, role={created['role']})")
    return created
