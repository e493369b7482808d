"""
Fold the legacy flat public-category list into unified categories.

For each legacy entry:

* if a unified category with the same id (case-insensitive), name or path
  already exists, it is left untouched. Unified data wins, silently;
* otherwise a unified category is synthesized with an empty
  ``subcategories`` list and the legacy public fields.

The legacy collection is never deleted. Nothing is written when nothing was
added, which makes reruns no-ops.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from refix.db import schemas
from refix.db.backends import StorageBackend
from refix.db.repositories import categories as repo_categories
from refix.db.repositories._common import slugify

logger = logging.getLogger(__name__)


class MigrationState(str, Enum):
    UNMIGRATED = "unmigrated"
    MIGRATING = "migrating"
    MIGRATED = "migrated"


@dataclass
class MigrationResult:
    state: MigrationState
    added: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added)


def _lower(value: Any) -> Optional[str]:
    return value.lower() if isinstance(value, str) and value else None


def find_matching_category(legacy: Dict[str, Any], categories: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    legacy_id = _lower(legacy.get("id"))
    for category in categories:
        if legacy_id and _lower(category.get("id")) == legacy_id:
            return category
        if legacy.get("name") and category.get("name") == legacy.get("name"):
            return category
        if legacy.get("path") and category.get("path") == legacy.get("path"):
            return category
    return None


def _legacy_display_order(legacy: Dict[str, Any], position: int) -> int | float:
    try:
        display_order = schemas.parse_display_order(legacy.get("displayOrder"))
    except ValueError:
        logger.warning(f"Ignoring non-numeric displayOrder on legacy public category {legacy.get('name')!r}")
        display_order = None
    return position if display_order is None else display_order


def synthesize_category(legacy: Dict[str, Any], position: int) -> Dict[str, Any]:
    """Unified category built from a legacy entry; ``position`` is 1-based."""
    now = schemas.utc_timestamp()
    category = {
        "id": legacy.get("id") or slugify(legacy.get("name")).strip("-"),
        "name": legacy.get("name"),
        "icon": legacy.get("icon") or repo_categories.DEFAULT_ICON,
        "path": legacy.get("path") or repo_categories.default_category_path(legacy),
        "displayOrder": _legacy_display_order(legacy, position),
        "imageUrl": legacy.get("imageUrl"),
        "isPublic": True,
        "subcategories": [],
        "createdAt": legacy.get("createdAt") or now,
        "updatedAt": legacy.get("updatedAt") or now,
        "publicMetadata": {
            "migratedFrom": legacy.get("id"),
            "migratedAt": now,
        },
    }
    return category


async def get_migration_state(backend: StorageBackend) -> MigrationState:
    if backend.migration_in_progress:
        return MigrationState.MIGRATING
    legacy = await repo_categories.list_legacy_public_categories(backend)
    categories = await backend.get_categories()
    pending = [e for e in legacy if e.get("name") and find_matching_category(e, categories) is None]
    if not pending:
        return MigrationState.MIGRATED
    return MigrationState.UNMIGRATED


async def migrate_public_categories_to_categories(backend: StorageBackend) -> MigrationResult:
    legacy = await repo_categories.list_legacy_public_categories(backend)
    if not legacy:
        return MigrationResult(state=MigrationState.MIGRATED)

    backend.migration_in_progress = True
    try:
        categories = list(await backend.get_categories())
        result = MigrationResult(state=MigrationState.MIGRATING)
        for entry in legacy:
            label = entry.get("id") or entry.get("name")
            if find_matching_category(entry, categories) is not None:
                result.skipped.append(label)
                continue
            if not entry.get("name"):
                logger.warning(f"Skipping legacy public category without a name: {entry!r}")
                result.skipped.append(label)
                continue
            categories.append(synthesize_category(entry, len(categories) + 1))
            result.added.append(label)

        if result.changed:
            await repo_categories.set_categories(backend, categories)
            logger.info(
                f"Migrated {len(result.added)} public categories into categories "
                f"({len(result.skipped)} already present)"
            )
        result.state = MigrationState.MIGRATED
        return result
    finally:
        backend.migration_in_progress = False
