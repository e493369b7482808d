"""
Catalog Service

Typed access to the device catalog (category → brand → model → part).
The store only replaces the whole category list, so every edit here is a
read-modify-write: load the tree, change it in memory, save it back.

Lookups of brands and models are case-insensitive, matching how the site
resolves URL segments; category lookups go by exact name or keyword.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from refix.db import schemas
from refix.db.backends import StorageBackend
from refix.db.repositories import categories as repo_categories

logger = logging.getLogger(__name__)

Catalog = List[schemas.Category]


class CatalogError(LookupError):
    """A category, brand or model named in an edit does not exist."""


def parse_catalog(documents: Iterable[Dict[str, Any]]) -> Catalog:
    return [schemas.Category.model_validate(doc) for doc in documents]


def dump_catalog(catalog: Catalog) -> List[Dict[str, Any]]:
    return [category.to_document() for category in catalog]


async def load_catalog(backend: StorageBackend) -> Catalog:
    return parse_catalog(await repo_categories.get_categories(backend))


async def save_catalog(backend: StorageBackend, catalog: Catalog) -> List[Dict[str, Any]]:
    return await repo_categories.set_categories(backend, dump_catalog(catalog))


# ── lookups ───────────────────────────────────────────────────


def find_category(catalog: Catalog, name: str) -> Optional[schemas.Category]:
    return next((c for c in catalog if c.name == name), None)


def find_category_by_keyword(catalog: Catalog, keyword: str) -> Optional[schemas.Category]:
    """First category whose name or id contains ``keyword`` (case-insensitive)."""
    if not keyword:
        return None
    needle = keyword.lower()
    for category in catalog:
        if needle in (category.name or "").lower() or needle in (category.id or "").lower():
            return category
    return None


def find_brand(category: schemas.Category, brand_name: str) -> Optional[schemas.Subcategory]:
    needle = brand_name.lower()
    return next((s for s in category.subcategories if s.name.lower() == needle), None)


def find_model(brand: schemas.Subcategory, model_name: str) -> Optional[schemas.CatalogModel]:
    needle = model_name.lower()
    return next((m for m in brand.models if m.name.lower() == needle), None)


def model_parts(catalog: Catalog, category_name: str, brand_name: str, model_name: str) -> List[str]:
    """Parts of one model. Parts are model-specific; brands and categories carry none."""
    return list(_require_model(catalog, category_name, brand_name, model_name).parts)


def sort_subcategories(subcategories: Iterable[schemas.Subcategory]) -> List[schemas.Subcategory]:
    """Order brands by displayOrder (missing last), then by name."""
    return sorted(subcategories, key=lambda s: (schemas.display_order_key(s.display_order), s.name or ""))


# ── edits (in memory) ─────────────────────────────────────────


def _require_brand(catalog: Catalog, category_name: str, brand_name: str) -> schemas.Subcategory:
    category = find_category(catalog, category_name)
    if category is None:
        raise CatalogError(f"Category not found: {category_name}")
    brand = find_brand(category, brand_name)
    if brand is None:
        raise CatalogError(f"Brand not found: {category_name}/{brand_name}")
    return brand


def _require_model(catalog: Catalog, category_name: str, brand_name: str, model_name: str) -> schemas.CatalogModel:
    brand = _require_brand(catalog, category_name, brand_name)
    model = find_model(brand, model_name)
    if model is None:
        raise CatalogError(f"Model not found: {category_name}/{brand_name}/{model_name}")
    return model


def add_model(
    catalog: Catalog,
    category_name: str,
    brand_name: str,
    model_name: str,
    image_url: Optional[str] = None,
) -> schemas.CatalogModel:
    brand = _require_brand(catalog, category_name, brand_name)
    name = model_name.strip()
    if not name:
        raise ValueError("Model name must not be empty")
    existing = find_model(brand, name)
    if existing is not None:
        return existing
    model = schemas.CatalogModel(name=name, image_url=image_url, parts=[])
    # assignment (not append) so the field counts as set when dumped
    brand.models = [*brand.models, model]
    return model


def remove_model(catalog: Catalog, category_name: str, brand_name: str, model_name: str) -> bool:
    brand = _require_brand(catalog, category_name, brand_name)
    needle = model_name.lower()
    remaining = [m for m in brand.models if m.name.lower() != needle]
    if len(remaining) == len(brand.models):
        return False
    brand.models = remaining
    return True


def add_part(catalog: Catalog, category_name: str, brand_name: str, model_name: str, part: str) -> List[str]:
    model = _require_model(catalog, category_name, brand_name, model_name)
    part_name = part.strip()
    if not part_name:
        raise ValueError("Part name must not be empty")
    if part_name not in model.parts:
        model.parts = [*model.parts, part_name]
    return list(model.parts)


def remove_part(catalog: Catalog, category_name: str, brand_name: str, model_name: str, part: str) -> List[str]:
    model = _require_model(catalog, category_name, brand_name, model_name)
    if part in model.parts:
        model.parts = [p for p in model.parts if p != part]
    return list(model.parts)
