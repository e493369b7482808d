"""
Record store operations bound to the active backend.

Thin facade over ``refix.db.repositories``: each function resolves the
backend chosen by ``init()`` and delegates. Code that holds an explicit
backend handle can call the repositories directly.
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .database import get_backend, init  # noqa: F401 - re-exported entry point
from .queries import TutorialFilters
from .repositories import users as repo_users
from .repositories import tutorials as repo_tutorials
from .repositories import categories as repo_categories
from .repositories import feedback as repo_feedback
from .repositories import products as repo_products
from .repositories._common import RecordInput
from refix.services import category_migration


# Users
async def get_user_by_username(username: str) -> Optional[Dict[str, Any]]:
    return await repo_users.get_user_by_username(get_backend(), username)


async def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    return await repo_users.get_user_by_id(get_backend(), user_id)


async def create_user(user: RecordInput) -> Dict[str, Any]:
    return await repo_users.create_user(get_backend(), user)


# Tutorials
async def list_tutorials(
    filters: TutorialFilters | Mapping[str, Any] | None = None, **kwargs
) -> List[Dict[str, Any]]:
    return await repo_tutorials.list_tutorials(get_backend(), filters, **kwargs)


async def get_tutorial(tutorial_id: str) -> Optional[Dict[str, Any]]:
    return await repo_tutorials.get_tutorial(get_backend(), tutorial_id)


async def create_tutorial(tutorial: RecordInput) -> Dict[str, Any]:
    return await repo_tutorials.create_tutorial(get_backend(), tutorial)


async def update_tutorial(tutorial_id: str, partial: RecordInput) -> Optional[Dict[str, Any]]:
    return await repo_tutorials.update_tutorial(get_backend(), tutorial_id, partial)


async def delete_tutorial(tutorial_id: str) -> None:
    await repo_tutorials.delete_tutorial(get_backend(), tutorial_id)


# Categories (unified, includes public metadata)
async def get_categories() -> List[Dict[str, Any]]:
    return await repo_categories.get_categories(get_backend())


async def set_categories(categories: Sequence[RecordInput]) -> List[Dict[str, Any]]:
    return await repo_categories.set_categories(get_backend(), categories)


async def get_public_categories() -> List[Dict[str, Any]]:
    return await repo_categories.get_public_categories(get_backend())


async def migrate_public_categories_to_categories() -> category_migration.MigrationResult:
    return await category_migration.migrate_public_categories_to_categories(get_backend())


async def get_migration_state() -> category_migration.MigrationState:
    return await category_migration.get_migration_state(get_backend())


# Public categories (deprecated, kept for backwards compatibility)
async def get_public_category_by_id(category_id: str) -> Optional[Dict[str, Any]]:
    return await repo_categories.get_public_category_by_id(get_backend(), category_id)


async def get_public_subcategories(parent_id: str) -> List[Dict[str, Any]]:
    return await repo_categories.get_public_subcategories(get_backend(), parent_id)


async def create_public_category(category: RecordInput) -> Dict[str, Any]:
    return await repo_categories.create_public_category(get_backend(), category)


async def update_public_category(category_id: str, partial: RecordInput) -> Optional[Dict[str, Any]]:
    return await repo_categories.update_public_category(get_backend(), category_id, partial)


async def delete_public_category(category_id: str) -> None:
    await repo_categories.delete_public_category(get_backend(), category_id)


# Feedback
async def create_feedback(item: RecordInput) -> Dict[str, Any]:
    return await repo_feedback.create_feedback(get_backend(), item)


async def list_feedback() -> List[Dict[str, Any]]:
    return await repo_feedback.list_feedback(get_backend())


# Products (spare parts store)
async def list_products() -> List[Dict[str, Any]]:
    return await repo_products.list_products(get_backend())


async def get_product(product_id: str) -> Optional[Dict[str, Any]]:
    return await repo_products.get_product(get_backend(), product_id)


async def create_product(product: RecordInput) -> Dict[str, Any]:
    return await repo_products.create_product(get_backend(), product)


async def update_product(product_id: str, partial: RecordInput) -> Optional[Dict[str, Any]]:
    return await repo_products.update_product(get_backend(), product_id, partial)


async def delete_product(product_id: str) -> None:
    await repo_products.delete_product(get_backend(), product_id)
