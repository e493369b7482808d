"""
Collection and role constants.

Centralized names for the logical collections every backend stores, so the
flat-file keys and the document-store tables never drift apart.
"""

from typing import FrozenSet
from enum import Enum

# Canonical collection names (flat-file keys)
COLLECTION_USERS = "users"
COLLECTION_TUTORIALS = "tutorials"
COLLECTION_CATEGORIES = "categories"
COLLECTION_FEEDBACK = "feedback"
# Deprecated, read for backward compatibility and migration only
COLLECTION_PUBLIC_CATEGORIES = "publicCategories"
COLLECTION_PRODUCTS = "products"

# Collections created with every new store
CORE_COLLECTIONS = (
    COLLECTION_USERS,
    COLLECTION_TUTORIALS,
    COLLECTION_CATEGORIES,
    COLLECTION_FEEDBACK,
)

ALL_COLLECTIONS: FrozenSet[str] = frozenset(
    CORE_COLLECTIONS + (COLLECTION_PUBLIC_CATEGORIES, COLLECTION_PRODUCTS)
)

# Single document holding the whole category tree in the document store
CATEGORIES_ROOT_ID = "categories-root"

# Category filter value meaning "no filter"
ALL_CATEGORIES_SENTINEL = "All"

ROLE_ADMIN = "admin"
ROLE_CREATOR = "creator"


def is_valid_collection(name: str) -> bool:
    """Return True if the provided name is one of the supported collections."""
    return name in ALL_COLLECTIONS


class UserRoleEnum(str, Enum):
    """Enum for user roles used in schemas and validation."""
    admin = ROLE_ADMIN
    creator = ROLE_CREATOR
