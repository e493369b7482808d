"""
Pydantic schemas for stored documents, re-exported in one namespace.
"""

from .base import DocumentSchema, new_record_id, utc_timestamp
from .users import UserBase, UserCreate, User
from .tutorials import (
    NamedLink,
    ToolOrPart,
    TutorialStep,
    TutorialBase,
    TutorialCreate,
    TutorialUpdate,
    Tutorial,
)
from .categories import (
    DisplayOrder,
    parse_display_order,
    display_order_key,
    CatalogModel,
    Subcategory,
    Category,
    PublicCategory,
    PublicCategoryView,
)
from .feedback import FeedbackCreate
from .products import ProductBase, ProductCreate, ProductUpdate

__all__ = [
    # base
    "DocumentSchema",
    "new_record_id",
    "utc_timestamp",
    # users
    "UserBase",
    "UserCreate",
    "User",
    # tutorials
    "NamedLink",
    "ToolOrPart",
    "TutorialStep",
    "TutorialBase",
    "TutorialCreate",
    "TutorialUpdate",
    "Tutorial",
    # catalog
    "DisplayOrder",
    "parse_display_order",
    "display_order_key",
    "CatalogModel",
    "Subcategory",
    "Category",
    "PublicCategory",
    "PublicCategoryView",
    # feedback / products
    "FeedbackCreate",
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
]
