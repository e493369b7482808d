"""
SQLAlchemy tables backing the document store.

Every collection is a table of JSON documents; ``DOCUMENT_MODELS`` maps the
logical collection names (the flat-file keys) to their mapped classes.
"""

from refix.utils.collections import (
    COLLECTION_USERS,
    COLLECTION_TUTORIALS,
    COLLECTION_CATEGORIES,
    COLLECTION_FEEDBACK,
    COLLECTION_PUBLIC_CATEGORIES,
    COLLECTION_PRODUCTS,
)

from .base import Base, DocumentMixin, now_utc  # re-export
from .documents import (
    UserDocument,
    TutorialDocument,
    CategoryDocument,
    FeedbackDocument,
    PublicCategoryDocument,
    ProductDocument,
)

DOCUMENT_MODELS = {
    COLLECTION_USERS: UserDocument,
    COLLECTION_TUTORIALS: TutorialDocument,
    COLLECTION_CATEGORIES: CategoryDocument,
    COLLECTION_FEEDBACK: FeedbackDocument,
    COLLECTION_PUBLIC_CATEGORIES: PublicCategoryDocument,
    COLLECTION_PRODUCTS: ProductDocument,
}

__all__ = [
    "Base",
    "DocumentMixin",
    "now_utc",
    "UserDocument",
    "TutorialDocument",
    "CategoryDocument",
    "FeedbackDocument",
    "PublicCategoryDocument",
    "ProductDocument",
    "DOCUMENT_MODELS",
]
