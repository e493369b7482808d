from .base import Base, DocumentMixin


class UserDocument(DocumentMixin, Base):
    __tablename__ = 'users'


class TutorialDocument(DocumentMixin, Base):
    __tablename__ = 'tutorials'


class CategoryDocument(DocumentMixin, Base):
    __tablename__ = 'categories'


class FeedbackDocument(DocumentMixin, Base):
    __tablename__ = 'feedback'


class PublicCategoryDocument(DocumentMixin, Base):
    # legacy flat list, kept for migration and old read paths
    __tablename__ = 'public_categories'


class ProductDocument(DocumentMixin, Base):
    __tablename__ = 'products'
