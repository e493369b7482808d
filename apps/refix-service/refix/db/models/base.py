"""
Shared SQLAlchemy base and helpers.
"""
from datetime import datetime, UTC

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import JSON


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


Base = declarative_base()


class DocumentMixin:
    """One JSON document per row.

    ``seq`` preserves insertion order for listings; ``id`` is the record's own
    identifier and is unique within the collection.
    """

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(255), nullable=False, unique=True, index=True)
    body = Column(JSON(none_as_null=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
