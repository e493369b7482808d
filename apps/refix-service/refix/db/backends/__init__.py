"""
Pluggable storage backends.

- **JsonFileBackend**: one pretty-printed JSON file, read-modify-write per call
- **DocumentStoreBackend**: JSON documents in a SQL database via SQLAlchemy

Both implement ``StorageBackend``; ``refix.db.database.init()`` picks one.
"""

from .base import StorageBackend, merge_record
from .flatfile import JsonFileBackend, empty_container
from .document import DocumentStoreBackend

__all__ = [
    "StorageBackend",
    "merge_record",
    "JsonFileBackend",
    "empty_container",
    "DocumentStoreBackend",
]
