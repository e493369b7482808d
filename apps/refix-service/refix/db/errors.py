"""
Storage error types.

Not-found is never an error at this layer (lookups return None); these cover
the failures callers must be able to tell apart.
"""


class StorageError(RuntimeError):
    """A backend read or write failed."""


class CorruptStoreError(StorageError):
    """The persisted JSON file exists but cannot be parsed."""


class DuplicateRecordError(StorageError):
    """A create used an id that already exists in the collection."""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"Record {record_id!r} already exists in {collection}")
        self.collection = collection
        self.record_id = record_id


class BackendNotInitializedError(StorageError):
    """A store operation ran before init() selected a backend."""
