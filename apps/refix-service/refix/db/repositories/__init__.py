"""
Per-domain repository modules for record access.

Every function takes the storage backend as its first argument, so callers
can pass an explicit handle; ``refix.db.crud`` binds them to the backend
selected by ``init()``.
"""
