"""
Backend selection and the process-wide storage handle.

``init()`` runs once at process start: it prefers the managed document store
when one is configured and reachable, and otherwise falls back to the local
JSON file. Initialization always ends with a usable backend; a failing
document store is logged and skipped, never raised.
"""
import logging
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from refix.db.backends import DocumentStoreBackend, JsonFileBackend, StorageBackend
from refix.db.errors import BackendNotInitializedError
from refix.utils.feature_flags import category_migration_on_init, document_store_enabled
from refix.utils.runtime import extract_hostname
from refix.utils.settings import StorageSettings

logger = logging.getLogger(__name__)

# Written once by init(), read by every facade call
_backend: Optional[StorageBackend] = None


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url or url.split("://", 1)[-1] in ("", "/"):
        # In-memory SQLite with StaticPool so the schema persists across connections
        kwargs["poolclass"] = StaticPool
    return kwargs


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record):
    # SQLite's built-in lower() folds ASCII only; search must match str.lower()
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def create_document_engine(url: str) -> Engine:
    """Build the engine for ``url``.

    Raises ImportError / NoSuchModuleError when the dialect or its DB-API
    driver is not installed.
    """
    engine = create_engine(url, **_engine_kwargs(url))
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _register_sqlite_functions)
    return engine


async def _try_document_store(url: str) -> Optional[DocumentStoreBackend]:
    engine = None
    try:
        engine = create_document_engine(url)
        backend = DocumentStoreBackend(engine)
        await backend.initialize()
    except Exception as e:
        logger.error(
            f"Failed to initialize document store at {extract_hostname(url) or url.split('://')[0]}, "
            f"falling back to JSON file: {e}"
        )
        if engine is not None:
            engine.dispose()
        return None
    logger.info(f"Using document store for persistence: {engine.url!r}")
    return backend


async def select_backend(settings: StorageSettings) -> StorageBackend:
    """Pick and initialize the backend for ``settings``. Never selects nothing."""
    if settings.document_store_configured:
        if document_store_enabled():
            backend = await _try_document_store(settings.document_db_url)
            if backend is not None:
                return backend
        else:
            logger.info("Document store configured but DOCUMENT_STORE_ENABLED is off, using JSON file.")

    fallback = JsonFileBackend(settings.json_db_file)
    # malformed existing file raises CorruptStoreError here
    await fallback.initialize()
    logger.info(f"Using local JSON file for persistence: {fallback.path}")
    return fallback


async def init(
    settings: Optional[StorageSettings] = None,
    *,
    backend: Optional[StorageBackend] = None,
) -> StorageBackend:
    """Select the active backend once; later calls return the same handle.

    ``backend`` injects a ready-made backend instead of reading the
    environment (tests, embedding applications).
    """
    global _backend
    if _backend is not None:
        return _backend

    if backend is not None:
        await backend.initialize()
        chosen = backend
    else:
        chosen = await select_backend(settings or StorageSettings.from_env())
    _backend = chosen

    if category_migration_on_init():
        from refix.services.category_migration import migrate_public_categories_to_categories
        try:
            await migrate_public_categories_to_categories(chosen)
        except Exception:
            # backend stays usable; the migration can be rerun explicitly
            logger.exception("Startup migration of public categories failed")
    return chosen


def get_backend() -> StorageBackend:
    if _backend is None:
        raise BackendNotInitializedError("Storage is not initialized; call init() first")
    return _backend


def using_document_store() -> bool:
    return isinstance(_backend, DocumentStoreBackend)


async def shutdown() -> None:
    """Close the active backend and forget it."""
    global _backend
    if _backend is not None:
        await _backend.close()
    _backend = None


def reset_backend() -> None:
    """Forget the active backend without closing it (useful for tests)."""
    global _backend
    _backend = None
