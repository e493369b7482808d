import pytest

from refix.db import database
from refix.db.backends import DocumentStoreBackend, JsonFileBackend
from refix.utils.feature_flags import refresh_feature_flag_cache

_STORAGE_ENV = [
    "DOCUMENT_DB_URL",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_DB",
    "JSON_DB_FILE",
    "DOCUMENT_STORE_ENABLED",
    "CATEGORY_MIGRATION_ON_INIT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _isolated_storage(monkeypatch, tmp_path):
    """Keep every test away from real credentials and from ./db.json."""
    for var in _STORAGE_ENV:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("JSON_DB_FILE", str(tmp_path / "db.json"))
    refresh_feature_flag_cache()
    database.reset_backend()
    yield
    database.reset_backend()
    refresh_feature_flag_cache()


@pytest.fixture
def json_backend(tmp_path):
    backend = JsonFileBackend(tmp_path / "store" / "db.json")
    backend.ensure_file()
    return backend


@pytest.fixture
def document_backend():
    # In-memory SQLite with StaticPool stands in for the managed store
    engine = database.create_document_engine("sqlite+pysqlite:///:memory:")
    backend = DocumentStoreBackend(engine)
    backend.create_schema()
    yield backend
    engine.dispose()


@pytest.fixture(params=["json", "document"])
def backend(request):
    """Run the test once per backend implementation."""
    return request.getfixturevalue(f"{request.param}_backend")
