import json
from pathlib import Path

import pytest

from refix.db.backends import JsonFileBackend
from refix.db.errors import CorruptStoreError, DuplicateRecordError, StorageError


def test_ensure_file_creates_empty_collections(tmp_path):
    path = tmp_path / "nested" / "db.json"
    backend = JsonFileBackend(path)

    assert backend.ensure_file() is True

    raw = path.read_text(encoding="utf-8")
    assert json.loads(raw) == {"users": [], "tutorials": [], "categories": [], "feedback": []}
    # pretty-printed for hand editing
    assert "\n  " in raw


def test_ensure_file_never_overwrites(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"users": [{"id": "u1"}]}), encoding="utf-8")
    backend = JsonFileBackend(path)

    assert backend.ensure_file() is False
    assert json.loads(path.read_text(encoding="utf-8")) == {"users": [{"id": "u1"}]}


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["{not json", "[]", "42"])
async def test_initialize_rejects_corrupt_file(tmp_path, content):
    path = tmp_path / "db.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(CorruptStoreError):
        await JsonFileBackend(path).initialize()
    # left as found
    assert path.read_text(encoding="utf-8") == content


@pytest.mark.asyncio
async def test_missing_collection_key_reads_as_empty(tmp_path):
    path = tmp_path / "db.json"
    path.write_text("{}", encoding="utf-8")
    backend = JsonFileBackend(path)

    assert await backend.list("tutorials") == []
    assert await backend.get_categories() == []


@pytest.mark.asyncio
async def test_non_ascii_is_written_verbatim(json_backend):
    await json_backend.insert("tutorials", {"id": "t1", "title": "Écran cassé 📱"})

    raw = json_backend.path.read_text(encoding="utf-8")
    assert "Écran cassé 📱" in raw


@pytest.mark.asyncio
async def test_write_failure_surfaces_as_storage_error(json_backend, monkeypatch):
    def _fail(self, *args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "write_text", _fail)

    with pytest.raises(StorageError, match="disk full"):
        await json_backend.insert("feedback", {"id": "f1", "rating": 5})


@pytest.mark.asyncio
async def test_insert_duplicate_id_leaves_file_unchanged(json_backend):
    await json_backend.insert("users", {"id": "u1", "username": "sam"})
    before = json_backend.path.read_text(encoding="utf-8")

    with pytest.raises(DuplicateRecordError) as excinfo:
        await json_backend.insert("users", {"id": "u1", "username": "other"})

    assert excinfo.value.collection == "users"
    assert excinfo.value.record_id == "u1"
    assert json_backend.path.read_text(encoding="utf-8") == before


@pytest.mark.asyncio
async def test_update_unknown_id_does_not_touch_file(json_backend):
    before = json_backend.path.stat().st_mtime_ns
    content = json_backend.path.read_text(encoding="utf-8")

    assert await json_backend.update("tutorials", "missing", {"title": "x"}) is None
    assert json_backend.path.read_text(encoding="utf-8") == content
    assert json_backend.path.stat().st_mtime_ns == before


@pytest.mark.asyncio
async def test_returned_records_are_copies(json_backend):
    record = {"id": "t1", "steps": [{"text": "open"}]}
    await json_backend.insert("tutorials", record)
    record["steps"].append({"text": "mutated"})

    stored = await json_backend.get("tutorials", "t1")
    assert stored == {"id": "t1", "steps": [{"text": "open"}]}


@pytest.mark.asyncio
async def test_unknown_collection_is_rejected(backend):
    with pytest.raises(ValueError, match="Unknown collection"):
        await backend.list("orders")
    with pytest.raises(ValueError, match="Unknown collection"):
        await backend.insert("orders", {"id": "o1"})
