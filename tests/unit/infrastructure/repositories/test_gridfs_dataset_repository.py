from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List, cast

import pytest
from bson import ObjectId
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from hydrowatch.domain.entities.errors import DatasetNotFoundError, DatasetStorageError
from hydrowatch.infrastructure.repositories.gridfs_dataset_repository import (
    GridFSDatasetRepository,
)


class _GridOut:
    def __init__(
        self,
        _id: ObjectId,
        content: bytes,
        filename: str,
        metadata: dict,
        upload_date: datetime,
    ):
        self._id = _id
        self._content = content
        self.filename = filename
        self.metadata = metadata
        self.uploadDate = upload_date

    def read(self) -> bytes:
        return self._content


class _Cursor:
    def __init__(self, items: List[_GridOut]):
        self.items = items

    def sort(self, key: str, direction: int):
        self.items = sorted(
            self.items, key=lambda item: getattr(item, key), reverse=direction < 0
        )
        return self

    def limit(self, amount: int):
        self.items = self.items[:amount]
        return self

    def __iter__(self):
        return iter(self.items)


class _GridFS:
    def __init__(self) -> None:
        self.files: Dict[ObjectId, _GridOut] = {}
        self.failure: Exception | None = None
        self.after_put = None
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def put(self, content: bytes, filename: str, metadata: dict) -> ObjectId:
        if self.failure is not None:
            raise self.failure
        self._clock += timedelta(seconds=1)
        object_id = ObjectId()
        self.files[object_id] = _GridOut(
            object_id, content, filename, metadata, self._clock
        )
        hook, self.after_put = self.after_put, None
        if hook is not None:
            hook()
        return object_id

    def find(self, query: dict) -> _Cursor:
        if self.failure is not None:
            raise self.failure
        older_than = query.get("_id", {}).get("$lt")
        return _Cursor(
            [
                f
                for f in self.files.values()
                if f.filename == query["filename"]
                and (older_than is None or f._id < older_than)
            ]
        )

    def delete(self, object_id: ObjectId) -> None:
        self.files.pop(object_id, None)


class _MongoClient:
    def __init__(self):
        self.db: Dict[str, dict] = {}

    def __getitem__(self, name: str):
        return self.db.setdefault(name, {})


@pytest.fixture()
def fake_fs(monkeypatch):
    fs = _GridFS()
    created = []

    def _factory(db, collection):
        created.append(collection)
        return fs

    monkeypatch.setattr(
        "hydrowatch.infrastructure.repositories."
        "gridfs_dataset_repository.gridfs.GridFS",
        _factory,
    )
    fs.created = created
    return fs


@pytest.fixture()
def repository(fake_fs):
    client = cast(MongoClient, _MongoClient())
    return GridFSDatasetRepository(
        mongo_client=client, database_name="hydrowatch", bucket="datasets"
    )


def test_repository_uses_configured_bucket(repository, fake_fs):
    assert fake_fs.created == ["datasets"]


@pytest.mark.asyncio
async def test_save_then_load_returns_content(repository, fake_fs):
    await repository.save(b"a,b\n", "processed/1.csv")

    assert await repository.load("processed/1.csv") == b"a,b\n"
    stored = next(iter(fake_fs.files.values()))
    assert stored.metadata["content_type"] == "text/csv"


@pytest.mark.asyncio
async def test_save_replaces_previous_versions(repository, fake_fs):
    await repository.save(b"a\n", "k")
    await repository.save(b"a\nb\n", "k")
    await repository.save(b"other\n", "other")

    assert await repository.load("k") == b"a\nb\n"
    assert sorted(f.filename for f in fake_fs.files.values()) == ["k", "other"]


@pytest.mark.asyncio
async def test_load_missing_key_raises_not_found(repository):
    with pytest.raises(DatasetNotFoundError):
        await repository.load("missing.csv")


@pytest.mark.asyncio
async def test_storage_errors_are_wrapped(repository, fake_fs):
    fake_fs.failure = PyMongoError("connection reset")

    with pytest.raises(DatasetStorageError):
        await repository.save(b"a\n", "k")
    with pytest.raises(DatasetStorageError):
        await repository.load("k")


@pytest.mark.asyncio
async def test_concurrent_writer_keeps_latest_version(repository, fake_fs):
    await repository.save(b"old\n", "k")
    fake_fs.after_put = lambda: fake_fs.put(b"other writer\n", "k", {})

    await repository.save(b"mine\n", "k")

    contents = sorted(f.read() for f in fake_fs.files.values())
    assert contents == [b"mine\n", b"other writer\n"]
    assert await repository.load("k") == b"other writer\n"

    await repository.save(b"last\n", "k")

    assert [f.read() for f in fake_fs.files.values()] == [b"last\n"]
    assert await repository.load("k") == b"last\n"
