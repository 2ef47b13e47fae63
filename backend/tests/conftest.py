"""Shared fixtures: a mocked store driver and a scripted aggregate cursor."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from docstore import RecordAccessService, RecordType


def stamp_update(existing: dict, patch: dict) -> dict:
    existing["something"] = patch["something"]
    existing["updatedAt"] = "now"
    return existing


class ScriptedCursor:
    """Async iterator yielding scripted datums, optionally failing at the end."""

    def __init__(self, items=(), error: Exception | None = None):
        self._items = list(items)
        self._error = error
        self.reads = 0
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self):
        self.reads += 1
        if self._items:
            return self._items.pop(0)
        if self._error is not None:
            raise self._error
        raise StopAsyncIteration

    async def close(self):
        self.closed = True


@pytest.fixture
def test_model() -> RecordType:
    return RecordType(name="TestModel", update=stamp_update)


@pytest.fixture
def cursor_factory():
    return ScriptedCursor


@pytest.fixture
def cursor() -> ScriptedCursor:
    return ScriptedCursor([{"total_documents": 5}])


@pytest.fixture
def collection(cursor: ScriptedCursor) -> MagicMock:
    collection = MagicMock()
    collection.find_by_id = AsyncMock(return_value=None)
    collection.remove_by_id = AsyncMock(return_value=None)
    collection.save = AsyncMock(side_effect=lambda record: record)
    collection.count = AsyncMock(return_value=0)
    collection.find.return_value.to_list = AsyncMock(return_value=[])
    collection.aggregate.return_value.open_cursor = AsyncMock(return_value=cursor)
    return collection


@pytest.fixture
def driver(collection: MagicMock) -> MagicMock:
    driver = MagicMock(spec=["collection_for", "is_valid_object_id"])
    driver.collection_for.return_value = collection
    driver.is_valid_object_id.side_effect = ObjectId.is_valid
    return driver


@pytest.fixture
def config() -> SimpleNamespace:
    return SimpleNamespace(page_size=None, max_page_size=None)


@pytest.fixture
def service(driver: MagicMock, config: SimpleNamespace) -> RecordAccessService:
    return RecordAccessService(driver, config)


@pytest.fixture
def record_id() -> str:
    return str(ObjectId())
