"""
Store driver contract and its Motor implementation.

RecordAccessService only depends on the protocols below; MotorStoreDriver
backs them with a MongoDB database via Motor (async driver).
"""

from typing import Any, AsyncIterator, Mapping, Optional, Protocol, Sequence

from bson import ObjectId
from motor.motor_asyncio import (
    AsyncIOMotorCollection,
    AsyncIOMotorCommandCursor,
    AsyncIOMotorCursor,
    AsyncIOMotorDatabase,
)

from .models import QueryOptions, RecordType


class FindResult(Protocol):
    async def to_list(self) -> list: ...


class AggregateResult(Protocol):
    async def open_cursor(self) -> AsyncIterator[Mapping[str, Any]]: ...


class CollectionHandle(Protocol):
    def find(self, query: Mapping[str, Any], options: QueryOptions) -> FindResult: ...

    async def count(self, query: Mapping[str, Any]) -> int: ...

    async def find_by_id(self, id: str) -> Optional[Any]: ...

    async def remove_by_id(self, id: str) -> Any: ...

    async def save(self, record: Any) -> Any: ...

    def aggregate(self, pipeline: Sequence[Mapping[str, Any]]) -> AggregateResult: ...


class StoreDriver(Protocol):
    def collection_for(self, record_type: RecordType) -> CollectionHandle: ...

    def is_valid_object_id(self, id: str) -> bool: ...


class MotorFind:
    """Deferred find; the query runs on to_list()."""

    def __init__(self, cursor: AsyncIOMotorCursor):
        self._cursor = cursor

    async def to_list(self) -> list:
        return await self._cursor.to_list(length=None)


class MotorAggregate:
    def __init__(self, collection: AsyncIOMotorCollection, pipeline: Sequence[Mapping[str, Any]]):
        self._collection = collection
        self._pipeline = list(pipeline)

    async def open_cursor(self) -> AsyncIOMotorCommandCursor:
        return self._collection.aggregate(self._pipeline)


class MotorCollectionHandle:
    """CollectionHandle over a single Motor collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    def find(self, query: Mapping[str, Any], options: QueryOptions) -> MotorFind:
        cursor = self.collection.find(dict(query)).skip(options.skip).limit(options.limit)
        if options.sort:
            cursor = cursor.sort(options.sort)
        return MotorFind(cursor)

    async def count(self, query: Mapping[str, Any]) -> int:
        return await self.collection.count_documents(dict(query))

    async def find_by_id(self, id: str) -> Optional[dict]:
        return await self.collection.find_one({"_id": ObjectId(id)})

    async def remove_by_id(self, id: str):
        return await self.collection.delete_one({"_id": ObjectId(id)})

    async def save(self, record: dict) -> dict:
        if record.get("_id") is None:
            result = await self.collection.insert_one(record)
            record["_id"] = result.inserted_id
            return record

        await self.collection.replace_one({"_id": record["_id"]}, record, upsert=True)
        return record

    def aggregate(self, pipeline: Sequence[Mapping[str, Any]]) -> MotorAggregate:
        return MotorAggregate(self.collection, pipeline)


class MotorStoreDriver:
    """StoreDriver resolving record types to collections of one database."""

    def __init__(self, database: AsyncIOMotorDatabase):
        self.database = database

    def collection_for(self, record_type: RecordType) -> MotorCollectionHandle:
        return MotorCollectionHandle(self.database[record_type.collection_name])

    def is_valid_object_id(self, id: str) -> bool:
        return ObjectId.is_valid(id)
