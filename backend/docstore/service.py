"""Generic record access over a document store."""

import asyncio
import inspect
import logging
from typing import Any, Mapping, Optional, Sequence

from .driver import StoreDriver
from .exceptions import InvalidIdError, MissingUpdateDataError, NotFoundError, WrongDataError
from .models import CountedList, RecordType
from .query import QueryBuilder, build_query_options

logger = logging.getLogger(__name__)


class RecordAccessService:
    """
    CRUD, paginated listing and aggregate counts for any record type.

    Identifier-taking operations validate the id before touching the store,
    so a bad id never reaches the driver. Store errors are not caught here.
    """

    def __init__(self, driver: StoreDriver, config: Any):
        if driver is None or not callable(getattr(driver, "collection_for", None)):
            raise ValueError("driver is mandatory for RecordAccessService")
        if config is None:
            raise ValueError("config is mandatory for RecordAccessService")
        self.driver = driver
        self.config = config

    def validate_object_id(self, record_type: RecordType, id: Optional[str]) -> None:
        """
        Check that an id is present and is a valid ObjectId.

        Raises:
            WrongDataError: When the id is missing
            InvalidIdError: When the id is not a valid ObjectId
        """
        name = record_type.name
        if not id:
            raise WrongDataError(f"{name} ID is missing.")
        try:
            valid = self.driver.is_valid_object_id(id)
        except Exception as e:
            raise InvalidIdError(name, f"{name} ID is invalid.") from e
        if not valid:
            raise InvalidIdError(name, f"{name} ID is invalid.")

    async def get_by_id(self, record_type: RecordType, id: Optional[str]) -> Optional[Any]:
        """Find a record by id. Returns None when nothing matches."""
        self.validate_object_id(record_type, id)
        return await self.driver.collection_for(record_type).find_by_id(id)

    async def get_existing(self, record_type: RecordType, id: Optional[str]) -> Any:
        """Find a record by id, raising NotFoundError when it does not exist."""
        found = await self.get_by_id(record_type, id)
        if found is None:
            raise NotFoundError(f"{record_type.name} not found")
        return found

    async def delete(self, record_type: RecordType, id: Optional[str]) -> Any:
        """Remove a record by id and return the raw store result."""
        self.validate_object_id(record_type, id)
        result = await self.driver.collection_for(record_type).remove_by_id(id)
        logger.debug(f"Removed {record_type.name} {id}")
        return result

    async def update(
        self,
        record_type: RecordType,
        id: Optional[str],
        patch: Optional[Mapping[str, Any]],
    ) -> Any:
        """
        Merge a patch into an existing record and persist it.

        The merge itself is delegated to record_type.update.

        Raises:
            WrongDataError: When the id is missing
            InvalidIdError: When the id is invalid
            MissingUpdateDataError: When no patch is given
            NotFoundError: When no record has this id
        """
        self.validate_object_id(record_type, id)
        if patch is None:
            raise MissingUpdateDataError()

        existing = await self.get_by_id(record_type, id)
        if existing is None:
            raise NotFoundError(f"{record_type.name} not found")

        updated = record_type.update(existing, patch)
        saved = await self.driver.collection_for(record_type).save(updated)
        logger.info(f"Updated {record_type.name} {id}")
        return saved

    async def get_counted_list(
        self,
        record_type: RecordType,
        account_id: Optional[str],
        filters: Optional[Mapping[str, Any]],
        query_builder: QueryBuilder,
    ) -> CountedList:
        """
        Get a page of records together with the count of all matches.

        The page and the count run concurrently against the same query, with
        no snapshot between them.
        """
        query = query_builder.build(account_id, filters)
        options = build_query_options(
            filters,
            getattr(self.config, "page_size", None),
            getattr(self.config, "max_page_size", None),
        )
        collection = self.driver.collection_for(record_type)

        records, count = await asyncio.gather(
            collection.find(query, options).to_list(),
            collection.count(query),
        )
        return CountedList(list=records, count=count)

    async def get_aggregate_count(
        self, record_type: RecordType, pipeline: Sequence[Mapping[str, Any]]
    ) -> int:
        """
        Run an aggregation expected to emit one {"total_documents": n} row.

        Returns n from the first row, or 0 when the pipeline emits nothing
        or the row has no total. Cursor errors propagate unchanged.
        """
        cursor = await self.driver.collection_for(record_type).aggregate(pipeline).open_cursor()
        try:
            async for datum in cursor:
                return datum.get("total_documents", 0)
            return 0
        finally:
            close = getattr(cursor, "close", None)
            if close is not None:
                closed = close()
                if inspect.isawaitable(closed):
                    await closed
