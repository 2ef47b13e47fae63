"""
Record type descriptors and result models.

This module provides:
- RecordType: names a kind of record and knows how to merge updates into it
- timestamped_update: default merge that stamps updated_at
- CountedList: a page of records plus the total matching count
- QueryOptions: pagination and sorting for a find
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field

# Used when neither the filters nor the configuration set a page size
DEFAULT_PAGE_SIZE = 25


def timestamped_update(existing: Any, patch: Mapping[str, Any]) -> Any:
    """Copy patch fields onto the existing record and stamp updated_at."""
    now = datetime.now(timezone.utc)
    if isinstance(existing, dict):
        existing.update(patch)
        existing["updated_at"] = now
        return existing

    for key, value in patch.items():
        setattr(existing, key, value)
    existing.updated_at = now
    return existing


def _snake_case(name: str) -> str:
    # HTTPRequest -> http_request, TestModel -> test_model
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name).lower()


@dataclass(frozen=True)
class RecordType:
    """
    Describes a kind of record stored in its own collection.

    The name labels error messages and, unless a collection is given,
    derives the collection name (``TestModel`` -> ``test_model``).
    """

    name: str
    collection: Optional[str] = None
    update: Callable[[Any, Mapping[str, Any]], Any] = field(
        default=timestamped_update, compare=False
    )

    @property
    def collection_name(self) -> str:
        return self.collection or _snake_case(self.name)


class QueryOptions(BaseModel):
    """Pagination and sort options for a find."""

    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    sort: Optional[List[Tuple[str, int]]] = None


class CountedList(BaseModel):
    """A page of records and the count of all records matching the query."""

    list: List[Any] = Field(default_factory=list)
    count: int = 0
