"""
Query building for account-scoped list queries.

Record types with their own filter grammar subclass QueryBuilder and
override build_filters(); pagination is shared by every record type.
"""

import logging
from typing import Any, Mapping, Optional

from pymongo import ASCENDING, DESCENDING

from .models import DEFAULT_PAGE_SIZE, QueryOptions

logger = logging.getLogger(__name__)


class QueryBuilder:
    """Turns an account id and caller filters into a MongoDB query."""

    account_field = "account_id"

    def build(self, account_id: Optional[str], filters: Optional[Mapping[str, Any]]) -> dict:
        query: dict = {}
        if account_id:
            query[self.account_field] = account_id
        query.update(self.build_filters(filters or {}))
        return query

    def build_filters(self, filters: Mapping[str, Any]) -> dict:
        """Translate record-specific filters. No filters by default."""
        return {}


def _positive_int(value: Any) -> Optional[int]:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def build_query_options(
    filters: Optional[Mapping[str, Any]],
    default_page_size: Optional[int] = None,
    max_page_size: Optional[int] = None,
) -> QueryOptions:
    """
    Derive skip/limit/sort from the caller filters.

    Recognized keys: page (1-based), page_size or pageSize, sort_by,
    sort_direction ("asc" or "desc"). Invalid values fall back to defaults.
    """
    filters = filters or {}

    page = _positive_int(filters.get("page")) or 1
    limit = (
        _positive_int(filters.get("page_size", filters.get("pageSize")))
        or _positive_int(default_page_size)
        or DEFAULT_PAGE_SIZE
    )
    if max_page_size and limit > max_page_size:
        logger.debug(f"Page size {limit} clamped to {max_page_size}")
        limit = max_page_size

    sort = None
    sort_by = filters.get("sort_by")
    if sort_by:
        direction = str(filters.get("sort_direction", "asc")).lower()
        sort = [(sort_by, DESCENDING if direction == "desc" else ASCENDING)]

    return QueryOptions(skip=(page - 1) * limit, limit=limit, sort=sort)
