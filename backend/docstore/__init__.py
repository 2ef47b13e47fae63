"""Docstore: generic record access over MongoDB."""

__version__ = "0.1.0"

from .exceptions import (
    DataServiceError,
    InvalidIdError,
    MissingUpdateDataError,
    NotFoundError,
    ValidationError,
    WrongDataError,
)
from .models import CountedList, QueryOptions, RecordType, timestamped_update
from .query import DEFAULT_PAGE_SIZE, QueryBuilder, build_query_options
from .service import RecordAccessService

__all__ = [
    "__version__",
    # Service
    "RecordAccessService",
    # Descriptors and results
    "RecordType",
    "CountedList",
    "QueryOptions",
    "timestamped_update",
    # Queries
    "QueryBuilder",
    "build_query_options",
    "DEFAULT_PAGE_SIZE",
    # Errors
    "DataServiceError",
    "ValidationError",
    "WrongDataError",
    "InvalidIdError",
    "NotFoundError",
    "MissingUpdateDataError",
]
