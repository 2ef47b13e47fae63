"""
MongoDB connection management.

This module provides:
- MongoDB client connection via Motor (async driver)
- A RecordAccessService factory bound to the configured database
- Health check utilities
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from .config import Settings, get_settings
from .driver import MotorStoreDriver
from .service import RecordAccessService

logger = logging.getLogger(__name__)

# Global MongoDB client instance
_client: Optional[AsyncIOMotorClient] = None
_settings: Optional[Settings] = None


def init_client(settings: Optional[Settings] = None) -> AsyncIOMotorClient:
    """
    Create the MongoDB client.

    Calling it again returns the existing client unless different settings
    are given, in which case the client is recreated for them.
    """
    global _client, _settings

    if _client is not None:
        if settings is None or settings is _settings:
            return _client
        # New settings may point at another server or database
        close_client()

    _settings = settings or get_settings()
    _client = AsyncIOMotorClient(_settings.mongodb_url)
    logger.info(f"MongoDB client created for {_sanitize_mongodb_url(_settings.mongodb_url)}")
    return _client


def close_client() -> None:
    """
    Close MongoDB connection.
    """
    global _client, _settings
    if _client is not None:
        _client.close()
        _client = None
        _settings = None
        logger.info("MongoDB client closed")


def get_client() -> AsyncIOMotorClient:
    """
    Get the MongoDB client instance.
    """
    if _client is None:
        raise RuntimeError("Database not initialized. Call init_client() first.")
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """
    Get the configured MongoDB database.
    """
    client = get_client()
    return client[_settings.mongodb_database]


def create_data_service(settings: Optional[Settings] = None) -> RecordAccessService:
    """Build a RecordAccessService over the configured database."""
    init_client(settings)
    return RecordAccessService(MotorStoreDriver(get_database()), _settings)


async def check_connection() -> bool:
    """
    Check if MongoDB connection is healthy.
    """
    if _client is None:
        return False

    try:
        await _client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning(f"MongoDB ping failed: {e}")
        return False


def get_db_info() -> dict:
    """
    Get database connection information and status.
    """
    settings = _settings or get_settings()

    return {
        "status": "connected" if _client is not None else "disconnected",
        "url": _sanitize_mongodb_url(settings.mongodb_url),
        "database": settings.mongodb_database,
        "environment": settings.environment,
    }


def _sanitize_mongodb_url(url: str) -> str:
    """
    Hide password in MongoDB URL for safe logging.
    """
    if "@" not in url or "://" not in url:
        return url

    protocol, rest = url.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    if ":" in credentials:
        username = credentials.split(":", 1)[0]
        return f"{protocol}://{username}:***@{host}"
    return url
