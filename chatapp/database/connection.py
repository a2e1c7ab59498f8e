import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from chatapp.core.config import Settings, get_settings


logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None
_db_name: Optional[str] = None


def create_client(settings: Settings) -> AsyncIOMotorClient:
    # timeoutMS bounds every operation so a hung server cannot hang a request
    return AsyncIOMotorClient(
        settings.mongodb_url,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        timeoutMS=settings.mongodb_timeout_ms,
    )


async def connect_to_mongo(settings: Optional[Settings] = None) -> None:
    global _client, _db_name
    if _client is not None:
        return
    settings = settings or get_settings()
    _client = create_client(settings)
    _db_name = settings.mongodb_db
    logger.info("Connected to MongoDB database %r", settings.mongodb_db)


async def close_mongo_connection() -> None:
    global _client
    if _client is None:
        return
    _client.close()
    _client = None
    logger.info("MongoDB connection closed")


def get_database() -> AsyncIOMotorDatabase:
    if _client is None:
        raise RuntimeError("MongoDB client is not initialised; call connect_to_mongo() first")
    return _client[_db_name]


async def mongo_db_dependency() -> AsyncIOMotorDatabase:
    return get_database()
