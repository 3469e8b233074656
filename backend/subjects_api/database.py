"""
Database connections - MongoDB async (Motor).

The client is created once in the app lifespan and stored on ``app.state``;
request handlers receive the database through the ``get_db`` dependency.
"""

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from .config import MONGO_URL, DB_NAME, logger


def create_client(mongo_url: str = MONGO_URL) -> AsyncIOMotorClient:
    """Create the async Mongo client used by all app queries."""
    return AsyncIOMotorClient(mongo_url)


def get_database(client: AsyncIOMotorClient, db_name: str = DB_NAME) -> AsyncIOMotorDatabase:
    return client[db_name]


async def ensure_indexes(db: AsyncIOMotorDatabase):
    """Create the indexes the subject queries rely on."""
    await db.subjects.create_index([("subject_id", ASCENDING)], unique=True)
    await db.subjects.create_index([("teacher", ASCENDING)])
    await db.subjects.create_index([("alumni", ASCENDING)])
    logger.info("✅ Subject indexes ensured")


def get_db(request: Request) -> AsyncIOMotorDatabase:
    """FastAPI dependency - database handle attached during startup."""
    return request.app.state.db
