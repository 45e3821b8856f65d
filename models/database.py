"""Database models and connection setup."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from typing import Optional
from config.settings import settings
from utils.logger import setup_logger

logger = setup_logger(__name__)


class Database:
    """Database connection manager."""

    client: Optional[AsyncIOMotorClient] = None


db = Database()


async def connect_to_mongo():
    """Create database connection."""
    db.client = AsyncIOMotorClient(settings.mongodb_uri)
    logger.info(f"Connected to MongoDB database: {get_database().name}")


async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        db.client.close()
        db.client = None
        logger.info("Disconnected from MongoDB")


async def init_mongo():
    """Initialize MongoDB connection and the users collection."""
    await connect_to_mongo()

    # Users are looked up by _id only, which MongoDB always indexes
    logger.info(f"MongoDB initialized: collection '{get_users_collection().name}' ready")


def get_database() -> AsyncIOMotorDatabase:
    """Get database instance named by the connection string."""
    if db.client is None:
        raise RuntimeError("MongoDB client is not connected")
    return db.client.get_default_database(settings.database_name)


def get_users_collection() -> AsyncIOMotorCollection:
    """Get users collection."""
    return get_database().users
