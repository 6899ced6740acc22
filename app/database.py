# app/database.py
import logging
from typing import Optional

import certifi
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from app.core.config import settings

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    global _client
    if _client is None:
        kwargs = {"tlsCAFile": certifi.where()} if settings.MONGO_TLS else {}
        _client = AsyncIOMotorClient(settings.MONGO_URL, **kwargs)
    return _client


def get_db() -> AsyncIOMotorDatabase:
    """FastAPI dependency returning the application database."""
    return get_client()[settings.MONGO_DB_NAME]


def to_object_id(value) -> Optional[ObjectId]:
    """Parse an id coming from a path or body; None when it is not an ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def serialize(doc):
    if not doc:
        return doc
    doc = dict(doc)
    if doc.get("_id"):
        doc["id"] = str(doc.pop("_id"))
    return doc


async def ping(db: AsyncIOMotorDatabase) -> bool:
    try:
        await db.command("ping")
        return True
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


async def ensure_indexes(db: AsyncIOMotorDatabase):
    await db.services.create_index([("is_active", ASCENDING)])
    await db.bookings.create_index(
        [("booking_date", ASCENDING), ("booking_time", ASCENDING), ("status", ASCENDING)]
    )
    await db.bookings.create_index([("created_at", DESCENDING)])
    await db.bookings.create_index([("services.service", ASCENDING)])
    await db.admins.create_index([("email", ASCENDING)], unique=True)
    await db.admins.create_index([("username", ASCENDING)], unique=True)
