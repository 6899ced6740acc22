# app/models/services.py
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from app.database import serialize, to_object_id


def _now():
    return datetime.now(timezone.utc)


async def create_service(db: AsyncIOMotorDatabase, data: dict) -> dict:
    doc = {**data, "created_at": _now(), "updated_at": _now()}
    result = await db.services.insert_one(doc)
    doc["_id"] = result.inserted_id
    return serialize(doc)


async def get_service(db: AsyncIOMotorDatabase, service_id: str) -> Optional[dict]:
    oid = to_object_id(service_id)
    if oid is None:
        return None
    return serialize(await db.services.find_one({"_id": oid}))


async def get_services_by_ids(db: AsyncIOMotorDatabase, service_ids: Iterable, active_only=False) -> List[dict]:
    """Load services by id, silently skipping ids that are malformed or unknown."""
    oids = [oid for oid in (to_object_id(i) for i in service_ids) if oid is not None]
    if not oids:
        return []
    query = {"_id": {"$in": oids}}
    if active_only:
        query["is_active"] = True
    docs = await db.services.find(query).to_list(None)
    return [serialize(d) for d in docs]


async def list_services(db: AsyncIOMotorDatabase, include_inactive=False) -> List[dict]:
    query = {} if include_inactive else {"is_active": True}
    docs = await db.services.find(query, sort=[("created_at", 1), ("_id", 1)]).to_list(None)
    return [serialize(d) for d in docs]


async def count_active_services(db: AsyncIOMotorDatabase) -> int:
    return await db.services.count_documents({"is_active": True})


async def update_service(db: AsyncIOMotorDatabase, service_id: str, changes: dict) -> Optional[dict]:
    oid = to_object_id(service_id)
    if oid is None:
        return None
    doc = await db.services.find_one_and_update(
        {"_id": oid},
        {"$set": {**changes, "updated_at": _now()}},
        return_document=ReturnDocument.AFTER,
    )
    return serialize(doc)


async def delete_service(db: AsyncIOMotorDatabase, service_id: str) -> bool:
    oid = to_object_id(service_id)
    if oid is None:
        return False
    result = await db.services.delete_one({"_id": oid})
    return result.deleted_count == 1
