# app/models/admin.py
from datetime import datetime, timezone
from typing import Optional

from app.database import serialize, to_object_id


async def find_admin_by_email(db, email: str) -> Optional[dict]:
    return serialize(await db.admins.find_one({"email": email}))


async def find_admin_by_id(db, admin_id: str) -> Optional[dict]:
    oid = to_object_id(admin_id)
    if oid is None:
        return None
    return serialize(await db.admins.find_one({"_id": oid}))


async def admin_exists(db, email: str, username: str) -> bool:
    found = await db.admins.find_one({"$or": [{"email": email}, {"username": username}]})
    return found is not None


async def create_admin(db, username: str, email: str, password_hash: str) -> dict:
    doc = {
        "username": username,
        "email": email,
        "password": password_hash,
        "created_at": datetime.now(timezone.utc),
    }
    result = await db.admins.insert_one(doc)
    doc["_id"] = result.inserted_id
    return serialize(doc)
