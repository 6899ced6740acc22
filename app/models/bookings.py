# app/models/bookings.py
"""Booking store.

Bookings live in the ``bookings`` collection with snake_case fields and
``booking_date`` stored as a midnight ``datetime``. Every booking that is not
cancelled also owns a document in ``booking_slots`` keyed by its slot; the
unique ``_id`` of that collection is what stops two live bookings from
sharing a date and time.
"""
import logging
import re
from datetime import date, datetime, time, timezone
from typing import List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import SlotUnavailableError
from app.database import serialize, to_object_id
from app.schemas.bookings import BookingStatus

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("created_at", -1), ("_id", -1)]


def _now():
    return datetime.now(timezone.utc)


def as_datetime(day: date) -> datetime:
    """BSON has no date type; calendar dates are stored at midnight."""
    return datetime.combine(day, time.min)


def slot_key(day: date, at: str) -> str:
    return f"{day.isoformat()}T{at}"


async def claim_slot(db: AsyncIOMotorDatabase, day: date, at: str, booking_id: ObjectId):
    try:
        await db.booking_slots.insert_one(
            {"_id": slot_key(day, at), "booking": booking_id, "claimed_at": _now()}
        )
    except DuplicateKeyError:
        logger.info("Slot %s already claimed", slot_key(day, at))
        raise SlotUnavailableError()


async def release_slot(db: AsyncIOMotorDatabase, day: date, at: str, booking_id: ObjectId):
    await db.booking_slots.delete_one({"_id": slot_key(day, at), "booking": booking_id})


async def insert_booking(db: AsyncIOMotorDatabase, doc: dict) -> ObjectId:
    doc = {**doc, "created_at": _now(), "updated_at": _now()}
    result = await db.bookings.insert_one(doc)
    return result.inserted_id


async def count_slot_bookings(db: AsyncIOMotorDatabase, day: date, at: str) -> int:
    """Non-cancelled bookings at exactly this date and time."""
    return await db.bookings.count_documents({
        "booking_date": as_datetime(day),
        "booking_time": at,
        "status": {"$ne": BookingStatus.CANCELLED.value},
    })


async def _populate(db: AsyncIOMotorDatabase, docs: List[dict]) -> List[dict]:
    """Replace each line item's service id with the full service document."""
    ids = {item["service"] for doc in docs for item in doc.get("services", [])}
    services = {}
    if ids:
        for svc in await db.services.find({"_id": {"$in": list(ids)}}).to_list(None):
            services[svc["_id"]] = serialize(svc)

    populated = []
    for doc in docs:
        doc = serialize(doc)
        doc["services"] = [
            {"service": services.get(item["service"]), "quantity": item["quantity"]}
            for item in doc.get("services", [])
        ]
        if isinstance(doc.get("booking_date"), datetime):
            doc["booking_date"] = doc["booking_date"].date()
        populated.append(doc)
    return populated


async def get_raw_booking(db: AsyncIOMotorDatabase, booking_id) -> Optional[dict]:
    oid = to_object_id(booking_id)
    if oid is None:
        return None
    return await db.bookings.find_one({"_id": oid})


async def get_booking(db: AsyncIOMotorDatabase, booking_id) -> Optional[dict]:
    doc = await get_raw_booking(db, booking_id)
    if doc is None:
        return None
    return (await _populate(db, [doc]))[0]


async def list_bookings(
    db: AsyncIOMotorDatabase,
    customer: Optional[str] = None,
    service_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    limit: int = 0,
) -> List[dict]:
    query = {}
    if customer:
        query["customer.name"] = {"$regex": re.escape(customer), "$options": "i"}
    if service_id:
        oid = to_object_id(service_id)
        if oid is None:
            return []
        query["services.service"] = oid
    date_range = {}
    if start_date:
        date_range["$gte"] = as_datetime(start_date)
    if end_date:
        date_range["$lte"] = as_datetime(end_date)
    if date_range:
        query["booking_date"] = date_range

    docs = await db.bookings.find(query, sort=NEWEST_FIRST, limit=limit).to_list(None)
    return await _populate(db, docs)


async def set_booking_status(
    db: AsyncIOMotorDatabase,
    booking_id,
    status: BookingStatus,
    updated_by: Optional[str] = None,
    expected_status: Optional[str] = None,
) -> Optional[dict]:
    """Write the new status and return the document as it was before.

    With ``expected_status`` the write only happens while the booking still
    has that status; otherwise None is returned.
    """
    oid = to_object_id(booking_id)
    if oid is None:
        return None
    query = {"_id": oid}
    if expected_status is not None:
        query["status"] = expected_status
    return await db.bookings.find_one_and_update(
        query,
        {"$set": {"status": status.value, "updated_by": updated_by, "updated_at": _now()}},
        return_document=ReturnDocument.BEFORE,
    )


async def booking_stats(db: AsyncIOMotorDatabase) -> dict:
    stats = {s.value: 0 for s in BookingStatus}
    revenue = 0.0
    docs = await db.bookings.find({}, {"status": 1, "total_price": 1}).to_list(None)
    for doc in docs:
        stats[doc["status"]] = stats.get(doc["status"], 0) + 1
        if doc["status"] != BookingStatus.CANCELLED.value:
            revenue += doc.get("total_price", 0)
    stats["total_bookings"] = len(docs)
    stats["total_revenue"] = round(revenue, 2)
    return stats
