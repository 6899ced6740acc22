# app/booking_service.py
import logging
from datetime import date
from typing import List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.availability import check_availability
from app.core.config import settings
from app.core.exceptions import (
    BookingError,
    ServiceNotFoundError,
    SlotUnavailableError,
    TotalPriceMismatchError,
)
from app.models import bookings as booking_store
from app.models import services as catalog
from app.schemas.bookings import BookingCreate, BookingStatus, Customer, LineItemIn
from app.schemas.cart import Cart

logger = logging.getLogger(__name__)


async def verify_total(db: AsyncIOMotorDatabase, items: List[LineItemIn], total_price: float):
    services = {s["id"]: s for s in await catalog.get_services_by_ids(db, [i.service_id for i in items])}
    for item in items:
        if item.service_id not in services:
            raise ServiceNotFoundError(item.service_id)
    expected = round(sum(services[i.service_id]["price"] * i.quantity for i in items), 2)
    if abs(expected - total_price) > 0.01:
        raise TotalPriceMismatchError(expected, total_price)


async def create_booking(db: AsyncIOMotorDatabase, request: BookingCreate) -> dict:
    """Persist a confirmed booking and return it with services populated.

    Working days and hours are not re-checked here; callers run the
    availability check first. The slot itself is claimed atomically, so a
    second live booking for the same date and time raises
    SlotUnavailableError even if both callers saw the slot as free.
    """
    if settings.VERIFY_TOTAL_PRICE:
        await verify_total(db, request.services, request.total_price)

    booking_id = ObjectId()
    day, at = request.booking_date, request.booking_time
    await booking_store.claim_slot(db, day, at, booking_id)

    doc = {
        "_id": booking_id,
        "services": [{"service": ObjectId(i.service_id), "quantity": i.quantity} for i in request.services],
        "customer": request.customer.model_dump(),
        "booking_date": booking_store.as_datetime(day),
        "booking_time": at,
        "total_price": request.total_price,
        "status": BookingStatus.CONFIRMED.value,
    }
    try:
        await booking_store.insert_booking(db, doc)
    except Exception:
        await booking_store.release_slot(db, day, at, booking_id)
        raise

    logger.info("Booking %s created for %s %s", booking_id, day.isoformat(), at)
    return await booking_store.get_booking(db, booking_id)


async def build_cart(db: AsyncIOMotorDatabase, items: List[LineItemIn]) -> Cart:
    """Price the requested items from the active catalog."""
    services = {
        s["id"]: s
        for s in await catalog.get_services_by_ids(db, [i.service_id for i in items], active_only=True)
    }
    cart = Cart()
    for item in items:
        service = services.get(item.service_id)
        if service is None:
            raise ServiceNotFoundError(item.service_id)
        cart.add(service, item.quantity)
    return cart


async def checkout(db: AsyncIOMotorDatabase, cart: Cart, customer: Customer, day: date, at: str) -> dict:
    if not cart.items:
        raise BookingError("Cart is empty")

    availability = await check_availability(db, cart.service_ids, day, at)
    if not availability.available:
        raise SlotUnavailableError(availability.message, availability)

    request = BookingCreate(
        services=cart.line_items(),
        customer=customer,
        booking_date=day,
        booking_time=at,
        total_price=cart.total_price,
    )
    return await create_booking(db, request)


async def change_status(
    db: AsyncIOMotorDatabase, booking_id: str, status: BookingStatus, admin: dict
) -> Optional[dict]:
    """Move a booking to ``status`` on behalf of ``admin``.

    Leaving the cancelled state re-claims the slot and may raise
    SlotUnavailableError; entering it frees the slot.
    """
    while True:
        current = await booking_store.get_raw_booking(db, booking_id)
        if current is None:
            return None

        day, at = current["booking_date"].date(), current["booking_time"]
        was_cancelled = current["status"] == BookingStatus.CANCELLED.value
        reviving = was_cancelled and status != BookingStatus.CANCELLED
        if reviving:
            await booking_store.claim_slot(db, day, at, current["_id"])

        before = await booking_store.set_booking_status(
            db, current["_id"], status, admin["email"], expected_status=current["status"]
        )
        if before is not None:
            break
        # Status changed since it was read; undo the claim and start over.
        if reviving:
            await booking_store.release_slot(db, day, at, current["_id"])

    if not was_cancelled and status == BookingStatus.CANCELLED:
        await booking_store.release_slot(db, day, at, current["_id"])

    logger.info(
        "Booking %s: %s -> %s by %s", current["_id"], before["status"], status.value, admin["email"]
    )
    return await booking_store.get_booking(db, current["_id"])


async def cancel_booking(db: AsyncIOMotorDatabase, booking_id: str, admin: dict) -> Optional[dict]:
    # No check on the current status; cancelling twice is allowed.
    return await change_status(db, booking_id, BookingStatus.CANCELLED, admin)


async def dashboard(db: AsyncIOMotorDatabase) -> dict:
    stats = await booking_store.booking_stats(db)
    return {
        "summary": stats,
        "active_services": await catalog.count_active_services(db),
        "recent_bookings": await booking_store.list_bookings(db, limit=5),
    }
