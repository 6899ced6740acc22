# app/availability.py
"""Availability checks for a set of services at a given slot.

A service is bookable when the slot's weekday is one of its working days and
the time lies within its working hours, bounds included. Times are compared
as zero-padded "HH:MM" strings. When every requested service is bookable the
slot itself must also be free of non-cancelled bookings.
"""
from datetime import date
from typing import Iterable, List

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models import bookings as booking_store
from app.models import services as catalog
from app.schemas.base import WEEKDAYS
from app.schemas.bookings import AvailabilityResult

SERVICES_UNAVAILABLE = "Some services are not available at this time"
SLOT_BOOKED = "This time slot is already booked"
ALL_AVAILABLE = "All services are available"


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]


def is_within_working_window(service: dict, day: date, at: str) -> bool:
    availability = service["availability"]
    hours = availability["working_hours"]
    if weekday_name(day) not in availability["working_days"]:
        return False
    return hours["start"] <= at <= hours["end"]


def unavailable_service_ids(services: Iterable[dict], day: date, at: str) -> List[str]:
    return [s["id"] for s in services if not is_within_working_window(s, day, at)]


async def check_availability(
    db: AsyncIOMotorDatabase, service_ids: Iterable[str], day: date, at: str
) -> AvailabilityResult:
    services = await catalog.get_services_by_ids(db, service_ids)

    unavailable = unavailable_service_ids(services, day, at)
    if unavailable:
        return AvailabilityResult(
            available=False, unavailable_services=unavailable, message=SERVICES_UNAVAILABLE
        )

    if await booking_store.count_slot_bookings(db, day, at):
        return AvailabilityResult(available=False, message=SLOT_BOOKED)

    return AvailabilityResult(available=True, message=ALL_AVAILABLE)
