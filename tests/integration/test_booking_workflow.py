"""Booking workflow against the in-memory document store."""
import asyncio

import pytest

from app import booking_service
from app.availability import ALL_AVAILABLE, SERVICES_UNAVAILABLE, SLOT_BOOKED, check_availability
from app.core.config import settings
from app.core.exceptions import ServiceNotFoundError, SlotUnavailableError, TotalPriceMismatchError
from app.models import bookings as booking_store
from app.models import services as catalog
from app.schemas.bookings import BookingCreate, BookingStatus, Customer, LineItemIn
from app.schemas.services import ServiceCreate
from tests.data import CUSTOMER, MONDAY, SATURDAY, SERVICE_A

pytestmark = pytest.mark.asyncio

ADMIN = {"id": "65a0000000000000000000aa", "email": "admin@example.com"}


async def add_service(db, **overrides):
    return await catalog.create_service(
        db, ServiceCreate.model_validate({**SERVICE_A, **overrides}).model_dump()
    )


def booking_request(service, day=MONDAY, at="10:00", total=50.0, quantity=1):
    return BookingCreate(
        services=[{"service_id": service["id"], "quantity": quantity}],
        customer=CUSTOMER,
        booking_date=day,
        booking_time=at,
        total_price=total,
    )


async def test_full_scenario(db):
    service = await add_service(db)

    result = await check_availability(db, [service["id"]], SATURDAY, "10:00")
    assert not result.available
    assert result.unavailable_services == [service["id"]]
    assert result.message == SERVICES_UNAVAILABLE

    result = await check_availability(db, [service["id"]], MONDAY, "10:00")
    assert result.available
    assert result.message == ALL_AVAILABLE

    booking = await booking_service.create_booking(db, booking_request(service))
    assert booking["status"] == BookingStatus.CONFIRMED.value

    result = await check_availability(db, [service["id"]], MONDAY, "10:00")
    assert not result.available
    assert result.message == SLOT_BOOKED
    assert result.unavailable_services is None

    await booking_service.cancel_booking(db, booking["id"], ADMIN)

    result = await check_availability(db, [service["id"]], MONDAY, "10:00")
    assert result.available


async def test_booked_slot_blocks_any_services(db):
    first = await add_service(db)
    other = await add_service(db, name="Window Wash")
    await booking_service.create_booking(db, booking_request(first))

    result = await check_availability(db, [other["id"]], MONDAY, "10:00")

    assert not result.available
    assert result.message == SLOT_BOOKED


async def test_working_window_is_checked_before_slot(db):
    service = await add_service(db)
    await booking_service.create_booking(db, booking_request(service, day=SATURDAY))

    result = await check_availability(db, [service["id"]], SATURDAY, "10:00")

    assert result.message == SERVICES_UNAVAILABLE
    assert result.unavailable_services == [service["id"]]


async def test_unknown_service_ids_are_dropped(db):
    service = await add_service(db)

    result = await check_availability(
        db, [service["id"], "65a0000000000000000000ff", "garbage"], MONDAY, "10:00"
    )

    assert result.available


async def test_created_booking_has_populated_services(db):
    service = await add_service(db)

    created = await booking_service.create_booking(db, booking_request(service, quantity=2, total=100))
    fetched = await booking_store.get_booking(db, created["id"])

    item = fetched["services"][0]
    assert item["quantity"] == 2
    assert item["service"]["id"] == service["id"]
    assert item["service"]["name"] == SERVICE_A["name"]
    assert item["service"]["price"] == SERVICE_A["price"]
    assert fetched["booking_date"] == MONDAY
    assert fetched["customer"]["email"] == CUSTOMER["email"]


async def test_concurrent_creates_for_one_slot_book_once(db):
    service = await add_service(db)

    results = await asyncio.gather(
        booking_service.create_booking(db, booking_request(service)),
        booking_service.create_booking(db, booking_request(service)),
        return_exceptions=True,
    )

    created = [r for r in results if isinstance(r, dict)]
    refused = [r for r in results if isinstance(r, SlotUnavailableError)]
    assert len(created) == 1
    assert len(refused) == 1
    assert await booking_store.count_slot_bookings(db, MONDAY, "10:00") == 1


async def test_cancelled_slot_can_be_booked_again(db):
    service = await add_service(db)
    first = await booking_service.create_booking(db, booking_request(service))
    await booking_service.cancel_booking(db, first["id"], ADMIN)

    second = await booking_service.create_booking(db, booking_request(service))

    assert second["id"] != first["id"]


async def test_cancel_is_unconditional(db):
    service = await add_service(db)
    booking = await booking_service.create_booking(db, booking_request(service))
    await booking_service.change_status(db, booking["id"], BookingStatus.COMPLETED, ADMIN)

    first = await booking_service.cancel_booking(db, booking["id"], ADMIN)
    again = await booking_service.cancel_booking(db, booking["id"], ADMIN)

    assert first["status"] == "cancelled"
    assert again["status"] == "cancelled"
    assert again["updated_by"] == ADMIN["email"]


async def test_cancel_unknown_booking_returns_none(db):
    assert await booking_service.cancel_booking(db, "65a0000000000000000000ff", ADMIN) is None
    assert await booking_service.cancel_booking(db, "nope", ADMIN) is None


async def test_reviving_a_cancelled_booking_needs_a_free_slot(db):
    service = await add_service(db)
    first = await booking_service.create_booking(db, booking_request(service))
    await booking_service.cancel_booking(db, first["id"], ADMIN)
    await booking_service.create_booking(db, booking_request(service))

    with pytest.raises(SlotUnavailableError):
        await booking_service.change_status(db, first["id"], BookingStatus.CONFIRMED, ADMIN)

    assert (await booking_store.get_booking(db, first["id"]))["status"] == "cancelled"


async def test_client_total_is_trusted_by_default(db):
    service = await add_service(db)

    booking = await booking_service.create_booking(db, booking_request(service, total=1.0))

    assert booking["total_price"] == 1.0


async def test_total_verification_rejects_mismatch(db, monkeypatch):
    monkeypatch.setattr(settings, "VERIFY_TOTAL_PRICE", True)
    service = await add_service(db)

    with pytest.raises(TotalPriceMismatchError):
        await booking_service.create_booking(db, booking_request(service, total=1.0))

    booking = await booking_service.create_booking(db, booking_request(service, quantity=3, total=150.0))
    assert booking["total_price"] == 150.0


async def test_checkout_prices_cart_from_catalog(db):
    service = await add_service(db, price=20.0)
    other = await add_service(db, name="Oven Clean", price=35.5)
    cart = await booking_service.build_cart(
        db, booking_request(service, quantity=2).services + booking_request(other).services
    )

    booking = await booking_service.checkout(db, cart, Customer(**CUSTOMER), MONDAY, "11:00")

    assert booking["total_price"] == 75.5
    assert [i["quantity"] for i in booking["services"]] == [2, 1]


async def test_checkout_refuses_unavailable_services(db):
    service = await add_service(db)
    cart = await booking_service.build_cart(db, booking_request(service).services)

    with pytest.raises(SlotUnavailableError) as exc_info:
        await booking_service.checkout(db, cart, Customer(**CUSTOMER), SATURDAY, "10:00")

    assert exc_info.value.availability.unavailable_services == [service["id"]]


async def test_build_cart_rejects_inactive_services(db):
    service = await add_service(db, isActive=False)

    with pytest.raises(ServiceNotFoundError):
        await booking_service.build_cart(db, booking_request(service).services)


async def test_dashboard_counts(db):
    service = await add_service(db)
    kept = await booking_service.create_booking(db, booking_request(service, at="10:00"))
    dropped = await booking_service.create_booking(db, booking_request(service, at="11:00", total=80.0))
    await booking_service.cancel_booking(db, dropped["id"], ADMIN)

    data = await booking_service.dashboard(db)

    assert data["summary"]["total_bookings"] == 2
    assert data["summary"]["confirmed"] == 1
    assert data["summary"]["cancelled"] == 1
    assert data["summary"]["total_revenue"] == 50.0
    assert data["active_services"] == 1
    assert [b["id"] for b in data["recent_bookings"]] == [dropped["id"], kept["id"]]


@pytest.mark.parametrize("blocker_status", [BookingStatus.PENDING, BookingStatus.COMPLETED])
async def test_live_statuses_block_the_slot(db, blocker_status):
    service = await add_service(db)
    other = await add_service(db, name="Window Wash")
    booking = await booking_service.create_booking(db, booking_request(service))
    await booking_service.change_status(db, booking["id"], blocker_status, ADMIN)

    result = await check_availability(db, [other["id"]], MONDAY, "10:00")

    assert not result.available
    assert result.message == SLOT_BOOKED


async def test_status_change_racing_a_cancel_and_rebook_keeps_one_live_booking(db, monkeypatch):
    service = await add_service(db)
    first = await booking_service.create_booking(db, booking_request(service))

    read_booking = booking_store.get_raw_booking
    interleaved = []

    async def read_then_interleave(db_, booking_id):
        doc = await read_booking(db_, booking_id)
        if not interleaved:
            interleaved.append(booking_id)
            # Another admin cancels and a customer rebooks the slot meanwhile.
            await booking_service.cancel_booking(db, first["id"], ADMIN)
            await booking_service.create_booking(db, booking_request(service))
        return doc

    monkeypatch.setattr(booking_store, "get_raw_booking", read_then_interleave)

    with pytest.raises(SlotUnavailableError):
        await booking_service.change_status(db, first["id"], BookingStatus.COMPLETED, ADMIN)

    monkeypatch.undo()
    assert await booking_store.count_slot_bookings(db, MONDAY, "10:00") == 1
    assert (await booking_store.get_booking(db, first["id"]))["status"] == "cancelled"


async def test_total_verification_rejects_unknown_services(db, monkeypatch):
    monkeypatch.setattr(settings, "VERIFY_TOTAL_PRICE", True)
    service = await add_service(db)
    request = booking_request(service, total=50.0)
    request.services.append(LineItemIn(service_id="65a0000000000000000000ff", quantity=1))

    with pytest.raises(ServiceNotFoundError):
        await booking_service.create_booking(db, request)

    assert await booking_store.count_slot_bookings(db, MONDAY, "10:00") == 0
