from datetime import date
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status

from app import booking_service
from app.availability import check_availability
from app.core.config import settings
from app.core.error_messages import ErrorResponses
from app.core.exceptions import (
    BookingError,
    ServiceNotFoundError,
    SlotUnavailableError,
    TotalPriceMismatchError,
)
from app.database import get_db
from app.middleware.rbac import get_current_admin
from app.models import bookings as booking_store
from app.schemas.bookings import (
    AvailabilityRequest,
    AvailabilityResult,
    BookingCreate,
    BookingOut,
    BookingStatusUpdate,
    CheckoutRequest,
)
from app.schemas.dashboard_schema import DashboardData
from app.utils.email_utils import send_booking_confirmation

booking_router = APIRouter(tags=["Bookings"])


def _confirm(background_tasks: BackgroundTasks, booking: dict):
    if settings.SEND_BOOKING_EMAILS:
        background_tasks.add_task(send_booking_confirmation, booking)


# Create booking
@booking_router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
async def create_booking(data: BookingCreate, background_tasks: BackgroundTasks, db=Depends(get_db)):
    try:
        booking = await booking_service.create_booking(db, data)
    except SlotUnavailableError:
        raise ErrorResponses.SLOT_TAKEN
    except TotalPriceMismatchError:
        raise ErrorResponses.TOTAL_MISMATCH
    except ServiceNotFoundError:
        raise ErrorResponses.SERVICE_NOT_FOUND
    _confirm(background_tasks, booking)
    return booking


# Price a cart from the catalog, check it, then book it
@booking_router.post("/checkout", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
async def checkout(data: CheckoutRequest, background_tasks: BackgroundTasks, db=Depends(get_db)):
    try:
        cart = await booking_service.build_cart(db, data.items)
        booking = await booking_service.checkout(
            db, cart, data.customer, data.booking_date, data.booking_time
        )
    except ServiceNotFoundError:
        raise ErrorResponses.SERVICE_NOT_FOUND
    except SlotUnavailableError as e:
        if e.availability is None:
            raise ErrorResponses.SLOT_TAKEN
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=e.availability.model_dump(by_alias=True, exclude_none=True),
        )
    except BookingError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    _confirm(background_tasks, booking)
    return booking


@booking_router.post(
    "/check-availability", response_model=AvailabilityResult, response_model_exclude_none=True
)
async def check_slot(data: AvailabilityRequest, db=Depends(get_db)):
    return await check_availability(db, data.service_ids, data.day, data.time)


# Admin: filtered listing, newest first
@booking_router.get("", response_model=List[BookingOut])
async def list_bookings(
    customer: Optional[str] = Query(None, description="Substring of the customer name"),
    service: Optional[str] = Query(None, description="Service id in any line item"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db=Depends(get_db),
    admin=Depends(get_current_admin),
):
    return await booking_store.list_bookings(db, customer, service, start_date, end_date)


@booking_router.get("/dashboard", response_model=DashboardData)
async def get_dashboard(db=Depends(get_db), admin=Depends(get_current_admin)):
    return await booking_service.dashboard(db)


@booking_router.get("/{booking_id}", response_model=BookingOut)
async def get_booking(booking_id: str, db=Depends(get_db)):
    booking = await booking_store.get_booking(db, booking_id)
    if not booking:
        raise ErrorResponses.BOOKING_NOT_FOUND
    return booking


# Admin: cancel booking
@booking_router.put("/{booking_id}/cancel", response_model=BookingOut)
async def cancel_booking(booking_id: str, db=Depends(get_db), admin=Depends(get_current_admin)):
    booking = await booking_service.cancel_booking(db, booking_id, admin)
    if not booking:
        raise ErrorResponses.BOOKING_NOT_FOUND
    return booking


# Admin: update booking status
@booking_router.patch("/{booking_id}/status", response_model=BookingOut)
async def update_status(
    booking_id: str, data: BookingStatusUpdate, db=Depends(get_db), admin=Depends(get_current_admin)
):
    try:
        booking = await booking_service.change_status(db, booking_id, data.status, admin)
    except SlotUnavailableError:
        raise ErrorResponses.SLOT_TAKEN
    if not booking:
        raise ErrorResponses.BOOKING_NOT_FOUND
    return booking
