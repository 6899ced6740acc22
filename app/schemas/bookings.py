from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import EmailStr, Field

from app.schemas.base import TIME_PATTERN, CamelModel, ObjectIdStr
from app.schemas.services import ServiceOut


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Customer(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)


class LineItemIn(CamelModel):
    service_id: ObjectIdStr
    quantity: int = Field(1, ge=1)


class BookingCreate(CamelModel):
    services: List[LineItemIn] = Field(..., min_length=1)
    customer: Customer
    booking_date: date
    booking_time: str = Field(..., pattern=TIME_PATTERN)
    total_price: float = Field(..., ge=0)


class CheckoutRequest(CamelModel):
    items: List[LineItemIn] = Field(..., min_length=1)
    customer: Customer
    booking_date: date
    booking_time: str = Field(..., pattern=TIME_PATTERN)


class LineItemOut(CamelModel):
    # None when the referenced service has since been deleted
    service: Optional[ServiceOut] = None
    quantity: int


class BookingOut(CamelModel):
    id: str
    services: List[LineItemOut]
    customer: Customer
    booking_date: date
    booking_time: str
    total_price: float
    status: BookingStatus
    updated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookingStatusUpdate(CamelModel):
    status: BookingStatus


class AvailabilityRequest(CamelModel):
    # Unknown or malformed ids are dropped by the checker, not rejected here.
    service_ids: List[str] = Field(default_factory=list)
    day: date = Field(..., alias="date")
    time: str = Field(..., pattern=TIME_PATTERN)


class AvailabilityResult(CamelModel):
    available: bool
    unavailable_services: Optional[List[str]] = None
    message: str
