# app/schemas/dashboard_schema.py
from typing import List

from app.schemas.base import CamelModel
from app.schemas.bookings import BookingOut


class BookingSummary(CamelModel):
    total_bookings: int
    pending: int
    confirmed: int
    cancelled: int
    completed: int
    total_revenue: float


class DashboardData(CamelModel):
    summary: BookingSummary
    active_services: int
    recent_bookings: List[BookingOut]
