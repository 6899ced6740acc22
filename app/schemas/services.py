# app/schemas/services.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from app.schemas.base import TIME_PATTERN, WEEKDAYS, CamelModel

DEFAULT_IMAGE = "https://via.placeholder.com/400x300?text=Service+Image"


class WorkingHours(CamelModel):
    start: str = Field("09:00", pattern=TIME_PATTERN)
    end: str = Field("17:00", pattern=TIME_PATTERN)

    @model_validator(mode="after")
    def start_before_end(self):
        if self.start > self.end:
            raise ValueError("workingHours.start must not be after workingHours.end")
        return self


class Availability(CamelModel):
    working_days: List[str] = Field(default_factory=lambda: list(WEEKDAYS[:5]))
    working_hours: WorkingHours = Field(default_factory=WorkingHours)

    @field_validator("working_days")
    @classmethod
    def normalize_days(cls, days):
        normalized = []
        for day in days:
            name = day.strip().capitalize()
            if name not in WEEKDAYS:
                raise ValueError(f"{day!r} is not a weekday name")
            if name not in normalized:
                normalized.append(name)
        return normalized


def _strip_name(cls, value):
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("name must not be blank")
    return value


class ServiceCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: str
    price: float = Field(..., ge=0)
    duration: int = Field(..., ge=15, description="Duration in minutes")
    image: str = DEFAULT_IMAGE
    availability: Availability = Field(default_factory=Availability)
    is_active: bool = True

    strip_name = field_validator("name")(_strip_name)


class ServiceUpdate(CamelModel):
    """Partial update; only fields present in the request are applied."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    duration: Optional[int] = Field(None, ge=15)
    image: Optional[str] = None
    availability: Optional[Availability] = None
    is_active: Optional[bool] = None

    strip_name = field_validator("name")(_strip_name)

    def changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True, exclude_none=True)
        # availability is replaced as a whole, defaults included
        if self.availability is not None:
            changes["availability"] = self.availability.model_dump()
        return changes


class ServiceOut(CamelModel):
    id: str
    name: str
    description: str
    price: float
    duration: int
    image: str = DEFAULT_IMAGE
    availability: Availability
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
