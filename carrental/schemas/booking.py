# carrental/schemas/booking.py
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from carrental.schemas.car import CarOut


class AvailabilityQuery(BaseModel):
    location: str = Field(..., min_length=1)
    pickup_date: date
    return_date: date


class BookingCreate(BaseModel):
    car_id: int
    pickup_date: date
    return_date: date
    location: str = Field(..., min_length=1)


class StatusChange(BaseModel):
    booking_id: int
    status: str


class BookingOut(BaseModel):
    id: int
    car_id: int
    renter_id: int
    owner_id: int
    pickup_at: datetime
    return_at: datetime
    location: str
    price: float
    status: str
    created_at: datetime

    # Pydantic v2 style – replaces orm_mode=True
    model_config = {"from_attributes": True}


class BookingWithCar(BookingOut):
    car: Optional[CarOut] = None
