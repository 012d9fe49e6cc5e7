# carrental/schemas/dashboard.py
from typing import List
from pydantic import BaseModel

from carrental.schemas.booking import BookingWithCar


class DashboardOut(BaseModel):
    total_cars: int
    total_bookings: int
    pending_count: int
    confirmed_count: int
    recent_bookings: List[BookingWithCar]
    monthly_revenue: float
