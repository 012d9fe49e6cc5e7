# carrental/services/availability.py
from datetime import datetime
from typing import List, NamedTuple

from sqlalchemy.ext.asyncio import AsyncSession

from carrental.db import crud_cars
from carrental.db.models import Car
from carrental.services.interval_index import booked_car_ids, validate_range


class AvailabilityResult(NamedTuple):
    cars: List[Car]
    # False when nothing is listed in the location at all
    location_has_cars: bool


async def find_available(
    db: AsyncSession,
    location: str,
    start: datetime,
    end: datetime,
) -> AvailabilityResult:
    """
    Cars in `location` (case-insensitive) that the owner has switched on and
    that have no active booking overlapping [start, end).
    """
    validate_range(start, end)

    candidates = await crud_cars.list_cars_in_location(db, location)
    if not candidates:
        return AvailabilityResult([], False)

    booked = await booked_car_ids(db, [c.id for c in candidates], start, end)
    return AvailabilityResult([c for c in candidates if c.id not in booked], True)
