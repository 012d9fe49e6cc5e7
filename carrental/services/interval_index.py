# carrental/services/interval_index.py
"""
Overlap questions over a car's active bookings.

Intervals are half-open, [pickup, return): a return at instant T and a new
pickup at T do not collide, so back-to-back rentals are allowed.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterable, NamedTuple, Optional, Set

from sqlalchemy.ext.asyncio import AsyncSession

from carrental.core.errors import InvalidRange
from carrental.db import crud_bookings

ONE_DAY = timedelta(days=1)


class ConflictCheck(NamedTuple):
    conflict: bool
    # id of one clashing booking, for logs only
    booking_id: Optional[int] = None


def day_start(d: date) -> datetime:
    """Calendar date -> start-of-day instant."""
    return datetime.combine(d, time.min)


def validate_range(start: datetime, end: datetime) -> None:
    if not start < end:
        raise InvalidRange()


def intervals_overlap(
    a_start: datetime,
    a_end: datetime,
    b_start: datetime,
    b_end: datetime,
) -> bool:
    return a_start < b_end and b_start < a_end


def rental_days(start: datetime, end: datetime) -> int:
    """
    Billable days, rounded up: 24h -> 1, 24h + 1s -> 2.
    """
    validate_range(start, end)
    days, remainder = divmod(end - start, ONE_DAY)
    return days + (1 if remainder else 0)


async def find_conflict(
    db: AsyncSession,
    car_id: int,
    start: datetime,
    end: datetime,
) -> ConflictCheck:
    validate_range(start, end)
    booking_id = await crud_bookings.find_overlapping_booking_id(db, car_id, start, end)
    if booking_id is None:
        return ConflictCheck(False)
    return ConflictCheck(True, booking_id)


async def booked_car_ids(
    db: AsyncSession,
    car_ids: Iterable[int],
    start: datetime,
    end: datetime,
) -> Set[int]:
    """Subset of car_ids with an active booking intersecting [start, end)."""
    validate_range(start, end)
    return await crud_bookings.find_booked_car_ids(db, car_ids, start, end)
