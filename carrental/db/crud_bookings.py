# carrental/db/crud_bookings.py

from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Set

from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from carrental.db.models import Booking, ACTIVE_STATUSES, CONFIRMED, PENDING


def _overlapping(start: datetime, end: datetime):
    """
    WHERE clauses for active bookings intersecting [start, end).
    """
    return (
        Booking.status.in_(ACTIVE_STATUSES),
        Booking.pickup_at < end,
        Booking.return_at > start,
    )


async def find_overlapping_booking_id(
    db: AsyncSession,
    car_id: int,
    start: datetime,
    end: datetime,
) -> Optional[int]:
    stmt = (
        select(Booking.id)
        .where(Booking.car_id == car_id, *_overlapping(start, end))
        .order_by(Booking.pickup_at)
        .limit(1)
    )
    res = await db.execute(stmt)
    return res.scalar_one_or_none()


async def find_booked_car_ids(
    db: AsyncSession,
    car_ids: Iterable[int],
    start: datetime,
    end: datetime,
) -> Set[int]:
    ids = list(car_ids)
    if not ids:
        return set()
    stmt = (
        select(Booking.car_id)
        .where(Booking.car_id.in_(ids), *_overlapping(start, end))
        .distinct()
    )
    res = await db.execute(stmt)
    return set(res.scalars().all())


async def create_booking(
    db: AsyncSession,
    *,
    renter_id: int,
    owner_id: int,
    car_id: int,
    pickup_at: datetime,
    return_at: datetime,
    location: str,
    price: Decimal,
) -> Booking:
    booking = Booking(
        renter_id=renter_id,
        owner_id=owner_id,
        car_id=car_id,
        pickup_at=pickup_at,
        return_at=return_at,
        location=location,
        price=price,
        status=PENDING,
    )
    db.add(booking)
    await db.commit()
    await db.refresh(booking)
    return booking


async def get_booking(
    db: AsyncSession,
    booking_id: int,
    *,
    for_update: bool = False,
) -> Booking | None:
    stmt = select(Booking).where(Booking.id == booking_id)
    if for_update:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    res = await db.execute(stmt)
    return res.scalar_one_or_none()


async def transition_status(
    db: AsyncSession,
    booking: Booking,
    current: str,
    new: str,
) -> bool:
    """
    Compare-and-set: only moves the booking to `new` if it is still in
    `current`. Returns False when another writer got there first.
    """
    res = await db.execute(
        update(Booking)
        .where(Booking.id == booking.id, Booking.status == current)
        .values(status=new)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    if res.rowcount != 1:
        return False
    await db.refresh(booking)
    return True


async def list_bookings_for_renter(db: AsyncSession, renter_id: int) -> List[Booking]:
    stmt = (
        select(Booking)
        .options(selectinload(Booking.car))
        .where(Booking.renter_id == renter_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def list_bookings_for_owner(
    db: AsyncSession,
    owner_id: int,
    limit: int | None = None,
) -> List[Booking]:
    """
    Bookings taken on the owner's cars, newest first.
    """
    stmt = (
        select(Booking)
        .options(selectinload(Booking.car), selectinload(Booking.renter))
        .where(Booking.owner_id == owner_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def count_by_status(db: AsyncSession, owner_id: int) -> Dict[str, int]:
    stmt = (
        select(Booking.status, func.count(Booking.id).label("count"))
        .where(Booking.owner_id == owner_id)
        .group_by(Booking.status)
    )
    res = await db.execute(stmt)
    return {r.status: int(r.count) for r in res.all()}


async def confirmed_revenue_between(
    db: AsyncSession,
    owner_id: int,
    start: datetime,
    end: datetime,
) -> Decimal:
    """
    Sum of prices of confirmed bookings created in [start, end).
    """
    stmt = (
        select(func.coalesce(func.sum(Booking.price), 0))
        .where(Booking.owner_id == owner_id)
        .where(Booking.status == CONFIRMED)
        .where(Booking.created_at >= start)
        .where(Booking.created_at < end)
    )
    res = await db.execute(stmt)
    return Decimal(str(res.scalar_one()))
