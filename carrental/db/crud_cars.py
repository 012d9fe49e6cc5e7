# carrental/db/crud_cars.py
from typing import List

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from carrental.db.models import Car


async def get_car(db: AsyncSession, car_id: int, *, for_update: bool = False) -> Car | None:
    """
    for_update=True takes a row lock on databases that support it
    (ignored by SQLite).
    """
    stmt = select(Car).where(Car.id == car_id)
    if for_update:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    res = await db.execute(stmt)
    return res.scalar_one_or_none()


async def list_cars_for_owner(db: AsyncSession, owner_id: int) -> List[Car]:
    res = await db.execute(
        select(Car)
        .where(Car.owner_id == owner_id)
        .order_by(Car.created_at.desc(), Car.id.desc())
    )
    return list(res.scalars().all())


async def count_cars_for_owner(db: AsyncSession, owner_id: int) -> int:
    res = await db.execute(select(func.count(Car.id)).where(Car.owner_id == owner_id))
    return int(res.scalar_one())


async def list_listed_cars(db: AsyncSession) -> List[Car]:
    """
    Public catalogue: listed (has an owner) and switched on by the owner.
    """
    res = await db.execute(
        select(Car)
        .where(Car.owner_id.isnot(None))
        .where(Car.is_available.is_(True))
        .order_by(Car.created_at.desc(), Car.id.desc())
    )
    return list(res.scalars().all())


async def list_cars_in_location(db: AsyncSession, location: str) -> List[Car]:
    """
    Listed, available cars whose location equals `location`, ignoring case.
    """
    res = await db.execute(
        select(Car)
        .where(func.lower(Car.location) == location.lower())
        .where(Car.owner_id.isnot(None))
        .where(Car.is_available.is_(True))
        .order_by(Car.id)
    )
    return list(res.scalars().all())


async def create_car(db: AsyncSession, **kwargs) -> Car:
    kwargs.setdefault("is_available", True)
    car = Car(**kwargs)
    db.add(car)
    await db.commit()
    await db.refresh(car)
    return car


async def set_availability(db: AsyncSession, car: Car, is_available: bool) -> Car:
    car.is_available = is_available
    db.add(car)
    await db.commit()
    await db.refresh(car)
    return car


async def delist_car(db: AsyncSession, car: Car) -> Car:
    """
    Soft delete: bookings keep pointing at the row.
    """
    car.owner_id = None
    car.is_available = False
    db.add(car)
    await db.commit()
    await db.refresh(car)
    return car
