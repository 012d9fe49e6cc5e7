# carrental/services/fleet.py
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from carrental.core.errors import NotFound, Unauthorized
from carrental.db import crud_cars, crud_users
from carrental.db.models import Car, User, OWNER
from carrental.schemas.car import CarCreate
from carrental.schemas.user import Actor

logger = logging.getLogger("uvicorn.error")


def _require_owner(actor: Actor) -> None:
    if actor.role != OWNER:
        raise Unauthorized()


async def _owned_car(db: AsyncSession, actor: Actor, car_id: int) -> Car:
    _require_owner(actor)
    car = await crud_cars.get_car(db, car_id)
    if car is None:
        raise NotFound("Car not found")
    if car.owner_id != actor.id:
        raise Unauthorized()
    return car


async def become_owner(db: AsyncSession, actor: Actor) -> User:
    try:
        user = await crud_users.update_user_role(db, actor.id, OWNER)
    except ValueError:
        raise NotFound("User not found")
    logger.info("user %s is now an owner", user.id)
    return user


async def add_car(db: AsyncSession, actor: Actor, data: CarCreate) -> Car:
    _require_owner(actor)
    car = await crud_cars.create_car(db, owner_id=actor.id, **data.model_dump())
    logger.info("car %s listed by owner %s in %s", car.id, actor.id, car.location)
    return car


async def list_owner_cars(db: AsyncSession, actor: Actor) -> List[Car]:
    _require_owner(actor)
    return await crud_cars.list_cars_for_owner(db, actor.id)


async def toggle_availability(db: AsyncSession, actor: Actor, car_id: int) -> Car:
    car = await _owned_car(db, actor, car_id)
    car = await crud_cars.set_availability(db, car, not car.is_available)
    logger.info("car %s availability set to %s", car.id, car.is_available)
    return car


async def delist_car(db: AsyncSession, actor: Actor, car_id: int) -> Car:
    car = await _owned_car(db, actor, car_id)
    car = await crud_cars.delist_car(db, car)
    logger.info("car %s delisted by owner %s", car.id, actor.id)
    return car


async def list_public_cars(db: AsyncSession) -> List[Car]:
    return await crud_cars.list_listed_cars(db)


async def get_car(db: AsyncSession, car_id: int) -> Car:
    car = await crud_cars.get_car(db, car_id)
    if car is None:
        raise NotFound("Car not found")
    return car
