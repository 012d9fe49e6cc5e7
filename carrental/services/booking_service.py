# carrental/services/booking_service.py
import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Set

from sqlalchemy.ext.asyncio import AsyncSession

from carrental.core.config import get_settings
from carrental.core.errors import (
    IllegalTransition,
    NotFound,
    SlotConflict,
    Unauthorized,
    VehicleUnavailable,
)
from carrental.db import crud_bookings, crud_cars
from carrental.db.models import Booking, CANCELLED, CONFIRMED, OWNER, PENDING
from carrental.schemas.user import Actor
from carrental.services.interval_index import find_conflict, rental_days, validate_range
from carrental.services.locks import VehicleLocks

logger = logging.getLogger("uvicorn.error")


_TRANSITIONS: Dict[str, Set[str]] = {
    PENDING: {CONFIRMED, CANCELLED},
    CONFIRMED: {CANCELLED},
    CANCELLED: set(),
}


def allowed_transitions(current: str, allow_cancel_confirmed: bool | None = None) -> Set[str]:
    if allow_cancel_confirmed is None:
        allow_cancel_confirmed = get_settings().ALLOW_CANCEL_CONFIRMED
    allowed = set(_TRANSITIONS.get(current, set()))
    if current == CONFIRMED and not allow_cancel_confirmed:
        allowed.discard(CANCELLED)
    return allowed


def validate_transition(current: str, target: str, allow_cancel_confirmed: bool | None = None) -> None:
    if target not in allowed_transitions(current, allow_cancel_confirmed):
        raise IllegalTransition(current=current, target=target)


def compute_price(price_per_day, start: datetime, end: datetime) -> Decimal:
    return Decimal(rental_days(start, end)) * Decimal(str(price_per_day))


async def create_booking(
    db: AsyncSession,
    locks: VehicleLocks,
    actor: Actor,
    car_id: int,
    pickup_at: datetime,
    return_at: datetime,
    location: str,
) -> Booking:
    """
    Reserve `car_id` for [pickup_at, return_at) on behalf of `actor`.

    The availability re-check, price calculation and insert run while holding
    the car's lock (and a row lock on the car where the database supports it),
    so two overlapping requests for the same car cannot both succeed.
    Nothing is written unless every check passes.
    """
    validate_range(pickup_at, return_at)

    async with locks.hold(car_id):
        car = await crud_cars.get_car(db, car_id, for_update=True)
        if car is None:
            raise NotFound("Car not found")
        if not car.is_available or car.owner_id is None:
            raise VehicleUnavailable()

        check = await find_conflict(db, car_id, pickup_at, return_at)
        if check.conflict:
            logger.info(
                "booking rejected: car %s already booked (booking %s) for %s -> %s",
                car_id, check.booking_id, pickup_at, return_at,
            )
            raise SlotConflict()

        price = compute_price(car.price_per_day, pickup_at, return_at)
        # commit happens inside; anything left uncommitted is rolled back
        # when the request's session closes
        booking = await crud_bookings.create_booking(
            db,
            renter_id=actor.id,
            owner_id=car.owner_id,
            car_id=car_id,
            pickup_at=pickup_at,
            return_at=return_at,
            location=location,
            price=price,
        )

    logger.info(
        "booking %s created: car %s, renter %s, %s -> %s, price %s",
        booking.id, car_id, actor.id, pickup_at, return_at, price,
    )
    return booking


async def change_status(
    db: AsyncSession,
    locks: VehicleLocks,
    actor: Actor,
    booking_id: int,
    new_status: str,
    *,
    allow_cancel_confirmed: bool | None = None,
) -> Booking:
    """
    Move a booking along its lifecycle on behalf of the car's owner.

    Runs under the car's lock, so it is ordered against other status changes
    and against create_booking for the same car. The write itself is a
    compare-and-set on the status read under that lock.
    """
    booking = await crud_bookings.get_booking(db, booking_id)
    if booking is None:
        raise NotFound("Booking not found")

    if booking.owner_id != actor.id:
        raise Unauthorized()

    async with locks.hold(booking.car_id):
        booking = await crud_bookings.get_booking(db, booking_id, for_update=True)
        previous = booking.status
        validate_transition(previous, new_status, allow_cancel_confirmed)

        if not await crud_bookings.transition_status(db, booking, previous, new_status):
            raise IllegalTransition(current=previous, target=new_status)

    logger.info("booking %s status %s -> %s by %s", booking.id, previous, new_status, actor.id)
    return booking


async def list_bookings_for_renter(db: AsyncSession, actor: Actor) -> List[Booking]:
    return await crud_bookings.list_bookings_for_renter(db, actor.id)


async def list_bookings_for_owner(db: AsyncSession, actor: Actor) -> List[Booking]:
    if actor.role != OWNER:
        raise Unauthorized()
    return await crud_bookings.list_bookings_for_owner(db, actor.id)
