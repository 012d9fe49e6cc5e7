from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from carrental.api.dependencies import get_current_actor
from carrental.db.session import get_db
from carrental.schemas.booking import (
    AvailabilityQuery,
    BookingCreate,
    BookingOut,
    BookingWithCar,
    StatusChange,
)
from carrental.schemas.car import CarOut
from carrental.schemas.user import Actor
from carrental.services import availability, booking_service
from carrental.services.interval_index import day_start
from carrental.services.locks import VehicleLocks, get_vehicle_locks

router = APIRouter()


@router.post("/check-availability")
async def check_availability(
    body: AvailabilityQuery,
    db: AsyncSession = Depends(get_db),
):
    """
    Public search: cars in a location that are free for the whole date range.
    """
    result = await availability.find_available(
        db,
        body.location,
        day_start(body.pickup_date),
        day_start(body.return_date),
    )
    payload = {
        "success": True,
        "availableCars": [CarOut.model_validate(c) for c in result.cars],
    }
    if not result.location_has_cars:
        payload["message"] = "No cars found in this location"
    return payload


@router.post("/create")
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    locks: VehicleLocks = Depends(get_vehicle_locks),
    actor: Actor = Depends(get_current_actor),
):
    booking = await booking_service.create_booking(
        db,
        locks,
        actor,
        car_id=body.car_id,
        pickup_at=day_start(body.pickup_date),
        return_at=day_start(body.return_date),
        location=body.location,
    )
    return {
        "success": True,
        "message": "Booking created successfully",
        "data": BookingOut.model_validate(booking),
    }


@router.get("/user")
async def renter_bookings(
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    bookings = await booking_service.list_bookings_for_renter(db, actor)
    return {"success": True, "items": [BookingWithCar.model_validate(b) for b in bookings]}


@router.get("/owner")
async def owner_bookings(
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """
    Bookings made on the current owner's cars.
    """
    bookings = await booking_service.list_bookings_for_owner(db, actor)
    return {"success": True, "items": [BookingWithCar.model_validate(b) for b in bookings]}


@router.post("/change-status")
async def change_booking_status(
    body: StatusChange,
    db: AsyncSession = Depends(get_db),
    locks: VehicleLocks = Depends(get_vehicle_locks),
    actor: Actor = Depends(get_current_actor),
):
    booking = await booking_service.change_status(db, locks, actor, body.booking_id, body.status)
    return {
        "success": True,
        "message": f"Booking status changed to {booking.status}",
    }
