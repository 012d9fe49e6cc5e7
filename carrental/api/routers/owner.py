from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from carrental.api.dependencies import get_current_actor
from carrental.db.session import get_db
from carrental.schemas.car import CarCreate, CarIdBody, CarOut
from carrental.schemas.dashboard import DashboardOut
from carrental.schemas.user import Actor, UserOut
from carrental.services import dashboard, fleet

router = APIRouter()


@router.post("/change-role")
async def change_role_to_owner(
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    user = await fleet.become_owner(db, actor)
    return {"success": True, "message": "Now you can list cars", "data": UserOut.model_validate(user)}


@router.post("/add-car")
async def add_car(
    body: CarCreate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """
    List a new car for the current owner. The image is an already-hosted URL.
    """
    car = await fleet.add_car(db, actor, body)
    return {"success": True, "message": "Car Added", "data": CarOut.model_validate(car)}


@router.get("/cars")
async def owner_cars(
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    cars = await fleet.list_owner_cars(db, actor)
    return {"success": True, "items": [CarOut.model_validate(c) for c in cars]}


@router.post("/toggle-car")
async def toggle_car_availability(
    body: CarIdBody,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    car = await fleet.toggle_availability(db, actor, body.car_id)
    return {
        "success": True,
        "message": f"Car is now {'Available' if car.is_available else 'Unavailable'}",
        "is_available": car.is_available,
    }


@router.post("/delete-car")
async def delete_car(
    body: CarIdBody,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    """
    Soft delete: the car is delisted but past bookings keep their reference.
    """
    await fleet.delist_car(db, actor, body.car_id)
    return {"success": True, "message": "Car Removed"}


@router.get("/dashboard")
async def owner_dashboard(
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    data = await dashboard.owner_dashboard(db, actor)
    return {"success": True, "dashboardData": DashboardOut.model_validate(data)}
