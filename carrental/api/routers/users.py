from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from carrental.api.dependencies import get_current_user
from carrental.db.session import get_db
from carrental.schemas.car import CarOut
from carrental.schemas.user import UserOut
from carrental.services import fleet

router = APIRouter()


@router.get("/data")
async def me(current_user=Depends(get_current_user)):
    return {"success": True, "user": UserOut.model_validate(current_user)}


@router.get("/cars")
async def list_cars(db: AsyncSession = Depends(get_db)):
    cars = await fleet.list_public_cars(db)
    return {"success": True, "items": [CarOut.model_validate(c) for c in cars]}


@router.get("/cars/{car_id}")
async def car_detail(car_id: int, db: AsyncSession = Depends(get_db)):
    car = await fleet.get_car(db, car_id)
    return {"success": True, "data": CarOut.model_validate(car)}
