# carrental/schemas/car.py
from typing import Optional
from pydantic import BaseModel, Field


class CarCreate(BaseModel):
    brand: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    year: int = Field(..., ge=1900)
    category: str
    location: str = Field(..., min_length=1)
    transmission: str
    fuel_type: str
    seating_capacity: int = Field(..., gt=0)
    price_per_day: float = Field(..., gt=0)
    image: Optional[str] = None
    description: str = ""


class CarOut(BaseModel):
    id: int
    owner_id: Optional[int] = None
    brand: str
    model: str
    year: int
    category: str
    location: str
    transmission: str
    fuel_type: str
    seating_capacity: int
    price_per_day: float
    image: Optional[str] = None
    description: Optional[str] = None
    is_available: bool

    model_config = {"from_attributes": True}


class CarIdBody(BaseModel):
    car_id: int
