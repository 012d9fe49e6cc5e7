from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from carrental.core.security import create_access_token
from carrental.db import crud_cars, crud_users
from carrental.db.base import Base
from carrental.db.models import OWNER, RENTER
from carrental.db.session import get_db
from carrental.main import app
from carrental.schemas.user import Actor
from carrental.services.locks import VehicleLocks, get_vehicle_locks


@pytest.fixture
async def engine(tmp_path):
    """
    A fresh SQLite file per test, so separate sessions really are separate
    connections (needed by the concurrency tests).
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'carrental_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def locks():
    return VehicleLocks()


@pytest.fixture
async def client(session_factory, locks):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_vehicle_locks] = lambda: locks
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def owner(db):
    return await crud_users.create_user(db, name="Olivia Owner", email="olivia@example.com", role=OWNER)


@pytest.fixture
async def other_owner(db):
    return await crud_users.create_user(db, name="Oscar Owner", email="oscar@example.com", role=OWNER)


@pytest.fixture
async def renter(db):
    return await crud_users.create_user(db, name="Rita Renter", email="rita@example.com", role=RENTER)


@pytest.fixture
async def second_renter(db):
    return await crud_users.create_user(db, name="Ray Renter", email="ray@example.com", role=RENTER)


@pytest.fixture
def make_car(db):
    async def _make(owner, **overrides):
        data = {
            "brand": "Toyota",
            "model": "Corolla",
            "year": 2022,
            "category": "Sedan",
            "location": "New York",
            "transmission": "Automatic",
            "fuel_type": "Petrol",
            "seating_capacity": 5,
            "price_per_day": 100,
            "image": "https://images.example.com/corolla.webp",
            "description": "Clean and comfortable",
        }
        data.update(overrides)
        return await crud_cars.create_car(db, owner_id=owner.id if owner else None, **data)

    return _make


@pytest.fixture
async def car(make_car, owner):
    return await make_car(owner)


@pytest.fixture
def actor():
    def _actor(user) -> Actor:
        return Actor(id=user.id, role=user.role)

    return _actor


@pytest.fixture
def auth_headers():
    def _headers(user) -> dict:
        token = create_access_token({"user_id": user.id, "role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def jan():
    """jan(d) -> midnight of 2024-01-d."""
    def _at(day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
        return datetime(2024, 1, day, hour, minute, second)

    return _at
