# scripts/seed.py
import asyncio
import random

from carrental.core.security import create_access_token
from carrental.db.base import Base
from carrental.db.session import AsyncSessionLocal, engine
from carrental.db.crud_users import create_user, get_user_by_email
from carrental.db.crud_cars import create_car
from carrental.db.models import OWNER, RENTER


async def _user(db, name, email, role):
    user = await get_user_by_email(db, email)
    if not user:
        user = await create_user(db, name=name, email=email, role=role)
    return user


async def seed():
    # create tables (if migrations not run)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        owners = [
            await _user(db, f"Owner {i}", f"owner{i}@example.com", OWNER)
            for i in range(2)
        ]
        renter = await _user(db, "Renter", "renter@example.com", RENTER)

        locations = ["New York", "Los Angeles", "Chicago", "Houston"]
        models = [("Toyota", "Corolla", "Sedan"), ("BMW", "X5", "SUV"), ("Ford", "Mustang", "Coupe")]
        for i in range(12):
            brand, model, category = random.choice(models)
            await create_car(
                db,
                owner_id=random.choice(owners).id,
                brand=brand,
                model=model,
                year=2018 + i % 6,
                category=category,
                location=random.choice(locations),
                transmission=random.choice(["Automatic", "Manual"]),
                fuel_type=random.choice(["Petrol", "Diesel", "Electric"]),
                seating_capacity=random.choice([4, 5, 7]),
                price_per_day=60 + i * 10,
                image="https://images.example.com/cars/sample.webp",
                description="Well kept and ready to go",
            )

        for user in [*owners, renter]:
            token = create_access_token({"user_id": user.id, "role": user.role})
            print(f"{user.email} ({user.role}): {token}")
        print("Seed complete")


if __name__ == "__main__":
    asyncio.run(seed())
