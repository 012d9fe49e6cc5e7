# carrental/db/crud_users.py

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from carrental.db.models import User, RENTER


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    res = await db.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    name: str,
    email: str,
    role: str = RENTER,
    image: Optional[str] = None,
) -> User:
    """
    Register an identity known to the identity provider.
    No credentials are stored here.
    """
    user = User(name=name, email=email, role=role, image=image)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def update_user_role(db: AsyncSession, user_id: int, role: str) -> User:
    res = await db.execute(select(User).where(User.id == user_id))
    user = res.scalar_one_or_none()
    if not user:
        raise ValueError("User not found")

    user.role = role
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
