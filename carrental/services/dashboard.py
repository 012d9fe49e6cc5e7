# carrental/services/dashboard.py
from datetime import datetime
from typing import Any, Dict, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from carrental.core.config import get_settings
from carrental.core.errors import Unauthorized
from carrental.db import crud_bookings, crud_cars
from carrental.db.models import CONFIRMED, OWNER, PENDING
from carrental.schemas.user import Actor


def month_window(now: datetime) -> Tuple[datetime, datetime]:
    """[first of this month, first of next month) around `now`."""
    first = datetime(now.year, now.month, 1)
    if now.month == 12:
        return first, datetime(now.year + 1, 1, 1)
    return first, datetime(now.year, now.month + 1, 1)


async def owner_dashboard(
    db: AsyncSession,
    actor: Actor,
    now: datetime | None = None,
    recent_limit: int | None = None,
) -> Dict[str, Any]:
    """
    Read-only summary of an owner's fleet and bookings, rebuilt on every call.
    """
    if actor.role != OWNER:
        raise Unauthorized()

    now = now or datetime.utcnow()
    if recent_limit is None:
        recent_limit = get_settings().DASHBOARD_RECENT_BOOKINGS

    counts = await crud_bookings.count_by_status(db, actor.id)
    month_start, month_end = month_window(now)

    return {
        "total_cars": await crud_cars.count_cars_for_owner(db, actor.id),
        "total_bookings": sum(counts.values()),
        "pending_count": counts.get(PENDING, 0),
        "confirmed_count": counts.get(CONFIRMED, 0),
        "recent_bookings": await crud_bookings.list_bookings_for_owner(
            db, actor.id, limit=recent_limit
        ),
        "monthly_revenue": await crud_bookings.confirmed_revenue_between(
            db, actor.id, month_start, month_end
        ),
    }
