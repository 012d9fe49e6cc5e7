from datetime import datetime
from decimal import Decimal

import pytest

from carrental.core.errors import Unauthorized
from carrental.db.models import Booking, CANCELLED, CONFIRMED, PENDING
from carrental.services.dashboard import month_window, owner_dashboard

NOW = datetime(2024, 3, 15, 12, 0)


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2024, 3, 15, 12), (datetime(2024, 3, 1), datetime(2024, 4, 1))),
        (datetime(2024, 12, 31, 23, 59), (datetime(2024, 12, 1), datetime(2025, 1, 1))),
        (datetime(2024, 1, 1), (datetime(2024, 1, 1), datetime(2024, 2, 1))),
    ],
)
def test_month_window(now, expected):
    assert month_window(now) == expected


@pytest.fixture
def add_booking(db, car, renter):
    day = iter(range(1, 28))

    async def _add(status, created_at, price=100):
        start = next(day)
        booking = Booking(
            renter_id=renter.id,
            owner_id=car.owner_id,
            car_id=car.id,
            pickup_at=datetime(2024, 6, start),
            return_at=datetime(2024, 6, start + 1),
            location="New York",
            price=price,
            status=status,
            created_at=created_at,
        )
        db.add(booking)
        await db.commit()
        return booking

    return _add


async def test_dashboard_counts_and_revenue(db, owner, make_car, car, add_booking, actor):
    await make_car(owner, model="Camry")

    await add_booking(CONFIRMED, datetime(2024, 3, 1, 0, 0), price=200)       # first instant counts
    await add_booking(CONFIRMED, datetime(2024, 3, 31, 23, 59), price=300)
    await add_booking(CONFIRMED, datetime(2024, 2, 29, 23, 59), price=1000)   # previous month
    await add_booking(CONFIRMED, datetime(2024, 4, 1, 0, 0), price=1000)      # next month
    await add_booking(PENDING, datetime(2024, 3, 10), price=1000)
    await add_booking(CANCELLED, datetime(2024, 3, 11), price=1000)

    data = await owner_dashboard(db, actor(owner), now=NOW)

    assert data["total_cars"] == 2
    assert data["total_bookings"] == 6
    assert data["pending_count"] == 1
    assert data["confirmed_count"] == 4
    assert data["monthly_revenue"] == Decimal("500")


async def test_recent_bookings_are_newest_first(db, owner, add_booking, actor):
    created = [
        await add_booking(PENDING, datetime(2024, 3, d)) for d in (2, 9, 5, 7)
    ]

    data = await owner_dashboard(db, actor(owner), now=NOW, recent_limit=3)

    by_day = {b.created_at.day: b.id for b in created}
    assert [b.id for b in data["recent_bookings"]] == [by_day[9], by_day[7], by_day[5]]


async def test_empty_dashboard(db, owner, actor):
    data = await owner_dashboard(db, actor(owner), now=NOW)
    assert data["total_cars"] == 0
    assert data["total_bookings"] == 0
    assert data["recent_bookings"] == []
    assert data["monthly_revenue"] == Decimal("0")


async def test_dashboard_only_sees_own_bookings(db, other_owner, add_booking, actor):
    await add_booking(CONFIRMED, datetime(2024, 3, 3))
    data = await owner_dashboard(db, actor(other_owner), now=NOW)
    assert data["total_bookings"] == 0
    assert data["monthly_revenue"] == Decimal("0")


async def test_renter_has_no_dashboard(db, renter, actor):
    with pytest.raises(Unauthorized):
        await owner_dashboard(db, actor(renter), now=NOW)
