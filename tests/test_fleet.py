import pytest

from carrental.core.errors import NotFound, Unauthorized
from carrental.db.models import OWNER
from carrental.schemas.car import CarCreate
from carrental.services import booking_service, fleet

CAR = CarCreate(
    brand="BMW",
    model="X5",
    year=2023,
    category="SUV",
    location="Chicago",
    transmission="Automatic",
    fuel_type="Diesel",
    seating_capacity=5,
    price_per_day=150,
    image="https://images.example.com/x5.webp",
)


async def test_become_owner_then_add_car(db, renter, actor):
    user = await fleet.become_owner(db, actor(renter))
    assert user.role == OWNER

    car = await fleet.add_car(db, actor(user), CAR)
    assert car.owner_id == renter.id
    assert car.is_available is True
    assert [c.id for c in await fleet.list_owner_cars(db, actor(user))] == [car.id]


async def test_renter_cannot_add_car(db, renter, actor):
    with pytest.raises(Unauthorized):
        await fleet.add_car(db, actor(renter), CAR)


async def test_renter_cannot_manage_fleet(db, car, renter, actor):
    with pytest.raises(Unauthorized):
        await fleet.list_owner_cars(db, actor(renter))
    with pytest.raises(Unauthorized):
        await fleet.toggle_availability(db, actor(renter), car.id)
    with pytest.raises(Unauthorized):
        await fleet.delist_car(db, actor(renter), car.id)
    assert car.is_available is True


async def test_toggle_availability(db, car, owner, actor):
    toggled = await fleet.toggle_availability(db, actor(owner), car.id)
    assert toggled.is_available is False
    toggled = await fleet.toggle_availability(db, actor(owner), car.id)
    assert toggled.is_available is True


async def test_toggle_requires_ownership(db, car, other_owner, actor):
    with pytest.raises(Unauthorized):
        await fleet.toggle_availability(db, actor(other_owner), car.id)
    assert car.is_available is True


async def test_toggle_missing_car(db, owner, actor):
    with pytest.raises(NotFound):
        await fleet.toggle_availability(db, actor(owner), 404)


async def test_delist_is_soft_and_keeps_bookings(db, locks, car, owner, renter, actor, jan):
    booking = await booking_service.create_booking(
        db, locks, actor(renter), car.id, jan(1), jan(2), "New York"
    )

    delisted = await fleet.delist_car(db, actor(owner), car.id)
    assert delisted.owner_id is None
    assert delisted.is_available is False

    # the row is still there and so is the booking
    assert (await fleet.get_car(db, car.id)).id == car.id
    renter_view = await booking_service.list_bookings_for_renter(db, actor(renter))
    assert [b.id for b in renter_view] == [booking.id]
    assert await fleet.list_owner_cars(db, actor(owner)) == []


async def test_delist_requires_ownership(db, car, other_owner, actor):
    with pytest.raises(Unauthorized):
        await fleet.delist_car(db, actor(other_owner), car.id)


async def test_public_catalogue(db, car, make_car, owner, actor):
    hidden = await make_car(owner, model="Yaris")
    await fleet.toggle_availability(db, actor(owner), hidden.id)
    gone = await make_car(owner, model="Prius")
    await fleet.delist_car(db, actor(owner), gone.id)

    assert [c.id for c in await fleet.list_public_cars(db)] == [car.id]


async def test_get_missing_car(db):
    with pytest.raises(NotFound):
        await fleet.get_car(db, 404)
