import pytest

from carrental.core.errors import InvalidRange
from carrental.db import crud_cars
from carrental.db.models import CANCELLED
from carrental.services import booking_service
from carrental.services.availability import find_available


async def test_location_match_ignores_case(db, car, jan):
    result = await find_available(db, "nEW yORK", jan(1), jan(3))
    assert [c.id for c in result.cars] == [car.id]
    assert result.location_has_cars


async def test_location_match_is_exact(db, car, jan):
    result = await find_available(db, "New York City", jan(1), jan(3))
    assert result.cars == []
    assert not result.location_has_cars


async def test_location_match_does_not_trim(db, make_car, owner, jan):
    padded = await make_car(owner, location=" Chicago ")

    result = await find_available(db, " chicago ", jan(1), jan(3))
    assert [c.id for c in result.cars] == [padded.id]

    result = await find_available(db, "Chicago", jan(1), jan(3))
    assert result.cars == []
    assert not result.location_has_cars


async def test_withdrawn_car_is_hidden_even_without_bookings(db, car, jan):
    await crud_cars.set_availability(db, car, False)

    result = await find_available(db, "New York", jan(1), jan(3))
    assert result.cars == []
    assert not result.location_has_cars


async def test_delisted_car_is_hidden(db, car, jan):
    await crud_cars.delist_car(db, car)
    assert (await find_available(db, "New York", jan(1), jan(3))).cars == []


async def test_booked_car_is_excluded_for_overlapping_dates_only(
    db, locks, car, make_car, owner, renter, actor, jan
):
    spare = await make_car(owner, model="Camry")
    await booking_service.create_booking(db, locks, actor(renter), car.id, jan(1), jan(3), "New York")

    overlapping = await find_available(db, "New York", jan(2), jan(4))
    assert [c.id for c in overlapping.cars] == [spare.id]
    # the location still has listed cars
    assert overlapping.location_has_cars

    back_to_back = await find_available(db, "New York", jan(3), jan(5))
    assert {c.id for c in back_to_back.cars} == {car.id, spare.id}


async def test_all_cars_booked_gives_empty_but_known_location(db, locks, car, renter, actor, jan):
    await booking_service.create_booking(db, locks, actor(renter), car.id, jan(1), jan(3), "New York")

    result = await find_available(db, "new york", jan(1), jan(2))
    assert result.cars == []
    assert result.location_has_cars


async def test_cancelled_booking_does_not_hide_car(db, locks, car, owner, renter, actor, jan):
    booking = await booking_service.create_booking(
        db, locks, actor(renter), car.id, jan(1), jan(3), "New York"
    )
    await booking_service.change_status(db, locks, actor(owner), booking.id, CANCELLED)

    assert [c.id for c in (await find_available(db, "New York", jan(1), jan(3))).cars] == [car.id]


async def test_other_locations_are_ignored(db, car, make_car, owner, jan):
    await make_car(owner, location="Chicago")
    result = await find_available(db, "Chicago", jan(1), jan(2))
    assert len(result.cars) == 1
    assert result.cars[0].location == "Chicago"


async def test_bad_range(db, car, jan):
    with pytest.raises(InvalidRange):
        await find_available(db, "New York", jan(3), jan(1))
