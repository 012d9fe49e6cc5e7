# carrental/services/locks.py
import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator


class VehicleLocks:
    """
    Per-vehicle critical sections for the check-then-insert in booking creation.

    One asyncio.Lock per car id, created on demand. Entries are weakly held,
    so a lock disappears once nobody holds or waits on it.
    """

    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, car_id: int) -> asyncio.Lock:
        lock = self._locks.get(car_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[car_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, car_id: int) -> AsyncIterator[None]:
        lock = self._lock_for(car_id)
        async with lock:
            yield

    def is_held(self, car_id: int) -> bool:
        lock = self._locks.get(car_id)
        return lock is not None and lock.locked()


# Shared by all requests served by this process
vehicle_locks = VehicleLocks()


def get_vehicle_locks() -> VehicleLocks:
    return vehicle_locks
