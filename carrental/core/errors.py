# carrental/core/errors.py
from fastapi import status


class BookingError(Exception):
    """Base class for domain errors raised by the booking core."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "booking_error"
    default_message: str = "Booking request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRange(BookingError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_range"
    default_message = "Return date must be after pickup date"


class NotFound(BookingError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class VehicleUnavailable(BookingError):
    status_code = status.HTTP_409_CONFLICT
    code = "vehicle_unavailable"
    default_message = "Car not available"


class SlotConflict(BookingError):
    status_code = status.HTTP_409_CONFLICT
    code = "slot_conflict"
    default_message = "Car already booked for these dates"


class Unauthorized(BookingError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "unauthorized"
    default_message = "Unauthorized"


class IllegalTransition(BookingError):
    status_code = status.HTTP_409_CONFLICT
    code = "illegal_transition"

    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"Cannot change booking status from {current} to {target}")
        self.current = current
        self.target = target
