# carrental/db/models.py

from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Text,
    ForeignKey,
    Numeric,
    Boolean,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import relationship

from carrental.db.base import Base


# Booking status values
PENDING = "pending"
CONFIRMED = "confirmed"
CANCELLED = "cancelled"

BOOKING_STATUSES = (PENDING, CONFIRMED, CANCELLED)

# Bookings in these states take part in conflict checks
ACTIVE_STATUSES = (PENDING, CONFIRMED)

# User roles
RENTER = "renter"
OWNER = "owner"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)

    # "renter" | "owner"
    role = Column(String(20), nullable=False, default=RENTER)
    image = Column(String(512), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    cars = relationship(
        "Car",
        back_populates="owner",
        foreign_keys="Car.owner_id",
    )


class Car(Base):
    __tablename__ = "cars"

    id = Column(Integer, primary_key=True, index=True)

    # NULL once the car is delisted
    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    brand = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    category = Column(String(50), nullable=False)

    # matched case-insensitively by the availability search
    location = Column(String(255), nullable=False, index=True)

    transmission = Column(String(50), nullable=False)
    fuel_type = Column(String(50), nullable=False)
    seating_capacity = Column(Integer, nullable=False)
    price_per_day = Column(Numeric(10, 2), nullable=False)

    image = Column(String(512), nullable=True)
    description = Column(Text, nullable=True)

    # owner toggle, independent of bookings
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    owner = relationship("User", back_populates="cars", foreign_keys=[owner_id])

    bookings = relationship("Booking", back_populates="car")

    __table_args__ = (
        CheckConstraint("price_per_day > 0", name="check_car_price_positive"),
    )


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)

    renter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # copy of cars.owner_id taken when the booking was made
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    car_id = Column(Integer, ForeignKey("cars.id"), nullable=False)

    pickup_at = Column(DateTime, nullable=False)
    return_at = Column(DateTime, nullable=False)

    location = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    status = Column(String(20), nullable=False, default=PENDING)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    car = relationship("Car", back_populates="bookings")
    renter = relationship("User", foreign_keys=[renter_id])

    __table_args__ = (
        Index("ix_bookings_car_window", "car_id", "status", "pickup_at", "return_at"),
        CheckConstraint("return_at > pickup_at", name="check_booking_range"),
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled')",
            name="check_booking_status",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, car={self.car_id}, "
            f"{self.pickup_at}->{self.return_at}, status={self.status})>"
        )
