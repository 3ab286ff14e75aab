"""Enumerations shared by the models."""
import enum


class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class BookingStatus(str, enum.Enum):
    BOOKED = "BOOKED"
    CANCELLED = "CANCELLED"
    # Reserved for reporting; the booking engine never transitions into it
    COMPLETED = "COMPLETED"
