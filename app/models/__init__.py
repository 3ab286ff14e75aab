"""Database models."""
from app.models.enums import BookingStatus, UserRole
from app.models.user import User
from app.models.location import Location
from app.models.court import Court
from app.models.time_slot import TimeSlot
from app.models.booking import Booking

__all__ = ["BookingStatus", "UserRole", "User", "Location", "Court", "TimeSlot", "Booking"]
