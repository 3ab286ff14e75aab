"""Booking schemas."""
from pydantic import BaseModel, ConfigDict, Field
from datetime import date, time

from app.models.enums import BookingStatus, UserRole


class BookCourtRequest(BaseModel):
    """Schema for a booking request."""

    location_id: int
    court_id: int
    slot_id: int
    booking_date: date


class BookingConfirmation(BaseModel):
    """Schema returned after a booking is admitted."""

    booking_id: int
    location: str
    court: str
    booking_date: date
    start_time: time
    end_time: time
    status: str


class CancellationResult(BaseModel):
    """Schema returned after a booking is cancelled."""

    booking_id: int
    status: str


class UserBooking(BaseModel):
    """A booking as listed for its owner."""

    booking_id: int
    location_name: str
    complex_name: str
    court_name: str
    booking_date: date
    start_time: time
    end_time: time
    status: BookingStatus
    can_cancel: bool

    model_config = ConfigDict(use_enum_values=True)


class RegisterUserRequest(BaseModel):
    """Schema for registering a user by mobile number."""

    mobile_number: str = Field(min_length=10, max_length=10, pattern=r"^\d{10}$")
    role: UserRole = UserRole.USER
