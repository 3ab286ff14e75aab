"""Constants and small builders shared by the tests."""
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import List

from app.models import Booking, BookingStatus, TimeSlot

BOOKING_DATE = date(2025, 6, 1)

ADMIN_MOBILE = "9999999999"
USER_A = "9876543210"
USER_B = "9123456789"


@dataclass
class Catalog:
    location_id: int
    court_ids: List[int]
    # 18:00-19:00, 19:00-20:00, 18:30-19:30
    slot_ids: List[int]


def at(hour: int, minute: int = 0, day: date = BOOKING_DATE) -> datetime:
    return datetime.combine(day, time(hour, minute))


def fixed_clock(now: datetime):
    return lambda: now


def transient_booking(
    start: time,
    end: time,
    booking_date: date = BOOKING_DATE,
    status: BookingStatus = BookingStatus.BOOKED,
) -> Booking:
    """An unsaved booking with its slot attached, for pure policy checks."""
    booking = Booking(booking_date=booking_date, user_mobile=USER_A, status=status)
    booking.time_slot = TimeSlot(start_time=start, end_time=end)
    return booking
