"""API schemas."""
from app.schemas.common import ApiResponse
from app.schemas.availability import (
    SlotAvailability,
    CourtAvailability,
    LocationAvailability,
    AvailabilityResponse,
)
from app.schemas.booking import (
    BookCourtRequest,
    BookingConfirmation,
    CancellationResult,
    UserBooking,
    RegisterUserRequest,
)
from app.schemas.admin import (
    RegisterLocationRequest,
    TimeSlotCreate,
    TimeSlotInDB,
    LocationInDB,
    DashboardBooking,
    DashboardCourt,
    DashboardLocation,
    AdminDashboardResponse,
)

__all__ = [
    "ApiResponse",
    "SlotAvailability",
    "CourtAvailability",
    "LocationAvailability",
    "AvailabilityResponse",
    "BookCourtRequest",
    "BookingConfirmation",
    "CancellationResult",
    "UserBooking",
    "RegisterUserRequest",
    "RegisterLocationRequest",
    "TimeSlotCreate",
    "TimeSlotInDB",
    "LocationInDB",
    "DashboardBooking",
    "DashboardCourt",
    "DashboardLocation",
    "AdminDashboardResponse",
]
