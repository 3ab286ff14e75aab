"""
Booking engine exceptions.

Every failure raised by the services carries a human readable message and a
stable ``code`` so that API clients can branch on the cause. The HTTP layer
maps each kind to a status code through ``status_code``.
"""
from typing import Any, Dict, Optional


class BookingError(Exception):
    """Base exception for all booking engine errors."""

    status_code = 500
    default_message = "Unexpected booking error"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


# Kinds


class NotFoundError(BookingError):
    """A referenced user, location, court, slot or booking does not exist."""

    status_code = 404
    default_message = "Resource not found"


class ConflictError(BookingError):
    """The request collides with existing data."""

    status_code = 409
    default_message = "Request conflicts with existing data"


class ForbiddenError(BookingError):
    """The requester may not act on this resource."""

    status_code = 403
    default_message = "Not allowed"


class InvalidStateError(BookingError):
    """The resource is not in a state that allows the operation."""

    status_code = 409
    default_message = "Operation not allowed in current state"


class ValidationFailed(BookingError):
    """Malformed or out of range input."""

    status_code = 400
    default_message = "Validation failed"


# Not found


class UserNotRegistered(NotFoundError):
    default_message = "Please register first!"


class LocationNotFound(NotFoundError):
    default_message = "Location not found!"


class CourtNotFound(NotFoundError):
    default_message = "Court not found!"


class SlotNotFound(NotFoundError):
    default_message = "Slot not found!"


class BookingNotFound(NotFoundError):
    default_message = "Booking not found!"


# Conflict


class SlotAlreadyBooked(ConflictError):
    default_message = "Selected slot is already booked"


class UserAlreadyExists(ConflictError):
    default_message = "User already exists with this mobile number"


# Forbidden


class BookingCancellationForbidden(ForbiddenError):
    default_message = "You cannot cancel this booking!"


class AdminAccessRequired(ForbiddenError):
    default_message = "Only admin allowed"


# Invalid state


class BookingAlreadyCancelled(InvalidStateError):
    default_message = "Booking already cancelled"


class BookingNotActive(InvalidStateError):
    default_message = "Only active bookings can be cancelled"


class PastBookingNotCancellable(InvalidStateError):
    default_message = "Past booking cannot be cancelled"


class CancellationWindowClosed(InvalidStateError):
    """Raised when cancellation is attempted inside the cutoff window."""

    status_code = 422

    def __init__(self, cutoff_hours: int, lead_minutes: int):
        super().__init__(
            message=f"Booking can only be cancelled {cutoff_hours} hours before start time",
            details={
                "cutoff_hours": cutoff_hours,
                "lead_minutes": lead_minutes,
            },
        )


# Catalog administration


class LocationAlreadyExists(ConflictError):
    default_message = "Location with this name already registered"


class LocationHasBookings(InvalidStateError):
    default_message = "Location has bookings and cannot be deleted"
