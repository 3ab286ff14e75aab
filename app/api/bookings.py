"""Booking endpoints."""
from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.booking import BookCourtRequest, BookingConfirmation, CancellationResult
from app.schemas.common import ApiResponse
from app.services.booking_service import BookingService
from app.services.cancellation_service import CancellationService

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post("", response_model=ApiResponse[BookingConfirmation], status_code=201)
async def book_court(
    request: BookCourtRequest,
    mobile_number: str = Header(..., alias="mobileNumber"),
    db: AsyncSession = Depends(get_db),
):
    """
    Book a court slot.

    Fails with 409 if any active booking overlaps the requested slot.

    Args:
        request: Location, court, slot and date to book
        mobile_number: Mobile number of the booking user
        db: Database session

    Returns:
        Booking confirmation
    """
    confirmation = await BookingService(db).book_court(
        user_mobile=mobile_number,
        location_id=request.location_id,
        court_id=request.court_id,
        slot_id=request.slot_id,
        booking_date=request.booking_date,
    )
    return ApiResponse(success=True, message="Booking confirmed successfully", data=confirmation)


@router.post("/{booking_id}/cancel", response_model=ApiResponse[CancellationResult])
async def cancel_booking(
    booking_id: int,
    mobile_number: str = Header(..., alias="mobileNumber"),
    db: AsyncSession = Depends(get_db),
):
    """
    Cancel a booking.

    Only the user who made the booking may cancel it, and only up to the
    cancellation cutoff before its start.

    Args:
        booking_id: Booking ID
        mobile_number: Mobile number of the requesting user
        db: Database session
    """
    result = await CancellationService(db).cancel_booking(booking_id, mobile_number)
    return ApiResponse(success=True, message="Booking cancelled successfully", data=result)
