"""Cancellation policy for bookings."""
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import (
    BookingAlreadyCancelled,
    BookingCancellationForbidden,
    BookingNotActive,
    CancellationWindowClosed,
    InvalidStateError,
    PastBookingNotCancellable,
)
from app.core.timezone_utils import facility_now, slot_start, utc_now
from app.models.booking import Booking
from app.models.enums import BookingStatus
from app.repositories.booking_repository import BookingRepository
from app.schemas.booking import CancellationResult

logger = logging.getLogger(__name__)


def check_cancellation_window(start: datetime, now: datetime, cutoff_hours: int) -> None:
    """
    Raise unless a booking starting at ``start`` may still be cancelled at ``now``.

    A lead time of exactly ``cutoff_hours`` is allowed.
    """
    if start < now:
        raise PastBookingNotCancellable()

    lead = start - now
    if lead < timedelta(hours=cutoff_hours):
        raise CancellationWindowClosed(
            cutoff_hours=cutoff_hours,
            lead_minutes=int(lead.total_seconds() // 60),
        )


def can_cancel(booking: Booking, now: datetime, cutoff_hours: Optional[int] = None) -> bool:
    """Whether the owner could cancel ``booking`` at ``now``, without side effects."""
    if booking.status != BookingStatus.BOOKED:
        return False
    if cutoff_hours is None:
        cutoff_hours = settings.CANCELLATION_CUTOFF_HOURS
    try:
        check_cancellation_window(
            slot_start(booking.booking_date, booking.time_slot.start_time),
            now,
            cutoff_hours,
        )
    except InvalidStateError:
        return False
    return True


class CancellationService:
    """Cancels bookings on behalf of their owners."""

    def __init__(
        self,
        db: AsyncSession,
        bookings: Optional[BookingRepository] = None,
        now: Callable[[], datetime] = facility_now,
        cutoff_hours: Optional[int] = None,
    ):
        self.db = db
        self.bookings = bookings or BookingRepository(db)
        self.now = now
        self.cutoff_hours = (
            cutoff_hours if cutoff_hours is not None else settings.CANCELLATION_CUTOFF_HOURS
        )

    async def cancel_booking(self, booking_id: int, requester_mobile: str) -> CancellationResult:
        """
        Cancel a booking if the requester owns it and the cutoff has not passed.

        Args:
            booking_id: Booking to cancel
            requester_mobile: Mobile number of the user asking to cancel

        Returns:
            CancellationResult with the new status

        Raises:
            BookingNotFound: Unknown booking
            BookingCancellationForbidden: Requester is not the booking's user
            BookingAlreadyCancelled: Booking was cancelled before
            PastBookingNotCancellable: Booking start is in the past
            CancellationWindowClosed: Less than the cutoff remains before start
        """
        booking = await self.bookings.get_booking(booking_id, for_update=True)

        if booking.user_mobile != requester_mobile:
            logger.warning(
                f"User {requester_mobile} tried to cancel booking {booking_id} "
                f"owned by someone else"
            )
            raise BookingCancellationForbidden(details={"booking_id": booking_id})

        if booking.status == BookingStatus.CANCELLED:
            raise BookingAlreadyCancelled(details={"booking_id": booking_id})
        if booking.status != BookingStatus.BOOKED:
            raise BookingNotActive(details={"booking_id": booking_id, "status": booking.status.value})

        now = self.now()
        check_cancellation_window(
            slot_start(booking.booking_date, booking.time_slot.start_time),
            now,
            self.cutoff_hours,
        )

        if not await self.bookings.mark_cancelled(booking, cancelled_at=utc_now()):
            # Another request cancelled it between our read and write
            await self.db.rollback()
            raise BookingAlreadyCancelled(details={"booking_id": booking_id})

        await self.db.commit()
        logger.info(f"Cancelled booking {booking_id} for {requester_mobile}")

        return CancellationResult(booking_id=booking_id, status=BookingStatus.CANCELLED.value)
