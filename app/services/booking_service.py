"""Booking admission service."""
import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.booking_lock import CourtDateLocks, court_date_locks
from app.core.exceptions import CourtNotFound, SlotAlreadyBooked, UserNotRegistered
from app.models.booking import Booking
from app.models.enums import BookingStatus
from app.repositories.booking_repository import BookingRepository
from app.repositories.catalog_repository import CatalogRepository
from app.repositories.user_repository import UserRepository
from app.schemas.booking import BookingConfirmation

logger = logging.getLogger(__name__)


class BookingService:
    """Admits new bookings under the no-double-booking invariant."""

    def __init__(
        self,
        db: AsyncSession,
        catalog: Optional[CatalogRepository] = None,
        bookings: Optional[BookingRepository] = None,
        users: Optional[UserRepository] = None,
        locks: Optional[CourtDateLocks] = None,
    ):
        self.db = db
        self.catalog = catalog or CatalogRepository(db)
        self.bookings = bookings or BookingRepository(db)
        self.users = users or UserRepository(db)
        self.locks = locks if locks is not None else court_date_locks

    async def book_court(
        self,
        user_mobile: str,
        location_id: int,
        court_id: int,
        slot_id: int,
        booking_date: date,
    ) -> BookingConfirmation:
        """
        Reserve a court and slot on a date for a user.

        The overlap check, insert and commit run while holding the
        (court, date) admission lock. A unique index on active bookings
        rejects any writer that slipped past the check from another process.

        Args:
            user_mobile: Mobile number of the booking user
            location_id: Location the court belongs to
            court_id: Court to reserve
            slot_id: Time slot to reserve
            booking_date: Calendar date of the booking

        Returns:
            BookingConfirmation for the admitted booking

        Raises:
            UserNotRegistered: Unknown or inactive user
            LocationNotFound, CourtNotFound, SlotNotFound: Invalid references
            SlotAlreadyBooked: An active booking overlaps the requested slot
        """
        user = await self.users.find_user_by_mobile(user_mobile)
        if not user or not user.active:
            raise UserNotRegistered(details={"mobile_number": user_mobile})

        location = await self.catalog.get_location(location_id)
        court = await self.catalog.get_court(court_id)
        if court.location_id != location.id:
            raise CourtNotFound(
                message=f"Court {court_id} not found at location {location.name}",
                details={"court_id": court_id, "location_id": location_id},
            )
        slot = await self.catalog.get_time_slot(slot_id)

        conflict_details = {
            "court_id": court.id,
            "slot_id": slot.id,
            "booking_date": booking_date.isoformat(),
        }

        async with self.locks.hold(court.id, booking_date):
            # The slot's own end time bounds the candidate interval
            overlapping = await self.bookings.exists_overlapping(
                court_id=court.id,
                location_id=location.id,
                booking_date=booking_date,
                start_time=slot.start_time,
                end_time=slot.end_time,
            )
            if overlapping:
                logger.warning(
                    f"Rejected booking of court {court.id} slot {slot.id} on {booking_date}: "
                    f"slot already booked"
                )
                raise SlotAlreadyBooked(details=conflict_details)

            booking = Booking(
                user_mobile=user.mobile_number,
                court_id=court.id,
                slot_id=slot.id,
                booking_date=booking_date,
                status=BookingStatus.BOOKED,
            )
            try:
                await self.bookings.save(booking)
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                logger.warning(
                    f"Concurrent booking of court {conflict_details['court_id']} "
                    f"slot {conflict_details['slot_id']} on {booking_date} lost the race"
                )
                raise SlotAlreadyBooked(details=conflict_details)

        logger.info(
            f"Booked court {court.name} ({court.id}) at {location.name} on {booking_date} "
            f"{slot.start_time}-{slot.end_time} for {user_mobile} (booking {booking.id})"
        )

        return BookingConfirmation(
            booking_id=booking.id,
            location=location.name,
            court=court.name,
            booking_date=booking_date,
            start_time=slot.start_time,
            end_time=slot.end_time,
            status=booking.status.value,
        )
