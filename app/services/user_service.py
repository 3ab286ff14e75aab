"""User registration and booking listings."""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import UserAlreadyExists
from app.core.timezone_utils import facility_now
from app.models.enums import UserRole
from app.models.user import User
from app.repositories.booking_repository import BookingRepository
from app.repositories.user_repository import UserRepository
from app.schemas.booking import UserBooking
from app.services.cancellation_service import can_cancel

logger = logging.getLogger(__name__)


class UserService:
    """Service for user-facing reads and registration."""

    def __init__(
        self,
        db: AsyncSession,
        users: Optional[UserRepository] = None,
        bookings: Optional[BookingRepository] = None,
        now: Callable[[], datetime] = facility_now,
    ):
        self.db = db
        self.users = users or UserRepository(db)
        self.bookings = bookings or BookingRepository(db)
        self.now = now

    async def register_user(self, mobile_number: str, role: UserRole = UserRole.USER) -> User:
        """Register a user by mobile number."""
        if await self.users.find_user_by_mobile(mobile_number):
            raise UserAlreadyExists(details={"mobile_number": mobile_number})

        try:
            user = await self.users.add(User(mobile_number=mobile_number, role=role, active=True))
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Concurrent registration of {mobile_number} lost the race")
            raise UserAlreadyExists(details={"mobile_number": mobile_number})

        logger.info(f"Registered {role.value} {mobile_number}")
        return user

    async def list_user_bookings(self, mobile_number: str) -> List[UserBooking]:
        """
        List every booking made by a user, flagging which are still cancellable.

        Args:
            mobile_number: Mobile number of the user

        Returns:
            Bookings ordered by date and start time; empty if none
        """
        bookings = await self.bookings.find_bookings_by_user(mobile_number)
        now = self.now()

        return [
            UserBooking(
                booking_id=booking.id,
                location_name=booking.court.location.name,
                complex_name=booking.court.location.complex_name,
                court_name=booking.court.name,
                booking_date=booking.booking_date,
                start_time=booking.time_slot.start_time,
                end_time=booking.time_slot.end_time,
                status=booking.status,
                can_cancel=can_cancel(booking, now),
            )
            for booking in bookings
        ]
