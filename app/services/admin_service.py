"""Admin operations: location registration, slot catalog and dashboard."""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import (
    AdminAccessRequired,
    LocationAlreadyExists,
    LocationHasBookings,
    UserNotRegistered,
    ValidationFailed,
)
from app.models.enums import UserRole
from app.models.location import Location
from app.models.time_slot import TimeSlot
from app.models.user import User
from app.repositories.booking_repository import BookingRepository
from app.repositories.catalog_repository import CatalogRepository
from app.repositories.user_repository import UserRepository
from app.schemas.admin import (
    AdminDashboardResponse,
    DashboardBooking,
    DashboardCourt,
    DashboardLocation,
    LocationInDB,
    RegisterLocationRequest,
    TimeSlotCreate,
)

logger = logging.getLogger(__name__)


class AdminService:
    """Service for facility administrators."""

    def __init__(
        self,
        db: AsyncSession,
        catalog: Optional[CatalogRepository] = None,
        bookings: Optional[BookingRepository] = None,
        users: Optional[UserRepository] = None,
    ):
        self.db = db
        self.catalog = catalog or CatalogRepository(db)
        self.bookings = bookings or BookingRepository(db)
        self.users = users or UserRepository(db)

    async def _require_admin(self, mobile_number: str) -> User:
        user = await self.users.find_user_by_mobile(mobile_number)
        if not user:
            raise UserNotRegistered(
                message="User not found, Please Register!",
                details={"mobile_number": mobile_number},
            )
        if user.role != UserRole.ADMIN:
            raise AdminAccessRequired(details={"mobile_number": mobile_number})
        return user

    async def register_location(self, request: RegisterLocationRequest) -> LocationInDB:
        """
        Register a location and create its courts.

        Courts are named Court-1 .. Court-N. An admin may own a limited number
        of locations, each with a bounded number of courts.

        Args:
            request: Location registration data

        Returns:
            The registered location with its court names
        """
        admin = await self._require_admin(request.admin_mobile)

        location_count = await self.catalog.count_locations_for_admin(admin.id)
        if location_count >= settings.MAX_LOCATIONS_PER_ADMIN:
            raise ValidationFailed(
                f"Maximum {settings.MAX_LOCATIONS_PER_ADMIN} locations allowed per admin"
            )

        min_courts = settings.MIN_COURTS_PER_LOCATION
        max_courts = settings.MAX_COURTS_PER_LOCATION
        if not min_courts <= request.number_of_courts <= max_courts:
            raise ValidationFailed(
                f"Courts per location must be between {min_courts} and {max_courts}"
            )

        existing = await self.catalog.list_locations_for_admin(admin.id)
        if any(location.name == request.location_name for location in existing):
            raise LocationAlreadyExists(details={"location_name": request.location_name})

        try:
            location = await self.catalog.add_location_with_courts(
                Location(
                    name=request.location_name,
                    complex_name=request.complex_name,
                    image_url=request.image_url,
                    admin_id=admin.id,
                    admin_mobile=admin.mobile_number,
                ),
                [f"Court-{index + 1}" for index in range(request.number_of_courts)],
            )
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(
                f"Concurrent registration of location {request.location_name} "
                f"for {request.admin_mobile} lost the race"
            )
            raise LocationAlreadyExists(details={"location_name": request.location_name})

        logger.info(
            f"Admin {admin.mobile_number} registered location {location.name} "
            f"with {len(location.courts)} courts"
        )

        return LocationInDB(
            id=location.id,
            name=location.name,
            complex_name=location.complex_name,
            image_url=location.image_url,
            court_names=[court.name for court in location.courts],
        )

    async def delete_location(self, location_id: int, admin_mobile: str) -> None:
        """Delete an admin's location together with its courts."""
        admin = await self._require_admin(admin_mobile)
        location = await self.catalog.get_location(location_id)

        if location.admin_id != admin.id:
            raise AdminAccessRequired(
                message="You do not manage this location",
                details={"location_id": location_id},
            )
        if await self.bookings.count_bookings_for_location(location.id):
            raise LocationHasBookings(details={"location_id": location_id})

        await self.catalog.delete_location(location)
        await self.db.commit()

        logger.info(f"Admin {admin_mobile} deleted location {location_id}")

    async def add_time_slot(self, request: TimeSlotCreate) -> TimeSlot:
        """Add a facility-wide time slot."""
        await self._require_admin(request.admin_mobile)

        slot = await self.catalog.add_time_slot(request.start_time, request.end_time)
        await self.db.commit()

        logger.info(f"Added time slot {slot.start_time}-{slot.end_time}")
        return slot

    async def get_dashboard(self, admin_mobile: str) -> AdminDashboardResponse:
        """Bookings for every court at every location the admin manages."""
        admin = await self._require_admin(admin_mobile)
        locations = await self.catalog.list_locations_for_admin(admin.id)

        location_views = []
        for location in locations:
            court_views = []
            for court in location.courts:
                bookings = await self.bookings.find_bookings_by_court(court.id)
                court_views.append(
                    DashboardCourt(
                        court_id=court.id,
                        court_name=court.name,
                        bookings=[
                            DashboardBooking(
                                booking_id=booking.id,
                                booking_date=booking.booking_date,
                                start_time=booking.time_slot.start_time,
                                end_time=booking.time_slot.end_time,
                                status=booking.status.value,
                                user_mobile=booking.user_mobile,
                            )
                            for booking in bookings
                        ],
                    )
                )
            location_views.append(
                DashboardLocation(
                    location_id=location.id,
                    location_name=location.name,
                    image_url=location.image_url,
                    courts=court_views,
                )
            )

        return AdminDashboardResponse(locations=location_views)
