"""Availability service computing court and slot status for a date."""
import logging
from datetime import date
from typing import Optional, Set, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.booking_repository import BookingRepository
from app.repositories.catalog_repository import CatalogRepository
from app.schemas.availability import (
    AvailabilityResponse,
    CourtAvailability,
    LocationAvailability,
    SlotAvailability,
)

logger = logging.getLogger(__name__)

AVAILABLE = "AVAILABLE"
BOOKED = "BOOKED"


class AvailabilityService:
    """Service deriving availability from the catalog and the reservation store."""

    def __init__(
        self,
        db: AsyncSession,
        catalog: Optional[CatalogRepository] = None,
        bookings: Optional[BookingRepository] = None,
    ):
        self.catalog = catalog or CatalogRepository(db)
        self.bookings = bookings or BookingRepository(db)

    async def get_availability(self, target_date: date) -> AvailabilityResponse:
        """
        Get the status of every court and slot on a date.

        Past dates are allowed and show historical occupancy. Only active
        bookings occupy a slot; a cancelled booking frees it again.

        Args:
            target_date: Date to compute availability for

        Returns:
            AvailabilityResponse nested location -> court -> slot
        """
        locations = await self.catalog.list_locations_with_courts()
        slots = await self.catalog.list_time_slots()
        bookings = await self.bookings.find_bookings_by_date(target_date, active_only=True)

        occupied: Set[Tuple[int, int]] = {
            (booking.court_id, booking.slot_id) for booking in bookings
        }

        logger.debug(
            f"Computing availability for {target_date}: {len(locations)} locations, "
            f"{len(slots)} slots, {len(occupied)} occupied"
        )

        location_views = []
        for location in locations:
            court_views = []
            for court in location.courts:
                slot_views = [
                    SlotAvailability(
                        slot_id=slot.id,
                        start_time=slot.start_time,
                        end_time=slot.end_time,
                        status=BOOKED if (court.id, slot.id) in occupied else AVAILABLE,
                    )
                    for slot in slots
                ]
                court_views.append(
                    CourtAvailability(
                        court_id=court.id,
                        court_name=court.name,
                        slots=slot_views,
                    )
                )
            location_views.append(
                LocationAvailability(
                    location_id=location.id,
                    location_name=location.name,
                    courts=court_views,
                )
            )

        return AvailabilityResponse(date=target_date, locations=location_views)
