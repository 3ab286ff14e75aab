"""Catalog access: locations, courts and time slots."""
from datetime import time
from typing import List

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import CourtNotFound, LocationNotFound, SlotNotFound
from app.models.court import Court
from app.models.location import Location
from app.models.time_slot import TimeSlot


class CatalogRepository:
    """Read access to the catalog plus the admin-side writes that shape it."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_locations_with_courts(self) -> List[Location]:
        result = await self.db.execute(
            select(Location).options(selectinload(Location.courts)).order_by(Location.id)
        )
        return list(result.scalars().all())

    async def list_time_slots(self) -> List[TimeSlot]:
        result = await self.db.execute(
            select(TimeSlot).order_by(TimeSlot.start_time, TimeSlot.id)
        )
        return list(result.scalars().all())

    async def get_location(self, location_id: int) -> Location:
        result = await self.db.execute(
            select(Location)
            .options(selectinload(Location.courts))
            .where(Location.id == location_id)
        )
        location = result.scalar_one_or_none()
        if not location:
            raise LocationNotFound(details={"location_id": location_id})
        return location

    async def get_court(self, court_id: int) -> Court:
        result = await self.db.execute(
            select(Court).options(selectinload(Court.location)).where(Court.id == court_id)
        )
        court = result.scalar_one_or_none()
        if not court:
            raise CourtNotFound(details={"court_id": court_id})
        return court

    async def get_time_slot(self, slot_id: int) -> TimeSlot:
        result = await self.db.execute(select(TimeSlot).where(TimeSlot.id == slot_id))
        slot = result.scalar_one_or_none()
        if not slot:
            raise SlotNotFound(details={"slot_id": slot_id})
        return slot

    async def count_locations_for_admin(self, admin_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Location.id)).where(Location.admin_id == admin_id)
        )
        return result.scalar_one()

    async def list_locations_for_admin(self, admin_id: int) -> List[Location]:
        result = await self.db.execute(
            select(Location)
            .options(selectinload(Location.courts))
            .where(Location.admin_id == admin_id)
            .order_by(Location.id)
        )
        return list(result.scalars().all())

    async def add_location_with_courts(
        self, location: Location, court_names: List[str]
    ) -> Location:
        """Persist a location and the courts it owns in the current transaction."""
        self.db.add(location)
        await self.db.flush()

        for name in court_names:
            self.db.add(Court(location_id=location.id, name=name))
        await self.db.flush()

        return await self.get_location(location.id)

    async def delete_location(self, location: Location) -> None:
        """Delete a location together with the courts it owns."""
        for court in location.courts:
            await self.db.delete(court)
        await self.db.delete(location)
        await self.db.flush()

    async def add_time_slot(self, start_time: time, end_time: time) -> TimeSlot:
        slot = TimeSlot(start_time=start_time, end_time=end_time)
        self.db.add(slot)
        await self.db.flush()
        return slot
