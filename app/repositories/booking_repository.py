"""Reservation store."""
from datetime import date, datetime, time
from typing import List

from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import BookingNotFound
from app.models.booking import Booking
from app.models.court import Court
from app.models.enums import BookingStatus
from app.models.time_slot import TimeSlot


def _with_details(stmt):
    return stmt.options(
        selectinload(Booking.time_slot),
        selectinload(Booking.court).selectinload(Court.location),
    ).execution_options(populate_existing=True)


class BookingRepository:
    """Durable record of bookings and the source of truth for conflicts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_bookings_by_date(
        self, booking_date: date, active_only: bool = False
    ) -> List[Booking]:
        stmt = select(Booking).where(Booking.booking_date == booking_date).execution_options(
            populate_existing=True
        )
        if active_only:
            stmt = stmt.where(Booking.status == BookingStatus.BOOKED)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def exists_overlapping(
        self,
        court_id: int,
        location_id: int,
        booking_date: date,
        start_time: time,
        end_time: time,
    ) -> bool:
        """
        Check for an active booking whose slot overlaps [start_time, end_time).

        Two half-open intervals overlap iff existing.start < end and
        existing.end > start, so touching slots do not conflict.
        """
        result = await self.db.execute(
            select(Booking.id)
            .join(Court, Booking.court_id == Court.id)
            .join(TimeSlot, Booking.slot_id == TimeSlot.id)
            .where(
                Booking.court_id == court_id,
                Court.location_id == location_id,
                Booking.booking_date == booking_date,
                Booking.status == BookingStatus.BOOKED,
                TimeSlot.start_time < end_time,
                TimeSlot.end_time > start_time,
            )
            .limit(1)
        )
        return result.first() is not None

    async def find_bookings_by_user(self, mobile_number: str) -> List[Booking]:
        result = await self.db.execute(
            _with_details(select(Booking))
            .join(TimeSlot, Booking.slot_id == TimeSlot.id)
            .where(Booking.user_mobile == mobile_number)
            .order_by(Booking.booking_date, TimeSlot.start_time, Booking.id)
        )
        return list(result.scalars().all())

    async def find_bookings_by_court(self, court_id: int) -> List[Booking]:
        result = await self.db.execute(
            _with_details(select(Booking))
            .join(TimeSlot, Booking.slot_id == TimeSlot.id)
            .where(Booking.court_id == court_id)
            .order_by(Booking.booking_date, TimeSlot.start_time, Booking.id)
        )
        return list(result.scalars().all())

    async def count_bookings_for_location(self, location_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Booking.id))
            .join(Court, Booking.court_id == Court.id)
            .where(Court.location_id == location_id)
        )
        return result.scalar_one()

    async def get_booking(self, booking_id: int, for_update: bool = False) -> Booking:
        stmt = _with_details(select(Booking)).where(Booking.id == booking_id)
        if for_update:
            stmt = stmt.with_for_update(of=Booking)
        result = await self.db.execute(stmt)
        booking = result.scalar_one_or_none()
        if not booking:
            raise BookingNotFound(details={"booking_id": booking_id})
        return booking

    async def save(self, booking: Booking) -> Booking:
        self.db.add(booking)
        await self.db.flush()
        return booking

    async def mark_cancelled(self, booking: Booking, cancelled_at: datetime) -> bool:
        """
        Flip an active booking to CANCELLED.

        The update only matches rows still BOOKED, so of two concurrent
        cancellations exactly one sees a row count of 1.
        """
        result = await self.db.execute(
            update(Booking)
            .where(Booking.id == booking.id, Booking.status == BookingStatus.BOOKED)
            .values(status=BookingStatus.CANCELLED, cancelled_at=cancelled_at)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        await self.db.refresh(booking, ["status", "cancelled_at"])
        return True
