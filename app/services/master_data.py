"""Seed reference data on first start."""
import logging
from datetime import time

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.court import Court
from app.models.enums import UserRole
from app.models.location import Location
from app.models.time_slot import TimeSlot
from app.models.user import User

logger = logging.getLogger(__name__)

ADMIN_MOBILE = "9999999999"
USER_MOBILE = "9876543210"

DEFAULT_SLOTS = [
    (time(18, 0), time(19, 0)),
    (time(19, 0), time(20, 0)),
    (time(20, 0), time(21, 0)),
]


async def _count(db: AsyncSession, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def seed_master_data(db: AsyncSession) -> None:
    """Create default users, a location with two courts and evening slots.

    Each group is only created when its table is empty, so this is safe to
    run on every startup.
    """
    if await _count(db, User) == 0:
        db.add_all([
            User(mobile_number=ADMIN_MOBILE, role=UserRole.ADMIN),
            User(mobile_number=USER_MOBILE, role=UserRole.USER),
        ])
        await db.flush()

    if await _count(db, Location) == 0:
        result = await db.execute(select(User).where(User.mobile_number == ADMIN_MOBILE))
        admin = result.scalar_one_or_none()
        if admin is None:
            logger.warning("Default admin missing, skipping location seed")
        else:
            location = Location(
                name="Mumbai",
                complex_name="Andheri Sports Club",
                image_url="https://c8.alamy.com/comp/D9Y5RA/badminton-court-D9Y5RA.jpg",
                admin_id=admin.id,
                admin_mobile=admin.mobile_number,
            )
            db.add(location)
            await db.flush()

    if await _count(db, Court) == 0:
        result = await db.execute(select(Location).order_by(Location.id).limit(1))
        location = result.scalar_one_or_none()
        if location is None:
            logger.warning("No location to attach default courts to, skipping court seed")
        else:
            db.add_all([
                Court(name="Court 1", location_id=location.id),
                Court(name="Court 2", location_id=location.id),
            ])

    if await _count(db, TimeSlot) == 0:
        db.add_all([TimeSlot(start_time=start, end_time=end) for start, end in DEFAULT_SLOTS])

    await db.commit()
    logger.info("Master data loaded successfully")
