"""Tests for the startup seed."""
import pytest
from sqlalchemy import delete, func, select

from app.models import Court, Location, TimeSlot, User, UserRole
from app.services.availability_service import AvailabilityService
from app.services.master_data import ADMIN_MOBILE, DEFAULT_SLOTS, USER_MOBILE, seed_master_data
from helpers import BOOKING_DATE


async def _count(db, model):
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.mark.asyncio
async def test_seed_populates_empty_database(db):
    await seed_master_data(db)

    users = {
        user.mobile_number: user.role
        for user in (await db.execute(select(User))).scalars().all()
    }
    assert users == {ADMIN_MOBILE: UserRole.ADMIN, USER_MOBILE: UserRole.USER}
    assert await _count(db, Location) == 1
    assert await _count(db, Court) == 2
    assert await _count(db, TimeSlot) == len(DEFAULT_SLOTS)

    availability = await AvailabilityService(db).get_availability(BOOKING_DATE)
    assert availability.locations[0].location_name == "Mumbai"
    assert [court.court_name for court in availability.locations[0].courts] == ["Court 1", "Court 2"]


@pytest.mark.asyncio
async def test_seed_is_idempotent(session_factory):
    async with session_factory() as session:
        await seed_master_data(session)
    async with session_factory() as session:
        await seed_master_data(session)

        assert await _count(session, User) == 2
        assert await _count(session, Location) == 1
        assert await _count(session, Court) == 2
        assert await _count(session, TimeSlot) == len(DEFAULT_SLOTS)


@pytest.mark.asyncio
async def test_seed_leaves_existing_catalog_alone(db, catalog):
    await seed_master_data(db)

    assert await _count(db, User) == 3
    assert await _count(db, Location) == 1
    assert await _count(db, TimeSlot) == 3


@pytest.mark.asyncio
async def test_seed_restores_courts_on_existing_location(db):
    await seed_master_data(db)
    location_id = (await db.execute(select(Location.id))).scalar_one()
    await db.execute(delete(Court))
    await db.commit()

    await seed_master_data(db)

    courts = (await db.execute(select(Court).order_by(Court.id))).scalars().all()
    assert [court.name for court in courts] == ["Court 1", "Court 2"]
    assert {court.location_id for court in courts} == {location_id}
    assert await _count(db, Location) == 1
