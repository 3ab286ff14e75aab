"""Shared fixtures: a fresh SQLite database and a small catalog per test."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./court_booking_test.db")
os.environ.setdefault("SEED_MASTER_DATA", "false")
os.environ.setdefault("DEBUG", "false")

from datetime import time

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.database import init_models
from app.models import Court, Location, TimeSlot, User, UserRole
from helpers import ADMIN_MOBILE, USER_A, USER_B, Catalog


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def catalog(session_factory) -> Catalog:
    async with session_factory() as session:
        admin = User(mobile_number=ADMIN_MOBILE, role=UserRole.ADMIN)
        session.add_all([
            admin,
            User(mobile_number=USER_A, role=UserRole.USER),
            User(mobile_number=USER_B, role=UserRole.USER),
        ])
        await session.flush()

        location = Location(
            name="Court Club",
            complex_name="Court Club Complex",
            admin_id=admin.id,
            admin_mobile=admin.mobile_number,
        )
        session.add(location)
        await session.flush()

        courts = [
            Court(name="Court-1", location_id=location.id),
            Court(name="Court-2", location_id=location.id),
        ]
        slots = [
            TimeSlot(start_time=time(18, 0), end_time=time(19, 0)),
            TimeSlot(start_time=time(19, 0), end_time=time(20, 0)),
            TimeSlot(start_time=time(18, 30), end_time=time(19, 30)),
        ]
        session.add_all(courts + slots)
        await session.commit()

        return Catalog(
            location_id=location.id,
            court_ids=[court.id for court in courts],
            slot_ids=[slot.id for slot in slots],
        )
