"""Tests for the cancellation policy."""
from datetime import date, time

import pytest
from sqlalchemy import select

from app.core.exceptions import (
    BookingAlreadyCancelled,
    BookingCancellationForbidden,
    BookingNotActive,
    BookingNotFound,
    CancellationWindowClosed,
    InvalidStateError,
    PastBookingNotCancellable,
)
from app.models import Booking, BookingStatus
from app.repositories.booking_repository import BookingRepository
from app.services.booking_service import BookingService
from app.services.cancellation_service import (
    CancellationService,
    can_cancel,
    check_cancellation_window,
)
from helpers import BOOKING_DATE, USER_A, USER_B, at, fixed_clock, transient_booking


async def _book(db, catalog, mobile=USER_A, slot_index=0):
    confirmation = await BookingService(db).book_court(
        mobile, catalog.location_id, catalog.court_ids[0], catalog.slot_ids[slot_index], BOOKING_DATE
    )
    return confirmation.booking_id


async def _stored_booking(session_factory, booking_id):
    async with session_factory() as session:
        result = await session.execute(select(Booking).where(Booking.id == booking_id))
        return result.scalar_one()


@pytest.mark.asyncio
async def test_cancel_well_before_start(db, session_factory, catalog):
    booking_id = await _book(db, catalog)

    result = await CancellationService(db, now=fixed_clock(at(13))).cancel_booking(
        booking_id, USER_A
    )

    assert result.booking_id == booking_id
    assert result.status == "CANCELLED"
    stored = await _stored_booking(session_factory, booking_id)
    assert stored.status == BookingStatus.CANCELLED
    assert stored.cancelled_at is not None


@pytest.mark.asyncio
async def test_cancel_exactly_at_cutoff_is_allowed(db, catalog):
    booking_id = await _book(db, catalog)

    result = await CancellationService(db, now=fixed_clock(at(14))).cancel_booking(
        booking_id, USER_A
    )

    assert result.status == "CANCELLED"


@pytest.mark.asyncio
async def test_cancel_one_minute_inside_cutoff_is_rejected(db, session_factory, catalog):
    booking_id = await _book(db, catalog)

    with pytest.raises(CancellationWindowClosed) as exc_info:
        await CancellationService(db, now=fixed_clock(at(14, 1))).cancel_booking(
            booking_id, USER_A
        )

    assert exc_info.value.status_code == 422
    assert exc_info.value.details == {"cutoff_hours": 4, "lead_minutes": 239}
    stored = await _stored_booking(session_factory, booking_id)
    assert stored.status == BookingStatus.BOOKED


@pytest.mark.asyncio
async def test_cancel_at_start_time_is_rejected(db, catalog):
    booking_id = await _book(db, catalog)

    with pytest.raises(CancellationWindowClosed):
        await CancellationService(db, now=fixed_clock(at(18))).cancel_booking(booking_id, USER_A)


@pytest.mark.asyncio
async def test_cancel_past_booking_is_rejected(db, catalog):
    booking_id = await _book(db, catalog)

    with pytest.raises(PastBookingNotCancellable):
        await CancellationService(db, now=fixed_clock(at(19))).cancel_booking(booking_id, USER_A)


@pytest.mark.asyncio
async def test_cutoff_is_configurable(db, catalog):
    booking_id = await _book(db, catalog)

    result = await CancellationService(
        db, now=fixed_clock(at(17)), cutoff_hours=1
    ).cancel_booking(booking_id, USER_A)

    assert result.status == "CANCELLED"


@pytest.mark.asyncio
async def test_other_user_cannot_cancel(db, session_factory, catalog):
    booking_id = await _book(db, catalog)

    with pytest.raises(BookingCancellationForbidden) as exc_info:
        await CancellationService(db, now=fixed_clock(at(9))).cancel_booking(booking_id, USER_B)

    assert exc_info.value.status_code == 403
    stored = await _stored_booking(session_factory, booking_id)
    assert stored.status == BookingStatus.BOOKED


@pytest.mark.asyncio
async def test_ownership_checked_before_time(db, catalog):
    booking_id = await _book(db, catalog)

    with pytest.raises(BookingCancellationForbidden):
        await CancellationService(db, now=fixed_clock(at(20))).cancel_booking(booking_id, USER_B)


@pytest.mark.asyncio
async def test_second_cancel_is_rejected(db, catalog):
    booking_id = await _book(db, catalog)
    service = CancellationService(db, now=fixed_clock(at(9)))
    await service.cancel_booking(booking_id, USER_A)

    with pytest.raises(BookingAlreadyCancelled):
        await service.cancel_booking(booking_id, USER_A)


@pytest.mark.asyncio
async def test_completed_booking_is_not_cancellable(db, catalog):
    booking_id = await _book(db, catalog)
    booking = await BookingRepository(db).get_booking(booking_id)
    booking.status = BookingStatus.COMPLETED
    await db.commit()

    with pytest.raises(BookingNotActive):
        await CancellationService(db, now=fixed_clock(at(9))).cancel_booking(booking_id, USER_A)


@pytest.mark.asyncio
async def test_unknown_booking(db, catalog):
    with pytest.raises(BookingNotFound):
        await CancellationService(db, now=fixed_clock(at(9))).cancel_booking(999, USER_A)


@pytest.mark.asyncio
async def test_stale_conditional_update_matches_nothing(db, session_factory, catalog):
    booking_id = await _book(db, catalog)

    async with session_factory() as stale_session:
        stale = await BookingRepository(stale_session).get_booking(booking_id)
        await CancellationService(db, now=fixed_clock(at(9))).cancel_booking(booking_id, USER_A)

        updated = await BookingRepository(stale_session).mark_cancelled(stale, cancelled_at=at(9))
        await stale_session.rollback()

    assert updated is False


@pytest.mark.asyncio
async def test_concurrent_cancellation_loses_cleanly(db, session_factory, catalog):
    booking_id = await _book(db, catalog)

    class RacingRepository(BookingRepository):
        async def get_booking(self, booking_id, for_update=False):
            booking = await super().get_booking(booking_id, for_update)
            # Someone else cancels between our read and our write
            async with session_factory() as other:
                await CancellationService(other, now=fixed_clock(at(9))).cancel_booking(
                    booking_id, USER_A
                )
            return booking

    async with session_factory() as session:
        service = CancellationService(
            session, bookings=RacingRepository(session), now=fixed_clock(at(9))
        )
        with pytest.raises(BookingAlreadyCancelled):
            await service.cancel_booking(booking_id, USER_A)

    stored = await _stored_booking(session_factory, booking_id)
    assert stored.status == BookingStatus.CANCELLED


class TestCancellationWindow:
    """The pure window check shared by the cancel operation and listings."""

    def test_exact_cutoff_allowed(self):
        check_cancellation_window(at(18), at(14), 4)

    def test_inside_cutoff(self):
        with pytest.raises(CancellationWindowClosed):
            check_cancellation_window(at(18), at(14, 1), 4)

    def test_started(self):
        with pytest.raises(PastBookingNotCancellable):
            check_cancellation_window(at(18), at(18, 1), 4)

    def test_previous_day_counts_toward_lead(self):
        # 23:00 the evening before an 02:00 start is only three hours ahead
        with pytest.raises(CancellationWindowClosed):
            check_cancellation_window(at(2), at(23, day=date(2025, 5, 31)), 4)


class TestCanCancel:

    def test_active_booking_with_enough_lead(self):
        assert can_cancel(transient_booking(time(18), time(19)), at(10), 4) is True

    def test_exact_cutoff(self):
        assert can_cancel(transient_booking(time(18), time(19)), at(14), 4) is True

    def test_inside_cutoff(self):
        assert can_cancel(transient_booking(time(18), time(19)), at(14, 1), 4) is False

    def test_past(self):
        assert can_cancel(transient_booking(time(18), time(19)), at(20), 4) is False

    def test_cancelled(self):
        booking = transient_booking(time(18), time(19), status=BookingStatus.CANCELLED)
        assert can_cancel(booking, at(10), 4) is False

    def test_completed(self):
        booking = transient_booking(time(18), time(19), status=BookingStatus.COMPLETED)
        assert can_cancel(booking, at(10), 4) is False

    def test_uses_configured_cutoff_by_default(self):
        assert can_cancel(transient_booking(time(18), time(19)), at(14)) is True
        assert can_cancel(transient_booking(time(18), time(19)), at(14, 30)) is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "now",
    [at(9), at(14), at(14, 1), at(18), at(19)],
    ids=["early", "cutoff", "inside", "start", "after"],
)
async def test_can_cancel_agrees_with_cancel_booking(db, catalog, now):
    booking_id = await _book(db, catalog)
    booking = await BookingRepository(db).get_booking(booking_id)
    predicted = can_cancel(booking, now)

    try:
        await CancellationService(db, now=fixed_clock(now)).cancel_booking(booking_id, USER_A)
        succeeded = True
    except InvalidStateError:
        succeeded = False

    assert predicted == succeeded
