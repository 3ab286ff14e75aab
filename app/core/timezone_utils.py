"""Facility clock helpers."""
from datetime import date, datetime, time

import pytz

from app.core.config import settings


def facility_now() -> datetime:
    """Current wall-clock time at the facility, as a naive datetime."""
    facility_tz = pytz.timezone(settings.TIMEZONE)
    return datetime.now(pytz.UTC).astimezone(facility_tz).replace(tzinfo=None)


def slot_start(booking_date: date, start_time: time) -> datetime:
    """Instant a booking begins, in facility wall-clock time."""
    return datetime.combine(booking_date, start_time)


def utc_now() -> datetime:
    """Timezone-aware current UTC time, for audit timestamps."""
    return datetime.now(pytz.UTC)
