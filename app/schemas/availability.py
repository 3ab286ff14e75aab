"""Availability schemas."""
from pydantic import BaseModel
from typing import List
from datetime import date, time


class SlotAvailability(BaseModel):
    """Status of a single slot on one court."""

    slot_id: int
    start_time: time
    end_time: time
    status: str  # AVAILABLE, BOOKED


class CourtAvailability(BaseModel):
    """Schema for a court with its slot statuses."""

    court_id: int
    court_name: str
    slots: List[SlotAvailability]


class LocationAvailability(BaseModel):
    """Schema for a location with its courts."""

    location_id: int
    location_name: str
    courts: List[CourtAvailability]


class AvailabilityResponse(BaseModel):
    """Availability of every court and slot for one date."""

    date: date
    locations: List[LocationAvailability]
