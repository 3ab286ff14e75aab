"""Admin schemas."""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, List
from datetime import date, time


class RegisterLocationRequest(BaseModel):
    """Schema for registering a location and its courts."""

    admin_mobile: str
    location_name: str = Field(min_length=1)
    complex_name: str = Field(min_length=1)
    image_url: Optional[str] = None
    number_of_courts: int


class TimeSlotCreate(BaseModel):
    """Schema for adding a global time slot."""

    admin_mobile: str
    start_time: time
    end_time: time

    @model_validator(mode="after")
    def check_order(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class TimeSlotInDB(BaseModel):
    """Schema for a time slot from database."""

    id: int
    start_time: time
    end_time: time

    model_config = ConfigDict(from_attributes=True)


class LocationInDB(BaseModel):
    """Schema for a registered location."""

    id: int
    name: str
    complex_name: str
    image_url: Optional[str] = None
    court_names: List[str]


class DashboardBooking(BaseModel):
    booking_id: int
    booking_date: date
    start_time: time
    end_time: time
    status: str
    user_mobile: str


class DashboardCourt(BaseModel):
    court_id: int
    court_name: str
    bookings: List[DashboardBooking]


class DashboardLocation(BaseModel):
    location_id: int
    location_name: str
    image_url: Optional[str] = None
    courts: List[DashboardCourt]


class AdminDashboardResponse(BaseModel):
    """Bookings across every location owned by an admin."""

    locations: List[DashboardLocation]
