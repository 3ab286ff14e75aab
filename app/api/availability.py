"""Availability endpoints."""
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.availability import AvailabilityResponse
from app.schemas.common import ApiResponse
from app.services.availability_service import AvailabilityService

router = APIRouter(prefix="/api/bookings", tags=["availability"])


@router.get("/availability", response_model=ApiResponse[AvailabilityResponse])
async def get_availability(
    target_date: date = Query(..., alias="date", description="Date to check (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get availability of every court and slot for a date.

    Each slot is reported as AVAILABLE or BOOKED. Past dates are allowed and
    show historical occupancy.

    Args:
        target_date: Date to check
        db: Database session

    Returns:
        Availability grouped by location and court
    """
    availability = await AvailabilityService(db).get_availability(target_date)
    return ApiResponse(success=True, message="Availability fetched", data=availability)
