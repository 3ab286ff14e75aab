"""Admin endpoints."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.admin import (
    AdminDashboardResponse,
    LocationInDB,
    RegisterLocationRequest,
    TimeSlotCreate,
    TimeSlotInDB,
)
from app.schemas.common import ApiResponse
from app.services.admin_service import AdminService

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/location/register", response_model=ApiResponse[LocationInDB], status_code=201)
async def register_location(
    request: RegisterLocationRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a location and its courts.

    Args:
        request: Admin mobile, names, image and number of courts
        db: Database session

    Returns:
        Registered location
    """
    location = await AdminService(db).register_location(request)
    return ApiResponse(
        success=True,
        message="Location and courts registered successfully",
        data=location,
    )


@router.delete("/location/{location_id}", response_model=ApiResponse[None])
async def delete_location(
    location_id: int,
    mobile: str = Query(..., description="Admin mobile number"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a location and the courts it owns."""
    await AdminService(db).delete_location(location_id, mobile)
    return ApiResponse(success=True, message="Location deleted")


@router.post("/slots", response_model=ApiResponse[TimeSlotInDB], status_code=201)
async def add_time_slot(
    request: TimeSlotCreate,
    db: AsyncSession = Depends(get_db),
):
    """Add a time slot to the facility-wide catalog."""
    slot = await AdminService(db).add_time_slot(request)
    return ApiResponse(
        success=True,
        message="Time slot added",
        data=TimeSlotInDB.model_validate(slot),
    )


@router.get("/dashboard", response_model=ApiResponse[AdminDashboardResponse])
async def dashboard(
    mobile: str = Query(..., description="Admin mobile number"),
    db: AsyncSession = Depends(get_db),
):
    """Bookings per court for every location managed by the admin."""
    data = await AdminService(db).get_dashboard(mobile)
    return ApiResponse(success=True, message="Admin dashboard fetched", data=data)
