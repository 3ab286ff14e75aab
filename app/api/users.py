"""User endpoints."""
from typing import List
from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.booking import RegisterUserRequest, UserBooking
from app.schemas.common import ApiResponse
from app.services.user_service import UserService

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/auth/register", response_model=ApiResponse[None], status_code=201)
async def register_user(
    request: RegisterUserRequest,
    db: AsyncSession = Depends(get_db),
):
    """Register a user or admin by mobile number."""
    await UserService(db).register_user(request.mobile_number, request.role)
    return ApiResponse(success=True, message="User registered successfully")


@router.get("/user/bookings", response_model=ApiResponse[List[UserBooking]])
async def get_user_bookings(
    mobile_number: str = Header(..., alias="mobileNumber"),
    db: AsyncSession = Depends(get_db),
):
    """
    List the bookings of a user.

    Each booking carries a can_cancel flag computed with the same rule the
    cancel endpoint enforces.
    """
    bookings = await UserService(db).list_user_bookings(mobile_number)
    return ApiResponse(success=True, message="Bookings fetched successfully", data=bookings)
