"""Response envelope."""
from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope used by every endpoint."""

    success: bool
    message: str
    data: Optional[T] = None
    code: Optional[str] = None
