"""User model."""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.models.enums import UserRole


class User(Base):
    """A registered player or facility administrator, keyed by mobile number."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    mobile_number = Column(String(10), unique=True, nullable=False, index=True)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.USER)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    locations = relationship("Location", back_populates="admin")
    bookings = relationship("Booking", back_populates="user")
