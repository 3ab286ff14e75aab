"""Court model."""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Court(Base):
    """Represents a bookable court inside a location."""

    __tablename__ = "courts"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    location = relationship("Location", back_populates="courts")
    bookings = relationship("Booking", back_populates="court")

    # One court per location with the same name
    __table_args__ = (
        UniqueConstraint("name", "location_id", name="uq_court_name_location"),
    )
