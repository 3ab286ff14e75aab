"""Location model."""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Location(Base):
    """A facility run by an administrator. Owns its courts."""

    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    complex_name = Column(String, nullable=False)
    image_url = Column(String, nullable=True)
    admin_mobile = Column(String(10), nullable=False)
    admin_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    admin = relationship("User", back_populates="locations")
    courts = relationship("Court", back_populates="location", order_by="Court.id")

    __table_args__ = (
        UniqueConstraint("name", "admin_id", name="uq_location_name_admin"),
    )
