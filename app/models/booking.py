"""Booking model."""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Date, Enum, Index, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.models.enums import BookingStatus


class Booking(Base):
    """A reservation of one court for one slot on one date."""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    booking_date = Column(Date, nullable=False)
    user_mobile = Column(String(10), ForeignKey("users.mobile_number"), nullable=False)
    court_id = Column(Integer, ForeignKey("courts.id"), nullable=False, index=True)
    slot_id = Column(Integer, ForeignKey("time_slots.id"), nullable=False)
    status = Column(
        Enum(BookingStatus, name="booking_status"),
        nullable=False,
        default=BookingStatus.BOOKED,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", back_populates="bookings")
    court = relationship("Court", back_populates="bookings")
    time_slot = relationship("TimeSlot")

    __table_args__ = (
        Index("idx_booking_mobile", "user_mobile"),
        Index("idx_booking_date", "booking_date"),
        # At most one active booking per court, date and slot
        Index(
            "uq_booking_active_court_date_slot",
            "court_id",
            "booking_date",
            "slot_id",
            unique=True,
            postgresql_where=text("status = 'BOOKED'"),
            sqlite_where=text("status = 'BOOKED'"),
        ),
    )
