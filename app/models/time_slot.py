"""Time slot model."""
from sqlalchemy import Column, Integer, Time, CheckConstraint
from app.core.database import Base


class TimeSlot(Base):
    """A facility-wide recurring time window, independent of date and court."""

    __tablename__ = "time_slots"

    id = Column(Integer, primary_key=True, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_time_slot_order"),
    )
