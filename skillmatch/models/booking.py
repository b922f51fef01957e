# skillmatch/models/booking.py
import enum

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Integer, String

from skillmatch.database import Base
from skillmatch.models.user import _utcnow


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    # No foreign keys: bookings outlive deleted users for auditing.
    teacher_id = Column(Integer, nullable=False, index=True)
    student_id = Column(Integer, nullable=False, index=True)
    skill = Column(String(100), nullable=False)
    scheduled_date = Column(Date, nullable=False)
    scheduled_time = Column(String(5), nullable=False)  # "HH:MM" slot label
    status = Column(String(20), default=BookingStatus.PENDING.value, nullable=False, index=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        CheckConstraint("teacher_id <> student_id", name="check_booking_distinct_parties"),
    )
