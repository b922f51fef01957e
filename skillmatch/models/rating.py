# skillmatch/models/rating.py
from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
)

from skillmatch.database import Base
from skillmatch.models.user import _utcnow


class Rating(Base):
    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, index=True)
    rater_id = Column(Integer, nullable=False)
    rated_user_id = Column(Integer, nullable=False, index=True)
    score = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Constraints
    __table_args__ = (
        UniqueConstraint("booking_id", "rater_id", name="uq_rating_booking_rater"),
        CheckConstraint("score >= 1 AND score <= 5", name="check_score_range"),
    )
