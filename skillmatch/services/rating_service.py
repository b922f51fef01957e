# skillmatch/services/rating_service.py
"""
Rating Aggregator
Folds a post-completion rating into the teacher's running reputation.

    new_average = (old_average + score) / 2

A decayed running value, not the arithmetic mean of all ratings: 4.0 folded
with 5 gives 4.5. The fold runs as a single UPDATE in the database.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from skillmatch import models
from skillmatch.crud import booking as booking_crud
from skillmatch.crud import rating as rating_crud
from skillmatch.crud import user as user_crud
from skillmatch.exceptions import (
    DuplicateRating,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from skillmatch.models.booking import BookingStatus

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 5


def _validate_score(score) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError("Rating must be an integer between 1 and 5")
    if not (MIN_SCORE <= score <= MAX_SCORE):
        raise ValidationError("Rating must be between 1 and 5")
    return score


def submit_rating(
    db: Session,
    booking_id: int,
    rater_id: int,
    score: int,
) -> models.User:
    """
    Rate the teacher of a completed booking.

    Args:
        db: Database session
        booking_id: Booking identifier
        rater_id: The booking's student
        score: Rating value (1-5)

    Returns:
        The teacher's updated User row

    Raises:
        ValidationError: Score out of range or rater is not the student
        NotFound: Unknown booking, or the teacher has been deleted
        InvalidTransition: Booking is not completed
        DuplicateRating: This rater already rated this booking
    """
    score = _validate_score(score)

    booking = booking_crud.get_booking(db, booking_id)
    if not booking:
        raise NotFound(f"Booking {booking_id} not found")

    if booking.status != BookingStatus.COMPLETED.value:
        raise InvalidTransition(
            f"Booking {booking_id} is {booking.status}; only completed bookings can be rated"
        )

    if booking.student_id != rater_id:
        raise ValidationError("Only the student in this booking can submit a rating")

    if rating_crud.get_rating(db, booking_id, rater_id):
        raise DuplicateRating(f"Rating already submitted for booking {booking_id}")

    teacher_id = booking.teacher_id
    user_crud.require_user(db, teacher_id, role="Teacher")

    try:
        rating_crud.create_rating(
            db,
            booking_id=booking_id,
            rater_id=rater_id,
            rated_user_id=teacher_id,
            score=score,
        )
        if not user_crud.fold_reputation(db, teacher_id, score):
            raise NotFound(f"Teacher {teacher_id} not found")
        db.commit()
    except IntegrityError:
        # Lost the race against a concurrent rating for the same pair.
        db.rollback()
        raise DuplicateRating(f"Rating already submitted for booking {booking_id}")
    except Exception:
        db.rollback()
        raise

    teacher = user_crud.require_user(db, teacher_id, role="Teacher")
    db.refresh(teacher)
    logger.info(
        "Booking %s rated %s by user %s; teacher %s average now %.2f",
        booking_id, score, rater_id, teacher_id, teacher.reputation_average,
    )
    return teacher
