# skillmatch/crud/rating.py
from typing import Optional

from sqlalchemy.orm import Session

from skillmatch import models


def create_rating(
    db: Session,
    booking_id: int,
    rater_id: int,
    rated_user_id: int,
    score: int,
) -> models.Rating:
    """
    Insert a rating row and flush so the unique (booking, rater)
    constraint fires inside the caller's transaction.
    """
    rating = models.Rating(
        booking_id=booking_id,
        rater_id=rater_id,
        rated_user_id=rated_user_id,
        score=score,
    )
    db.add(rating)
    db.flush()
    return rating


def get_rating(db: Session, booking_id: int, rater_id: int) -> Optional[models.Rating]:
    return db.query(models.Rating).filter(
        models.Rating.booking_id == booking_id,
        models.Rating.rater_id == rater_id,
    ).first()
