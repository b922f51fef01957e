from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skillmatch.database import get_db
from skillmatch.schemas.rating import RatingCreate
from skillmatch.schemas.user import UserProfile
from skillmatch.services import rating_service

router = APIRouter(prefix="/ratings", tags=["Ratings"])


@router.post("/", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
def submit_rating(rating: RatingCreate, db: Session = Depends(get_db)):
    """
    Rate the teacher of a completed booking.

    Returns the teacher's profile with the folded reputation.
    """
    teacher = rating_service.submit_rating(
        db,
        booking_id=rating.booking_id,
        rater_id=rating.rater_id,
        score=rating.score,
    )
    return UserProfile.from_user(teacher)
