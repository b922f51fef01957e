# skillmatch/schemas/rating.py
from pydantic import BaseModel, Field


class RatingCreate(BaseModel):
    """Schema for rating the teacher of a completed booking"""
    booking_id: int = Field(..., description="Booking identifier")
    rater_id: int = Field(..., description="Student submitting the rating")
    score: int = Field(..., ge=1, le=5, description="Rating from 1 to 5 stars")
