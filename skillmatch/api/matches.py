from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from skillmatch.database import get_db
from skillmatch.schemas.match import MatchCandidate, TeacherOption
from skillmatch.services import match_service

router = APIRouter(prefix="/matches", tags=["Matches"])


@router.get("/{user_id}", response_model=List[MatchCandidate])
def rank_matches(
    user_id: int,
    q: Optional[str] = Query(None, description="Filter by display name"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Ranked match candidates for a user."""
    return match_service.rank_matches(db, user_id, name_filter=q, limit=limit)


@router.get("/{user_id}/teachers", response_model=List[TeacherOption])
def available_teachers(user_id: int, db: Session = Depends(get_db)):
    """Teachers offering something this user wants to learn (booking picker)."""
    return match_service.available_teachers(db, user_id)


@router.get("/{user_id}/skills/{teacher_id}", response_model=List[str])
def bookable_skills(user_id: int, teacher_id: int, db: Session = Depends(get_db)):
    return match_service.bookable_skills(db, user_id, teacher_id)
