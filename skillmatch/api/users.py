from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skillmatch.crud import user as user_crud
from skillmatch.database import get_db
from skillmatch.schemas.user import UserProfile, UserProfileCreate, UserProfileUpdate

router = APIRouter(prefix="/users", tags=["Users"])


# ======================
# POST: Create profile
# ======================
@router.post("/", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
def create_user(profile: UserProfileCreate, db: Session = Depends(get_db)):
    return UserProfile.from_user(user_crud.create_user(db, profile))


# ======================
# GET: Directory listing
# ======================
@router.get("/", response_model=List[UserProfile])
def list_users(skip: int = 0, limit: Optional[int] = None, db: Session = Depends(get_db)):
    return [UserProfile.from_user(u) for u in user_crud.list_users(db, skip=skip, limit=limit)]


@router.get("/{user_id}", response_model=UserProfile)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return UserProfile.from_user(user_crud.require_user(db, user_id))


# ======================
# PATCH: Profile edit
# ======================
@router.patch("/{user_id}", response_model=UserProfile)
def update_user(user_id: int, patch: UserProfileUpdate, db: Session = Depends(get_db)):
    return UserProfile.from_user(user_crud.update_user(db, user_id, patch))


# ======================
# DELETE: Administrative removal (soft-orphans bookings and messages)
# ======================
@router.delete("/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db)):
    user_crud.delete_user(db, user_id)
    return {"message": "User deleted successfully", "user_id": user_id}
