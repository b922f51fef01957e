"""Factories shared by the test modules."""

from skillmatch.crud import user as user_crud
from skillmatch.schemas.user import UserProfileCreate


def create_user(db, name, teach=(), learn=(), *, email=None, reputation=None):
    user = user_crud.create_user(
        db,
        UserProfileCreate(
            display_name=name,
            email=email or f"{name.lower().replace(' ', '.')}@test.edu",
            teach_skills=list(teach),
            learn_skills=list(learn),
        ),
    )
    if reputation is not None:
        user.reputation_average = reputation
        db.commit()
        db.refresh(user)
    return user
