"""
User Directory
SQLAlchemy-backed profile store consumed by the core services.
"""

import logging
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from skillmatch import models, schemas
from skillmatch.exceptions import NotFound, ValidationError
from skillmatch.models.user import SkillType
from skillmatch.services.skill_index import dedupe_skills, normalize

logger = logging.getLogger(__name__)


# ============================
# READS
# ============================

def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def require_user(db: Session, user_id: int, role: str = "User") -> models.User:
    user = get_user(db, user_id)
    if not user:
        raise NotFound(f"{role} {user_id} not found")
    return user


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email).first()


def list_users(db: Session, skip: int = 0, limit: Optional[int] = None) -> List[models.User]:
    query = (
        db.query(models.User)
        .options(selectinload(models.User.skills))
        .order_by(models.User.id.asc())
        .offset(skip)
    )
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def display_names(db: Session, user_ids) -> dict:
    """Map ids to display names; ids of deleted users are simply absent."""
    ids = set(user_ids)
    if not ids:
        return {}
    rows = db.query(models.User.id, models.User.display_name).filter(
        models.User.id.in_(ids)
    ).all()
    return {uid: name for uid, name in rows}


# ============================
# WRITES
# ============================

def set_skills(db: Session, user: models.User, skill_type: SkillType, labels: List[str]) -> None:
    """Replace one of the user's skill sets with the deduplicated labels."""
    for row in [s for s in user.skills if s.skill_type == skill_type.value]:
        user.skills.remove(row)
    db.flush()
    for label in dedupe_skills(labels):
        user.skills.append(
            models.UserSkill(
                label=label,
                normalized=normalize(label),
                skill_type=skill_type.value,
            )
        )


def create_user(db: Session, profile: schemas.UserProfileCreate) -> models.User:
    if get_user_by_email(db, profile.email):
        raise ValidationError(f"Email {profile.email} is already registered")

    user = models.User(
        display_name=profile.display_name.strip(),
        email=profile.email,
        bio=(profile.bio or "").strip(),
        is_admin=profile.is_admin,
        reputation_average=0.0,
        sessions_completed=0,
    )
    try:
        db.add(user)
        set_skills(db, user, SkillType.TEACH, profile.teach_skills)
        set_skills(db, user, SkillType.LEARN, profile.learn_skills)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError(f"Email {profile.email} is already registered")
    db.refresh(user)
    logger.info("Created user %s", user.id)
    return user


def update_user(db: Session, user_id: int, patch: schemas.UserProfileUpdate) -> models.User:
    user = require_user(db, user_id)
    update_data = patch.model_dump(exclude_unset=True)
    email = update_data.pop("email", None)

    try:
        if email and email != user.email:
            other = get_user_by_email(db, email)
            if other and other.id != user.id:
                raise ValidationError(f"Email {email} is already registered")
            user.email = email

        if update_data.get("display_name") is not None:
            name = update_data["display_name"].strip()
            if not name:
                raise ValidationError("Display name cannot be empty")
            user.display_name = name
        if update_data.get("bio") is not None:
            user.bio = update_data["bio"].strip()
        if update_data.get("teach_skills") is not None:
            set_skills(db, user, SkillType.TEACH, update_data["teach_skills"])
        if update_data.get("learn_skills") is not None:
            set_skills(db, user, SkillType.LEARN, update_data["learn_skills"])

        db.commit()
    except IntegrityError:
        # Another profile claimed the email between the check and the write.
        db.rollback()
        raise ValidationError(f"Email {email} is already registered")
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    """
    Remove a profile and its skills.

    Bookings, messages and ratings keep the id and become soft orphans.
    """
    user = require_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("Deleted user %s; related bookings and messages retained", user_id)


# ============================
# REPUTATION (flush only; caller commits)
# ============================

def increment_sessions_completed(db: Session, user_id: int) -> None:
    db.execute(
        update(models.User)
        .where(models.User.id == user_id)
        .values(sessions_completed=models.User.sessions_completed + 1)
        .execution_options(synchronize_session=False)
    )


def fold_reputation(db: Session, user_id: int, score: int) -> int:
    """
    Apply ``average = (average + score) / 2`` in a single UPDATE.

    Evaluated by the database against the current row value, so concurrent
    folds on the same user serialize instead of overwriting each other.
    Returns the number of rows updated.
    """
    result = db.execute(
        update(models.User)
        .where(models.User.id == user_id)
        .values(reputation_average=(models.User.reputation_average + float(score)) / 2.0)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount
