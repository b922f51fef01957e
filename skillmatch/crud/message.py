# skillmatch/crud/message.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from skillmatch import models


def create_message(
    db: Session,
    sender_id: int,
    receiver_id: int,
    content: str,
    sent_at: Optional[datetime] = None,
) -> models.Message:
    message = models.Message(
        sender_id=sender_id,
        receiver_id=receiver_id,
        content=content,
    )
    if sent_at is not None:
        message.sent_at = sent_at
    db.add(message)
    db.flush()
    return message


def get_messages_for_user(db: Session, user_id: int) -> List[models.Message]:
    """Every message the user sent or received, oldest first."""
    return (
        db.query(models.Message)
        .filter(
            or_(
                models.Message.sender_id == user_id,
                models.Message.receiver_id == user_id,
            )
        )
        .order_by(models.Message.sent_at.asc(), models.Message.id.asc())
        .all()
    )


def get_messages_between(db: Session, user_a: int, user_b: int) -> List[models.Message]:
    return (
        db.query(models.Message)
        .filter(
            or_(
                (models.Message.sender_id == user_a) & (models.Message.receiver_id == user_b),
                (models.Message.sender_id == user_b) & (models.Message.receiver_id == user_a),
            )
        )
        .order_by(models.Message.sent_at.asc(), models.Message.id.asc())
        .all()
    )


def count_messages(db: Session) -> int:
    return db.query(models.Message).count()


def count_by_day(db: Session, days: int) -> List[tuple]:
    """``(day, count)`` for the latest ``days`` days that had messages, oldest first."""
    day = func.date(models.Message.sent_at)
    rows = (
        db.query(day, func.count(models.Message.id))
        .group_by(day)
        .order_by(day.desc())
        .limit(days)
        .all()
    )
    return list(reversed(rows))
