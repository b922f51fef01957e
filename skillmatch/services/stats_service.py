# skillmatch/services/stats_service.py
"""
Platform Statistics
Aggregates for the admin dashboard.
"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from skillmatch import models
from skillmatch.config import settings
from skillmatch.crud import booking as booking_crud
from skillmatch.crud import message as message_crud
from skillmatch.schemas.stats import ChatActivity, PlatformStats, TopTeacher


def platform_stats(db: Session, top_n: Optional[int] = None) -> PlatformStats:
    """
    Dashboard totals.

    ``average_reputation`` is the mean of every user's reputation average,
    unrated users included, and 0.0 for an empty directory. ``chat_activity``
    covers the most recent days that had any messages, oldest first.
    """
    if top_n is None:
        top_n = settings.STATS_TOP_TEACHERS

    total_users, avg_reputation, total_sessions = db.query(
        func.count(models.User.id),
        func.avg(models.User.reputation_average),
        func.sum(models.User.sessions_completed),
    ).one()

    active_users = db.query(models.User).filter(
        models.User.sessions_completed > 0
    ).count()

    top_rows = (
        db.query(models.User)
        .filter(models.User.sessions_completed > 0)
        .order_by(models.User.sessions_completed.desc(), models.User.id.asc())
        .limit(top_n)
        .all()
    )

    return PlatformStats(
        total_users=int(total_users or 0),
        active_users=active_users,
        total_sessions=int(total_sessions or 0),
        total_messages=message_crud.count_messages(db),
        bookings_by_status=booking_crud.count_by_status(db),
        average_reputation=round(float(avg_reputation), 2) if avg_reputation is not None else 0.0,
        top_teachers=[
            TopTeacher(
                user_id=u.id,
                display_name=u.display_name,
                sessions_completed=u.sessions_completed,
                reputation_average=u.reputation_average,
            )
            for u in top_rows
        ],
        chat_activity=[
            ChatActivity(date=day, count=count)
            for day, count in message_crud.count_by_day(db, settings.STATS_CHAT_ACTIVITY_DAYS)
        ],
    )
