# skillmatch/crud/booking.py
from datetime import date
from typing import List, Optional

from sqlalchemy import func, or_, update
from sqlalchemy.orm import Session

from skillmatch import models
from skillmatch.models.booking import BookingStatus
from skillmatch.models.user import _utcnow


def create_booking(
    db: Session,
    teacher_id: int,
    student_id: int,
    skill: str,
    scheduled_date: date,
    scheduled_time: str,
) -> models.Booking:
    booking = models.Booking(
        teacher_id=teacher_id,
        student_id=student_id,
        skill=skill,
        scheduled_date=scheduled_date,
        scheduled_time=scheduled_time,
        status=BookingStatus.PENDING.value,
    )
    db.add(booking)
    db.flush()
    return booking


def get_booking(db: Session, booking_id: int) -> Optional[models.Booking]:
    return db.query(models.Booking).filter(models.Booking.id == booking_id).first()


def list_bookings_for_user(
    db: Session,
    user_id: int,
    status: Optional[str] = None,
) -> List[models.Booking]:
    query = db.query(models.Booking).filter(
        or_(
            models.Booking.teacher_id == user_id,
            models.Booking.student_id == user_id,
        )
    )
    if status:
        query = query.filter(models.Booking.status == status)
    return query.order_by(
        models.Booking.scheduled_date.asc(),
        models.Booking.scheduled_time.asc(),
        models.Booking.id.asc(),
    ).all()


def has_bookings(db: Session, user_id: int) -> bool:
    return db.query(
        db.query(models.Booking)
        .filter(
            or_(
                models.Booking.teacher_id == user_id,
                models.Booking.student_id == user_id,
            )
        )
        .exists()
    ).scalar()


def transition_status(
    db: Session,
    booking_id: int,
    expected: BookingStatus,
    new: BookingStatus,
) -> bool:
    """
    Compare-and-swap the booking status.

    Returns False when the row was not in ``expected`` at write time, which
    includes losing a race against a concurrent transition.
    """
    result = db.execute(
        update(models.Booking)
        .where(
            models.Booking.id == booking_id,
            models.Booking.status == expected.value,
        )
        .values(status=new.value, updated_at=_utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def count_by_status(db: Session) -> dict:
    counts = {status.value: 0 for status in BookingStatus}
    rows = db.query(
        models.Booking.status,
        func.count(models.Booking.id),
    ).group_by(models.Booking.status).all()
    for status, count in rows:
        counts[status] = count
    return counts
