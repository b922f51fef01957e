# skillmatch/services/booking_service.py
"""
Booking Lifecycle Manager

    pending --confirm--> confirmed --complete--> completed

No reverse transitions. Each transition is a compare-and-swap on the status
column, so of two concurrent calls on the same booking exactly one wins and
the other sees ``InvalidTransition``. Who may call confirm/complete is the
caller's decision; this module only enforces the state machine.
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from skillmatch import models
from skillmatch.config import settings
from skillmatch.crud import booking as booking_crud
from skillmatch.crud import user as user_crud
from skillmatch.exceptions import (
    SKILL_MISMATCH,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from skillmatch.models.booking import BookingStatus
from skillmatch.services.skill_index import SkillIndex

logger = logging.getLogger(__name__)


# ======================
# HELPER FUNCTIONS
# ======================

def time_slots() -> List[str]:
    """The enumerated session start times a booking may use."""
    return list(settings.BOOKING_TIME_SLOTS)


def _parse_date(value: Union[date, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(
            f"Invalid date '{value}'. Use ISO 8601 (e.g., '2026-02-20')"
        )


def _get_booking_or_404(db: Session, booking_id: int) -> models.Booking:
    booking = booking_crud.get_booking(db, booking_id)
    if not booking:
        raise NotFound(f"Booking {booking_id} not found")
    return booking


def _transition(
    db: Session,
    booking_id: int,
    expected: BookingStatus,
    new: BookingStatus,
) -> models.Booking:
    booking = _get_booking_or_404(db, booking_id)
    teacher_id = booking.teacher_id

    try:
        if not booking_crud.transition_status(db, booking_id, expected, new):
            db.rollback()
            db.refresh(booking)
            logger.debug(
                "Rejected %s -> %s for booking %s (status=%s)",
                expected.value, new.value, booking_id, booking.status,
            )
            raise InvalidTransition(
                f"Booking {booking_id} is {booking.status}; "
                f"only {expected.value} bookings can become {new.value}"
            )

        if new == BookingStatus.COMPLETED:
            # Counted once per completed booking, whether or not it is rated.
            user_crud.increment_sessions_completed(db, teacher_id)

        db.commit()
    except InvalidTransition:
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(booking)
    logger.info("Booking %s moved %s -> %s", booking_id, expected.value, new.value)
    return booking


# ======================
# CREATE
# ======================

def create_booking(
    db: Session,
    student_id: int,
    teacher_id: int,
    skill: str,
    scheduled_date: Union[date, str],
    scheduled_time: str,
    *,
    today: Optional[date] = None,
) -> models.Booking:
    """
    Create a pending booking requested by ``student_id``.

    The skill must be taught by the teacher and wanted by the student. The
    two profiles are read independently; a profile edit racing with this
    call may be validated against the previous skill set.

    Raises:
        ValidationError: Self-booking, bad slot, past date or skill mismatch
        NotFound: Unknown student or teacher
    """
    if student_id == teacher_id:
        raise ValidationError("Cannot book a session with yourself")

    student = user_crud.require_user(db, student_id, role="Student")
    teacher = user_crud.require_user(db, teacher_id, role="Teacher")

    slot = (scheduled_time or "").strip()
    slots = time_slots()
    if slot not in slots:
        raise ValidationError(
            f"Invalid time slot '{scheduled_time}'. Choose one of: {', '.join(slots)}"
        )

    session_date = _parse_date(scheduled_date)
    if session_date < (today or date.today()):
        raise ValidationError("Cannot book a session in the past")

    teacher_index = SkillIndex.for_user(teacher)
    if not (teacher_index.teaches(skill) and SkillIndex.for_user(student).wants(skill)):
        raise ValidationError(
            f"'{skill}' must be taught by the teacher and wanted by the student",
            code=SKILL_MISMATCH,
        )

    try:
        booking = booking_crud.create_booking(
            db,
            teacher_id=teacher.id,
            student_id=student.id,
            skill=teacher_index.teach_label(skill),
            scheduled_date=session_date,
            scheduled_time=slot,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(booking)
    logger.info(
        "Booking %s requested by student %s with teacher %s",
        booking.id, student.id, teacher.id,
    )
    return booking


# ======================
# TRANSITIONS
# ======================

def confirm_booking(db: Session, booking_id: int) -> models.Booking:
    return _transition(db, booking_id, BookingStatus.PENDING, BookingStatus.CONFIRMED)


def complete_booking(db: Session, booking_id: int) -> models.Booking:
    """Mark a confirmed booking completed and credit the teacher one session."""
    return _transition(db, booking_id, BookingStatus.CONFIRMED, BookingStatus.COMPLETED)


# ======================
# READS
# ======================

def get_booking(db: Session, booking_id: int) -> models.Booking:
    return _get_booking_or_404(db, booking_id)


def list_bookings(
    db: Session,
    user_id: int,
    status: Optional[str] = None,
) -> List[models.Booking]:
    """
    Bookings where the user is teacher or student.

    A deleted user still sees the bookings that outlived the profile.

    Raises:
        ValidationError: Unknown status filter
        NotFound: Unknown user with no bookings
    """
    if status is not None:
        status = status.strip().lower()
        if status not in {s.value for s in BookingStatus}:
            raise ValidationError(f"Unknown booking status '{status}'")
    bookings = booking_crud.list_bookings_for_user(db, user_id, status=status)
    if not bookings and not user_crud.get_user(db, user_id):
        if not booking_crud.has_bookings(db, user_id):
            raise NotFound(f"User {user_id} not found")
    return bookings
