import threading
from datetime import date

import pytest
from sqlalchemy import delete
from sqlalchemy.orm import sessionmaker

from helpers import create_user
from skillmatch import models
from skillmatch.crud import user as user_crud
from skillmatch.exceptions import (
    DuplicateRating,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from skillmatch.services import booking_service, rating_service

TODAY = date(2026, 3, 2)


def _booking(db, teacher, student, *, complete=True):
    booking = booking_service.create_booking(
        db, student.id, teacher.id, "Guitar", TODAY, "14:00", today=TODAY
    )
    booking_service.confirm_booking(db, booking.id)
    if complete:
        booking_service.complete_booking(db, booking.id)
    return booking


@pytest.fixture
def pair(db_session):
    teacher = create_user(db_session, "Tess", teach=["Guitar"], reputation=4.0)
    student = create_user(db_session, "Sam", learn=["guitar"])
    return teacher, student


def test_rating_folds_half_weight(db_session, pair):
    teacher, student = pair
    booking = _booking(db_session, teacher, student)

    updated = rating_service.submit_rating(db_session, booking.id, student.id, 5)

    assert updated.id == teacher.id
    assert updated.reputation_average == 4.5
    assert updated.sessions_completed == 1


def test_first_rating_folds_against_zero(db_session):
    teacher = create_user(db_session, "Newbie", teach=["Chess"])
    student = create_user(db_session, "Pupil", learn=["Chess"])
    booking = booking_service.create_booking(
        db_session, student.id, teacher.id, "Chess", TODAY, "09:00", today=TODAY
    )
    booking_service.confirm_booking(db_session, booking.id)
    booking_service.complete_booking(db_session, booking.id)

    updated = rating_service.submit_rating(db_session, booking.id, student.id, 5)

    assert updated.reputation_average == 2.5


def test_sessions_counted_on_completion_not_rating(db_session, pair):
    teacher, student = pair
    first = _booking(db_session, teacher, student)
    _booking(db_session, teacher, student)

    db_session.refresh(teacher)
    assert teacher.sessions_completed == 2

    rating_service.submit_rating(db_session, first.id, student.id, 3)
    db_session.refresh(teacher)
    assert teacher.sessions_completed == 2
    assert teacher.reputation_average == 3.5


def test_cannot_rate_confirmed_booking(db_session, pair):
    teacher, student = pair
    booking = _booking(db_session, teacher, student, complete=False)

    with pytest.raises(InvalidTransition):
        rating_service.submit_rating(db_session, booking.id, student.id, 5)

    db_session.refresh(teacher)
    assert teacher.reputation_average == 4.0


def test_duplicate_rating_rejected(db_session, pair):
    teacher, student = pair
    booking = _booking(db_session, teacher, student)
    rating_service.submit_rating(db_session, booking.id, student.id, 5)

    with pytest.raises(DuplicateRating):
        rating_service.submit_rating(db_session, booking.id, student.id, 1)

    db_session.refresh(teacher)
    assert teacher.reputation_average == 4.5


def test_only_student_may_rate(db_session, pair):
    teacher, student = pair
    booking = _booking(db_session, teacher, student)

    with pytest.raises(ValidationError):
        rating_service.submit_rating(db_session, booking.id, teacher.id, 5)


@pytest.mark.parametrize("score", [0, 6, -1, 4.5, "5", True, None])
def test_score_must_be_integer_in_range(db_session, pair, score):
    teacher, student = pair
    booking = _booking(db_session, teacher, student)

    with pytest.raises(ValidationError):
        rating_service.submit_rating(db_session, booking.id, student.id, score)


def test_unknown_booking(db_session):
    with pytest.raises(NotFound):
        rating_service.submit_rating(db_session, 999, 1, 4)


def test_deleted_teacher_cannot_be_rated(db_session, pair):
    teacher, student = pair
    booking = _booking(db_session, teacher, student)
    user_crud.delete_user(db_session, teacher.id)

    with pytest.raises(NotFound):
        rating_service.submit_rating(db_session, booking.id, student.id, 5)

    assert db_session.query(models.Rating).count() == 0


def test_teacher_removed_mid_rating_rolls_back(db_session, pair, monkeypatch):
    teacher, student = pair
    booking = _booking(db_session, teacher, student)
    booking_id, teacher_id, student_id = booking.id, teacher.id, student.id
    require_user = user_crud.require_user

    def require_then_remove(db, user_id, role="User"):
        user = require_user(db, user_id, role=role)
        if user_id == teacher_id:
            db.execute(
                delete(models.User)
                .where(models.User.id == user_id)
                .execution_options(synchronize_session=False)
            )
        return user

    monkeypatch.setattr(user_crud, "require_user", require_then_remove)

    with pytest.raises(NotFound):
        rating_service.submit_rating(db_session, booking_id, student_id, 5)

    monkeypatch.undo()
    assert db_session.query(models.Rating).count() == 0
    assert user_crud.get_user(db_session, teacher_id).reputation_average == 4.0


def test_concurrent_ratings_apply_once(file_engine):
    SessionLocal = sessionmaker(bind=file_engine, autoflush=False)
    setup = SessionLocal()
    teacher = create_user(setup, "Race Tess", teach=["Guitar"], reputation=4.0)
    student = create_user(setup, "Race Sam", learn=["Guitar"])
    booking = _booking(setup, teacher, student)
    booking_id, teacher_id, student_id = booking.id, teacher.id, student.id
    setup.close()

    barrier = threading.Barrier(2)
    outcomes = []
    lock = threading.Lock()

    def worker():
        db = SessionLocal()
        try:
            barrier.wait()
            rating_service.submit_rating(db, booking_id, student_id, 5)
            result = "ok"
        except DuplicateRating:
            result = "duplicate"
        finally:
            db.close()
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)

    assert sorted(outcomes) == ["duplicate", "ok"]

    check = SessionLocal()
    try:
        assert check.get(models.User, teacher_id).reputation_average == 4.5
        assert check.query(models.Rating).filter_by(booking_id=booking_id).count() == 1
    finally:
        check.close()
