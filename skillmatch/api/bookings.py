# skillmatch/api/bookings.py
"""
Booking API

Endpoints:
- POST /bookings/ - Student requests a session (form fields)
- GET /bookings/slots - Enumerated time slots
- GET /bookings/user/{user_id} - Bookings where the user is teacher or student
- GET /bookings/{booking_id} - Booking detail
- PATCH /bookings/{booking_id}/confirm - pending -> confirmed
- PATCH /bookings/{booking_id}/complete - confirmed -> completed
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Form, status
from sqlalchemy.orm import Session

from skillmatch.database import get_db
from skillmatch.schemas.booking import Booking, TimeSlots
from skillmatch.services import booking_service

router = APIRouter(prefix="/bookings", tags=["Bookings"])


# ======================
# CREATE BOOKING REQUEST
# ======================
@router.post("/", response_model=Booking, status_code=status.HTTP_201_CREATED)
def create_booking(
    student_id: int = Form(...),
    teacher_id: int = Form(...),
    skill: str = Form(...),
    scheduled_date: str = Form(...),
    scheduled_time: str = Form(...),
    db: Session = Depends(get_db),
):
    return booking_service.create_booking(
        db,
        student_id=student_id,
        teacher_id=teacher_id,
        skill=skill,
        scheduled_date=scheduled_date,
        scheduled_time=scheduled_time,
    )


@router.get("/slots", response_model=TimeSlots)
def list_time_slots():
    return TimeSlots(slots=booking_service.time_slots())


# ======================
# BOOKING LISTING
# ======================
@router.get("/user/{user_id}", response_model=List[Booking])
def list_bookings(user_id: int, status: Optional[str] = None, db: Session = Depends(get_db)):
    """Bookings for a user, optionally filtered by status."""
    return booking_service.list_bookings(db, user_id, status=status)


@router.get("/{booking_id}", response_model=Booking)
def get_booking(booking_id: int, db: Session = Depends(get_db)):
    return booking_service.get_booking(db, booking_id)


# ======================
# TRANSITIONS
# ======================
@router.patch("/{booking_id}/confirm", response_model=Booking)
def confirm_booking(booking_id: int, db: Session = Depends(get_db)):
    return booking_service.confirm_booking(db, booking_id)


@router.patch("/{booking_id}/complete", response_model=Booking)
def complete_booking(booking_id: int, db: Session = Depends(get_db)):
    return booking_service.complete_booking(db, booking_id)
