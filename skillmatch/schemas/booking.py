from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

# ======================
# BOOKING RESPONSE MODELS
# ======================

class Booking(BaseModel):
    id: int
    teacher_id: int
    student_id: int
    skill: str
    scheduled_date: date
    scheduled_time: str
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TimeSlots(BaseModel):
    slots: List[str]
