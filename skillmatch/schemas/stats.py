from datetime import date
from typing import Dict, List

from pydantic import BaseModel, Field


class TopTeacher(BaseModel):
    user_id: int
    display_name: str
    sessions_completed: int
    reputation_average: float


class ChatActivity(BaseModel):
    date: date
    count: int


class PlatformStats(BaseModel):
    total_users: int
    active_users: int = Field(..., description="Users with at least one completed session")
    total_sessions: int = Field(..., description="Sum of sessions completed across users")
    total_messages: int
    bookings_by_status: Dict[str, int]
    average_reputation: float
    top_teachers: List[TopTeacher] = Field(default_factory=list)
    chat_activity: List[ChatActivity] = Field(
        default_factory=list,
        description="Messages per day for the most recent active days",
    )
