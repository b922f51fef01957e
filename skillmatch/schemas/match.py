# skillmatch/schemas/match.py
from typing import List

from pydantic import BaseModel, Field


class MatchCandidate(BaseModel):
    """Ranked match for a requesting user"""
    user_id: int = Field(..., description="Candidate user ID")
    display_name: str = Field(..., description="Candidate display name")
    score: int = Field(..., ge=1, description="can_teach_me + can_learn_from_me")
    can_teach_me: List[str] = Field(default_factory=list, description="Skills the candidate can teach the requester")
    can_learn_from_me: List[str] = Field(default_factory=list, description="Skills the candidate wants from the requester")
    reputation_average: float = Field(0.0, ge=0, le=5)


class TeacherOption(BaseModel):
    """Teacher offering at least one skill the student wants"""
    user_id: int
    display_name: str
    skills: List[str] = Field(default_factory=list)
