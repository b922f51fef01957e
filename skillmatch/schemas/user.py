from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


# ======================
# REPUTATION
# ======================

class Reputation(BaseModel):
    average: float = Field(0.0, ge=0, le=5, description="Folded running rating (0-5)")
    sessions_completed: int = Field(0, ge=0, description="Completed sessions as teacher")


# ======================
# PROFILE SCHEMAS
# ======================

class UserProfileBase(BaseModel):
    display_name: str = Field(..., min_length=1, max_length=100)
    bio: Optional[str] = Field("", max_length=500)

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v):
        """Validate display name is not just whitespace"""
        if v.strip() == "":
            raise ValueError("Display name cannot be empty or just whitespace")
        return v.strip()


class UserProfileCreate(UserProfileBase):
    email: EmailStr
    is_admin: bool = False
    teach_skills: List[str] = Field(default_factory=list)
    learn_skills: List[str] = Field(default_factory=list)


class UserProfileUpdate(BaseModel):
    display_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    bio: Optional[str] = Field(None, max_length=500)
    teach_skills: Optional[List[str]] = None
    learn_skills: Optional[List[str]] = None

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v):
        if v is not None and v.strip() == "":
            raise ValueError("Display name cannot be empty or just whitespace")
        return v.strip() if v else None


class UserProfile(UserProfileBase):
    id: int
    email: str
    is_admin: bool = False
    teach_skills: List[str] = Field(default_factory=list)
    learn_skills: List[str] = Field(default_factory=list)
    reputation: Reputation
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_user(cls, user) -> "UserProfile":
        return cls(
            id=user.id,
            display_name=user.display_name,
            email=user.email,
            bio=user.bio or "",
            is_admin=bool(user.is_admin),
            teach_skills=user.teach_skills,
            learn_skills=user.learn_skills,
            reputation=Reputation(
                average=user.reputation_average or 0.0,
                sessions_completed=user.sessions_completed or 0,
            ),
            created_at=user.created_at,
        )
