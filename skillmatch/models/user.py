import enum
from datetime import datetime, UTC
from typing import List

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from skillmatch.database import Base


def _utcnow() -> datetime:
    # Stored naive (UTC) so values compare equal before and after a reload.
    return datetime.now(UTC).replace(tzinfo=None)


class SkillType(str, enum.Enum):
    TEACH = "teach"
    LEARN = "learn"


# ---------------- USER (DIRECTORY TABLE) ----------------
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    display_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    bio = Column(String(500), default="")
    is_admin = Column(Boolean, default=False, nullable=False)

    # Reputation: folded running average plus completed session count
    reputation_average = Column(Float, default=0.0, nullable=False)
    sessions_completed = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    skills = relationship(
        "UserSkill",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserSkill.id",
    )

    def _labels(self, skill_type: SkillType) -> List[str]:
        return [s.label for s in self.skills if s.skill_type == skill_type.value]

    @property
    def teach_skills(self) -> List[str]:
        return self._labels(SkillType.TEACH)

    @property
    def learn_skills(self) -> List[str]:
        return self._labels(SkillType.LEARN)


# ---------------- USER SKILLS (TEACH / LEARN) ----------------
class UserSkill(Base):
    __tablename__ = "user_skills"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    label = Column(String(100), nullable=False)           # display casing
    normalized = Column(String(100), nullable=False, index=True)
    skill_type = Column(String(20), nullable=False)       # 'teach' or 'learn'

    __table_args__ = (
        UniqueConstraint("user_id", "normalized", "skill_type", name="uq_user_skill"),
    )

    user = relationship("User", back_populates="skills")
