# skillmatch/models/__init__.py
# Import models in dependency order
from .user import User, UserSkill, SkillType
from .message import Message
from .booking import Booking, BookingStatus
from .rating import Rating

__all__ = [
    "User",
    "UserSkill",
    "SkillType",
    "Message",
    "Booking",
    "BookingStatus",
    "Rating",
]
