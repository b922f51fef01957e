# skillmatch/schemas/__init__.py

# Directory schemas
from .user import Reputation, UserProfile, UserProfileCreate, UserProfileUpdate

# Matching
from .match import MatchCandidate, TeacherOption

# Messaging
from .message import Conversation, Message, MessageCreate

# Bookings & ratings
from .booking import Booking, TimeSlots
from .rating import RatingCreate

# Admin
from .stats import ChatActivity, PlatformStats, TopTeacher

__all__ = [
    "Reputation",
    "UserProfile",
    "UserProfileCreate",
    "UserProfileUpdate",
    "MatchCandidate",
    "TeacherOption",
    "Conversation",
    "Message",
    "MessageCreate",
    "Booking",
    "TimeSlots",
    "RatingCreate",
    "PlatformStats",
    "TopTeacher",
    "ChatActivity",
]
