# skillmatch/api/__init__.py
# This file makes the api directory a Python package.

from . import admin
from . import bookings
from . import matches
from . import messages
from . import ratings
from . import users

__all__ = [
    "admin",
    "bookings",
    "matches",
    "messages",
    "ratings",
    "users",
]
