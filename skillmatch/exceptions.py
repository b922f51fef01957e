"""
Domain errors raised by the core services.

All errors derive from ``ValueError`` so callers that only distinguish
"bad request" from "server failure" keep working; the HTTP layer maps each
subclass to its own status code.
"""

from typing import Optional


class SkillMatchError(ValueError):
    """Base class for every error the core reports to its caller."""

    status_code = 400

    def __init__(self, message: str, *, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class NotFound(SkillMatchError):
    """Unknown user, booking or message target."""

    status_code = 404


class ValidationError(SkillMatchError):
    """Malformed input, skill mismatch, empty content or past date."""

    status_code = 400


class InvalidTransition(SkillMatchError):
    """Booking state-machine violation."""

    status_code = 409


class DuplicateRating(SkillMatchError):
    """A rating already exists for this (booking, rater) pair."""

    status_code = 409


SKILL_MISMATCH = "SkillMismatch"
