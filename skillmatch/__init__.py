"""SkillMatch: matching, messaging, booking and rating core for skill exchange."""

__version__ = "0.1.0"
