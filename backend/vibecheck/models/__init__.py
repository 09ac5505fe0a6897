"""Models package - Import all models for SQLAlchemy registration."""
from vibecheck.models.user import User
from vibecheck.models.relationship import Relationship, Membership
from vibecheck.models.vibe import Vibe

__all__ = [
    "User",
    "Relationship",
    "Membership",
    "Vibe",
]
