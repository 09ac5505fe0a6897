"""
User model for account identity.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from vibecheck.db.base import BaseModel


class User(BaseModel):
    """User identified by a unique email (contact identifier)."""
    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)

    # Relationships
    memberships = relationship("Membership", back_populates="user", cascade="all, delete-orphan")
    vibes = relationship("Vibe", back_populates="user", cascade="all, delete-orphan")
