"""
Relationship model pairing two users through an invite code.
"""
from sqlalchemy import Column, String, ForeignKey, Integer, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from vibecheck.db.base import BaseModel

MAX_MEMBERS = 2


class Relationship(BaseModel):
    """A pairing created by one user and joined by another with its invite code."""
    __tablename__ = "relationships"

    code = Column(String(20), unique=True, nullable=False, index=True)

    # Relationships
    memberships = relationship(
        "Membership",
        back_populates="relationship",
        cascade="all, delete-orphan",
        order_by="Membership.position",
    )
    vibes = relationship("Vibe", back_populates="relationship", cascade="all, delete-orphan")


class Membership(BaseModel):
    """Junction row linking a user to a relationship at a fixed position (1 = creator, 2 = partner)."""
    __tablename__ = "relationship_users"

    relationship_id = Column(Integer, ForeignKey("relationships.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)

    # Relationships
    user = relationship("User", back_populates="memberships")
    # Declared last: the attribute shadows the relationship() helper in the class body
    relationship = relationship("Relationship", back_populates="memberships")

    # Position is bounded and unique, so a relationship can never hold more than two members
    __table_args__ = (
        UniqueConstraint('relationship_id', 'user_id', name='uq_relationship_user'),
        UniqueConstraint('relationship_id', 'position', name='uq_relationship_position'),
        CheckConstraint(f'position >= 1 AND position <= {MAX_MEMBERS}', name='ck_membership_position'),
    )
