"""
Vibe model for daily mood submissions.
"""
from sqlalchemy import Column, String, Date, ForeignKey, Integer, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from vibecheck.db.base import BaseModel

NOTE_MAX_LENGTH = 140


class Vibe(BaseModel):
    """One mood score and optional note per user per relationship per date."""
    __tablename__ = "vibes"

    relationship_id = Column(Integer, ForeignKey("relationships.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    mood = Column(Integer, nullable=False)  # 1 (awful) to 5 (great)
    note = Column(String(NOTE_MAX_LENGTH), nullable=True)
    date = Column(Date, nullable=False)

    # Relationships
    user = relationship("User", back_populates="vibes")
    # Declared last: the attribute shadows the relationship() helper in the class body
    relationship = relationship("Relationship", back_populates="vibes")

    # Unique constraint: one vibe per user per date per relationship
    __table_args__ = (
        UniqueConstraint('relationship_id', 'user_id', 'date', name='uq_relationship_user_date_vibe'),
        Index('ix_vibes_relationship_date', 'relationship_id', 'date'),
    )
