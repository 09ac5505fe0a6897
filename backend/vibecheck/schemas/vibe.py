"""
Pydantic schemas for Vibe entity.
"""
from pydantic import BaseModel, ConfigDict, Field, StrictInt
from typing import List, Optional, Union
from datetime import date, datetime


class VibeCreate(BaseModel):
    """
    Schema for vibe submission.
    Mood range and note length are checked by the submission service so the
    caller gets InvalidMood / NoteTooLong instead of a generic 422.
    ``date`` is only sent when replaying a vibe captured offline.
    """
    model_config = ConfigDict(populate_by_name=True)

    mood: Union[StrictInt, float]
    note: Optional[str] = None
    vibe_date: Optional[date] = Field(default=None, alias="date")


class VibeResponse(BaseModel):
    """Schema for vibe response."""
    id: int
    relationship_id: int
    user_id: int
    mood: int
    note: Optional[str] = None
    date: date
    created_at: datetime

    class Config:
        from_attributes = True


class VibeSlot(BaseModel):
    """One user's vibe for a day."""
    mood: int
    note: Optional[str] = None


class DayVibes(BaseModel):
    """Both partners' vibes for one calendar date."""
    date: date
    userA: Optional[VibeSlot] = None
    userB: Optional[VibeSlot] = None


class VibeUser(BaseModel):
    """Relationship member as shown next to the timeline."""
    id: int
    name: str


class Insight(BaseModel):
    """Trend message derived from recent moods."""
    kind: str
    message: str
    average_a: float
    average_b: float


class VibesResponse(BaseModel):
    """Seven-day two-user timeline."""
    vibes: List[DayVibes]
    users: List[VibeUser]
    insight: Optional[Insight] = None
