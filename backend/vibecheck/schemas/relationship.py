"""
Pydantic schemas for Relationship entity.
"""
from pydantic import BaseModel
from typing import List
from datetime import datetime


class RelationshipCreated(BaseModel):
    """Schema returned when a relationship is created."""
    relationship_id: int
    code: str


class RelationshipJoin(BaseModel):
    """Schema for joining with an invite code."""
    code: str


class RelationshipJoined(BaseModel):
    """Schema returned after joining."""
    relationship_id: int


class MemberResponse(BaseModel):
    """Schema for a relationship member."""
    id: int
    name: str
    position: int


class RelationshipResponse(BaseModel):
    """Schema for relationship response."""
    id: int
    code: str
    created_at: datetime

    class Config:
        from_attributes = True


class RelationshipDetailResponse(RelationshipResponse):
    """Schema for detailed relationship response with members."""
    members: List[MemberResponse] = []
