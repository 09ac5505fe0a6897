"""
Relationship pairing routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from vibecheck.db.session import get_db
from vibecheck.models.user import User
from vibecheck.schemas.relationship import (
    RelationshipCreated, RelationshipJoin, RelationshipJoined,
    RelationshipDetailResponse, MemberResponse
)
from vibecheck.api.dependencies import get_current_user
from vibecheck.services import pairing_service

router = APIRouter(prefix="/relationships", tags=["relationships"])


@router.post("", response_model=RelationshipCreated, status_code=status.HTTP_201_CREATED)
async def create_relationship(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a relationship and get its invite code."""
    relationship, code = pairing_service.create_relationship(current_user.id, db)
    return RelationshipCreated(relationship_id=relationship.id, code=code)


@router.post("/join", response_model=RelationshipJoined)
async def join_relationship(
    join: RelationshipJoin,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Join a relationship using an invite code."""
    relationship_id = pairing_service.join_relationship(current_user.id, join.code, db)
    return RelationshipJoined(relationship_id=relationship_id)


@router.get("/{relationship_id}", response_model=RelationshipDetailResponse)
async def get_relationship(
    relationship_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get relationship details with members in position order."""
    relationship = pairing_service.require_membership(relationship_id, current_user.id, db)

    members = [
        MemberResponse(id=m.user.id, name=m.user.name, position=m.position)
        for m in pairing_service.get_members(relationship_id, db)
    ]

    return RelationshipDetailResponse(
        id=relationship.id,
        code=relationship.code,
        created_at=relationship.created_at,
        members=members
    )
