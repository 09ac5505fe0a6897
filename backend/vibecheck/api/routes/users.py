"""
User routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from vibecheck.db.session import get_db
from vibecheck.schemas.user import UserResponse
from vibecheck.schemas.relationship import RelationshipResponse
from vibecheck.models.user import User
from vibecheck.api.dependencies import get_current_user
from vibecheck.services import pairing_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.get("/me/relationships", response_model=List[RelationshipResponse])
async def list_my_relationships(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List relationships the current user belongs to, newest first."""
    return pairing_service.list_relationships_for_user(current_user.id, db)
