"""
Daily vibe routes: submission and the seven-day timeline.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from vibecheck.db.session import get_db
from vibecheck.models.user import User
from vibecheck.schemas.vibe import VibeCreate, VibeResponse, VibesResponse
from vibecheck.api.dependencies import get_current_user
from vibecheck.services import aggregation_service, pairing_service, vibe_service

router = APIRouter(prefix="/relationships", tags=["vibes"])


@router.post("/{relationship_id}/vibes", response_model=VibeResponse, status_code=status.HTTP_201_CREATED)
async def submit_vibe(
    relationship_id: int,
    vibe_data: VibeCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Submit today's vibe (or replay one captured offline on ``date``)."""
    pairing_service.require_membership(relationship_id, current_user.id, db)

    return vibe_service.submit_vibe(
        relationship_id=relationship_id,
        user_id=current_user.id,
        mood=vibe_data.mood,
        note=vibe_data.note,
        db=db,
        vibe_date=vibe_data.vibe_date
    )


@router.get("/{relationship_id}/vibes", response_model=VibesResponse)
async def get_vibes(
    relationship_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get both partners' vibes for today and the previous six days."""
    pairing_service.require_membership(relationship_id, current_user.id, db)
    return aggregation_service.get_vibes(relationship_id, db)
