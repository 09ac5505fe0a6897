"""
Vibe submission service: one mood + note per user per relationship per day.
"""
import logging
from datetime import date, timedelta
from typing import Any, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from vibecheck.core.config import settings
from vibecheck.core.exceptions import DuplicateSubmission, InvalidMood, InvalidVibeDate, NoteTooLong
from vibecheck.core.utils import local_today
from vibecheck.models.vibe import NOTE_MAX_LENGTH, Vibe

logger = logging.getLogger(__name__)

MOOD_MIN = 1
MOOD_MAX = 5


def validate_vibe(mood: Any, note: Optional[str] = None) -> None:
    """Validate mood first, then note length."""
    if isinstance(mood, bool) or not isinstance(mood, int) or not MOOD_MIN <= mood <= MOOD_MAX:
        raise InvalidMood()

    if note is not None and len(note) > NOTE_MAX_LENGTH:
        raise NoteTooLong()


def resolve_vibe_date(vibe_date: Optional[date], today: date) -> date:
    """
    Date a submission is filed under.
    Live submissions use today; offline replays carry their capture date,
    which may be up to OFFLINE_REPLAY_MAX_DAYS in the past but never in the future.
    """
    if vibe_date is None:
        return today

    if vibe_date > today:
        raise InvalidVibeDate("Vibe date cannot be in the future")
    if vibe_date < today - timedelta(days=settings.OFFLINE_REPLAY_MAX_DAYS):
        raise InvalidVibeDate(
            f"Vibes older than {settings.OFFLINE_REPLAY_MAX_DAYS} days can no longer be submitted"
        )
    return vibe_date


def get_vibe_for_date(
    relationship_id: int,
    user_id: int,
    vibe_date: date,
    db: Session
) -> Optional[Vibe]:
    """Get the vibe a user filed on a specific date, if any."""
    return db.query(Vibe).filter(
        Vibe.relationship_id == relationship_id,
        Vibe.date == vibe_date,
        Vibe.user_id == user_id
    ).first()


def submit_vibe(
    relationship_id: int,
    user_id: int,
    mood: Any,
    note: Optional[str],
    db: Session,
    vibe_date: Optional[date] = None,
    today: Optional[date] = None
) -> Vibe:
    """
    Store a vibe for the user's current calendar day.
    Raises DuplicateSubmission if one was already filed for that day; a vibe
    is never updated once submitted.
    """
    validate_vibe(mood, note)

    today = today or local_today()
    target_date = resolve_vibe_date(vibe_date, today)

    if get_vibe_for_date(relationship_id, user_id, target_date, db):
        raise DuplicateSubmission()

    vibe = Vibe(
        relationship_id=relationship_id,
        user_id=user_id,
        mood=mood,
        note=note,
        date=target_date
    )
    db.add(vibe)
    try:
        db.commit()
    except IntegrityError:
        # The unique constraint caught a concurrent submission for the same day
        db.rollback()
        logger.warning(
            f"Concurrent vibe for relationship {relationship_id}, user {user_id} on {target_date} rejected"
        )
        raise DuplicateSubmission()

    db.refresh(vibe)
    logger.info(f"User {user_id} submitted vibe {vibe.id} for {target_date} in relationship {relationship_id}")
    return vibe
