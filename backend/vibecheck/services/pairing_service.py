"""
Pairing service for invite-code relationships.

A relationship is created by one user, who receives a short invite code,
and joined by exactly one partner holding that code.
"""
import logging
import secrets
import string
from typing import Callable, List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from vibecheck.core.config import settings
from vibecheck.core.exceptions import (
    AlreadyMember, InviteCodeUnavailable, NotAMember, RelationshipFull, RelationshipNotFound,
)
from vibecheck.models.relationship import MAX_MEMBERS, Membership, Relationship

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_invite_code(length: Optional[int] = None) -> str:
    """Generate a short uppercase alphanumeric invite code."""
    length = length or settings.INVITE_CODE_LENGTH
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def normalize_code(code: str) -> str:
    return code.strip().upper()


def get_relationship_by_code(code: str, db: Session) -> Optional[Relationship]:
    return db.query(Relationship).filter(Relationship.code == normalize_code(code)).first()


def create_relationship(
    user_id: int,
    db: Session,
    code_factory: Callable[[], str] = generate_invite_code
) -> Tuple[Relationship, str]:
    """
    Create a relationship with a fresh invite code and add the caller as its first member.
    Codes already taken are regenerated up to INVITE_CODE_MAX_ATTEMPTS times.
    """
    for attempt in range(1, settings.INVITE_CODE_MAX_ATTEMPTS + 1):
        code = normalize_code(code_factory())
        if get_relationship_by_code(code, db):
            logger.info(f"Invite code collision on attempt {attempt}, regenerating")
            continue

        relationship = Relationship(code=code)
        db.add(relationship)
        try:
            db.flush()
        except IntegrityError:
            # Another request claimed the same code between the lookup and the insert
            db.rollback()
            logger.info(f"Invite code claimed concurrently on attempt {attempt}, regenerating")
            continue

        db.add(Membership(relationship_id=relationship.id, user_id=user_id, position=1))
        db.commit()
        db.refresh(relationship)
        logger.info(f"User {user_id} created relationship {relationship.id}")
        return relationship, code

    logger.error(f"Gave up generating an invite code after {settings.INVITE_CODE_MAX_ATTEMPTS} attempts")
    raise InviteCodeUnavailable()


def get_members(relationship_id: int, db: Session) -> List[Membership]:
    """Memberships in position order (creator first)."""
    return db.query(Membership).filter(
        Membership.relationship_id == relationship_id
    ).order_by(Membership.position).all()


def get_membership(relationship_id: int, user_id: int, db: Session) -> Optional[Membership]:
    return db.query(Membership).filter(
        Membership.relationship_id == relationship_id,
        Membership.user_id == user_id
    ).first()


def _check_can_join(relationship: Relationship, user_id: int, db: Session) -> int:
    """Return the position the user would take, or raise why they cannot join."""
    if get_membership(relationship.id, user_id, db):
        raise AlreadyMember()

    member_count = db.query(Membership).filter(
        Membership.relationship_id == relationship.id
    ).count()
    if member_count >= MAX_MEMBERS:
        raise RelationshipFull()

    return member_count + 1


def join_relationship(user_id: int, code: str, db: Session) -> int:
    """Join the relationship holding ``code`` as its second member."""
    relationship = get_relationship_by_code(code, db)
    if not relationship:
        raise RelationshipNotFound()

    position = _check_can_join(relationship, user_id, db)

    db.add(Membership(relationship_id=relationship.id, user_id=user_id, position=position))
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent join; report what the store now says
        db.rollback()
        _check_can_join(relationship, user_id, db)
        logger.error(f"Membership insert for user {user_id} in relationship {relationship.id} rejected by the store")
        raise

    logger.info(f"User {user_id} joined relationship {relationship.id} at position {position}")
    return relationship.id


def require_membership(relationship_id: int, user_id: int, db: Session) -> Relationship:
    """Check if user has access to relationship."""
    relationship = db.get(Relationship, relationship_id)
    if not relationship:
        raise RelationshipNotFound("Relationship not found")

    if not get_membership(relationship_id, user_id, db):
        raise NotAMember()

    return relationship


def list_relationships_for_user(user_id: int, db: Session) -> List[Relationship]:
    return db.query(Relationship).join(Membership).filter(
        Membership.user_id == user_id
    ).order_by(Relationship.created_at.desc(), Relationship.id.desc()).all()
