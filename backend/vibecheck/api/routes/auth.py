"""
Authentication routes for signup, login, and logout.

Passwords are accepted but not verified: login only issues a session token
for an existing email.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from vibecheck.db.session import get_db
from vibecheck.schemas.user import UserCreate, UserLogin, Token, UserResponse
from vibecheck.models.user import User
from vibecheck.core.exceptions import EmailAlreadyRegistered, UserNotFound
from vibecheck.core.security import create_access_token, decode_access_token
from vibecheck.core.utils import format_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user."""
    existing_user = db.query(User).filter(User.email == user_data.email).first()
    if existing_user:
        raise EmailAlreadyRegistered()

    new_user = User(
        name=user_data.name,
        email=user_data.email
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info(f"Registered user {new_user.id}")
    return new_user


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login and get a session token."""
    user = db.query(User).filter(User.email == credentials.email).first()
    if not user:
        raise UserNotFound()

    access_token = create_access_token(data={"sub": user.email, "user_id": user.id})

    return {"access_token": access_token, "token_type": "bearer", "user_id": user.id}


@router.post("/logout")
async def logout(token: str):
    """Logout (client-side token removal)."""
    decoded = decode_access_token(token)
    if not decoded:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
    return format_response({"success": True}, message="Logged out successfully")
