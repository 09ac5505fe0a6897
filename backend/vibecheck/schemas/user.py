"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    """Base user schema."""
    name: str
    email: EmailStr


class UserCreate(UserBase):
    """Schema for user creation."""
    password: str  # Accepted for form parity, never stored or checked


class UserResponse(UserBase):
    """Schema for user response."""
    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: Optional[str] = None


class Token(BaseModel):
    """Schema for session token response."""
    access_token: str
    token_type: str = "bearer"
    user_id: int
