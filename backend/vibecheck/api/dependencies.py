"""
Request-scoped session resolution.

Each request carries its own bearer token; the current user is resolved per
request and handed to the route, never stored globally.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from vibecheck.core.security import decode_access_token
from vibecheck.db.session import get_db
from vibecheck.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token into the acting user."""
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate session",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized

    payload = decode_access_token(credentials.credentials)
    if not payload or "user_id" not in payload:
        raise unauthorized

    user = db.get(User, payload["user_id"])
    if not user:
        raise unauthorized
    return user
