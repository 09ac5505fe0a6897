"""
Shared fixtures: in-memory SQLite schema per test and a TestClient bound to it.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from vibecheck.db.base import Base
from vibecheck.db.session import SessionLocal, engine, get_db
from vibecheck.main import app
from vibecheck.models.user import User
import vibecheck.models  # noqa: F401


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Create users directly in the store."""
    def _make_user(name: str, email: str = None) -> User:
        user = User(name=name, email=email or f"{name.lower()}@example.com")
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def login(client):
    """Sign up through the API and return bearer headers plus the user id."""
    def _login(name: str, email: str = None):
        email = email or f"{name.lower()}@example.com"
        client.post("/api/auth/signup", json={"name": name, "email": email, "password": "irrelevant"})
        response = client.post("/api/auth/login", json={"email": email})
        body = response.json()
        return {"Authorization": f"Bearer {body['access_token']}"}, body["user_id"]
    return _login
