"""
Tests for authentication endpoints.
"""


def test_signup(client):
    """Test user signup."""
    response = client.post(
        "/api/auth/signup",
        json={
            "name": "Alex",
            "email": "alex@example.com",
            "password": "testpassword123"
        }
    )
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Alex"
    assert "password" not in body


def test_signup_duplicate_email(client):
    """Contact identifier must be unique."""
    payload = {"name": "Alex", "email": "alex@example.com", "password": "x"}
    client.post("/api/auth/signup", json=payload)
    response = client.post("/api/auth/signup", json={**payload, "name": "Other"})
    assert response.status_code == 409
    assert response.json()["details"]["code"] == "EmailAlreadyRegistered"


def test_login(client):
    """Test user login."""
    client.post(
        "/api/auth/signup",
        json={"name": "Sam", "email": "sam@example.com", "password": "testpassword123"}
    )

    response = client.post(
        "/api/auth/login",
        json={"email": "sam@example.com", "password": "anything"}
    )
    assert response.status_code == 200
    assert "access_token" in response.json()


def test_login_unknown_email(client):
    """Test login with an email nobody registered."""
    response = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "wrongpassword"}
    )
    assert response.status_code == 404
    assert response.json()["error"] == "No user found with this email"


def test_me_requires_session(client):
    response = client.get("/api/users/me")
    assert response.status_code == 401


def test_me_resolves_session_user(client, login):
    headers, user_id = login("Robin")
    response = client.get("/api/users/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["id"] == user_id


def test_each_request_uses_its_own_session(client, login):
    headers_a, user_a = login("Alex")
    headers_b, user_b = login("Sam")
    assert client.get("/api/users/me", headers=headers_a).json()["id"] == user_a
    assert client.get("/api/users/me", headers=headers_b).json()["id"] == user_b


def test_logout(client):
    client.post("/api/auth/signup", json={"name": "Kim", "email": "kim@example.com", "password": "x"})
    token = client.post("/api/auth/login", json={"email": "kim@example.com"}).json()["access_token"]

    assert client.post("/api/auth/logout", params={"token": token}).status_code == 200
    assert client.post("/api/auth/logout", params={"token": "garbage"}).status_code == 401
