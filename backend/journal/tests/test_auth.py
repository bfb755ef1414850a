"""
Tests for authentication and account endpoints.
"""
from journal.core.config import settings


def test_register(client):
    """Test user registration."""
    response = client.post(
        "/api/auth/register",
        json={"username": "testuser", "password": "testpassword123"}
    )
    assert response.status_code == 201
    assert response.json()["username"] == "testuser"
    assert "hashed_password" not in response.json()


def test_register_duplicate_username(client):
    client.post("/api/auth/register", json={"username": "testuser", "password": "testpassword123"})
    response = client.post("/api/auth/register", json={"username": "testuser", "password": "otherpassword"})
    assert response.status_code == 409


def test_register_disabled(client, monkeypatch):
    monkeypatch.setattr(settings, "ENABLE_REGISTRATION", False)
    response = client.post("/api/auth/register", json={"username": "testuser", "password": "testpassword123"})
    assert response.status_code == 403


def test_login(client):
    """Test user login."""
    client.post(
        "/api/auth/register",
        json={"username": "testuser2", "password": "testpassword123"}
    )

    response = client.post(
        "/api/auth/login",
        json={"username": "testuser2", "password": "testpassword123"}
    )
    assert response.status_code == 200
    body = response.json()
    assert "access_token" in body
    assert body["token_type"] == "bearer"
    assert body["user"]["username"] == "testuser2"


def test_login_invalid_credentials(client):
    """Test login with invalid credentials."""
    response = client.post(
        "/api/auth/login",
        json={"username": "nonexistent", "password": "wrongpassword"}
    )
    assert response.status_code == 401


def test_me_requires_token(client):
    assert client.get("/api/users/me").status_code == 401
    response = client.get("/api/users/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_me(client, auth_headers):
    response = client.get("/api/users/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["username"] == "alice"


def test_change_username(client, auth_headers, login_as):
    login_as("bob", "bobpassword456")
    response = client.put("/api/users/me/username", json={"username": "bob"}, headers=auth_headers)
    assert response.status_code == 409

    response = client.put("/api/users/me/username", json={"username": "alice2"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["username"] == "alice2"


def test_change_password(client, auth_headers):
    response = client.put(
        "/api/users/me/password",
        json={"old_password": "wrong", "new_password": "newpassword1"},
        headers=auth_headers,
    )
    assert response.status_code == 401

    response = client.put(
        "/api/users/me/password",
        json={"old_password": "alicepassword123", "new_password": "newpassword1"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    login = client.post("/api/auth/login", json={"username": "alice", "password": "newpassword1"})
    assert login.status_code == 200


def test_delete_account(client, auth_headers):
    response = client.delete("/api/users/me", headers=auth_headers)
    assert response.status_code == 204

    assert client.get("/api/users/me", headers=auth_headers).status_code == 401
    login = client.post("/api/auth/login", json={"username": "alice", "password": "alicepassword123"})
    assert login.status_code == 401
