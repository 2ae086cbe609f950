# File: tests/test_auth.py

from fastapi.testclient import TestClient

from conftest import DEFAULT_PASSWORD, register
from unpacked.core.config import settings
from unpacked.core.security import create_session_token
from unpacked.main import app
from unpacked.models.user import User


def test_health_endpoint(anon_client):
    resp = anon_client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_register_starts_a_session(anon_client):
    user = register(anon_client, "carol@example.com", name="Carol")
    assert user["name"] == "Carol"
    assert user["email"] == "carol@example.com"
    assert user["hasPassword"] is True
    assert "passwordHash" not in user

    me = anon_client.get("/api/v1/auth/me")
    assert me.status_code == 200
    assert me.json()["id"] == user["id"]


def test_register_duplicate_email_conflicts(anon_client):
    register(anon_client, "dup@example.com")
    other = TestClient(app)
    resp = other.post(
        "/api/v1/auth/register",
        json={"name": "Again", "email": "DUP@example.com", "password": DEFAULT_PASSWORD},
    )
    assert resp.status_code == 409
    assert resp.json() == {"error": "User already exists"}


def test_register_rejects_short_password(anon_client):
    resp = anon_client.post(
        "/api/v1/auth/register",
        json={"name": "Short", "email": "short@example.com", "password": "abc"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Password must be at least 6 characters long"


def test_register_rejects_unknown_fields(anon_client):
    resp = anon_client.post(
        "/api/v1/auth/register",
        json={
            "name": "Extra",
            "email": "extra@example.com",
            "password": DEFAULT_PASSWORD,
            "isAdmin": True,
        },
    )
    assert resp.status_code == 400
    assert "isAdmin" in resp.json()["error"]


def test_login_and_logout(anon_client):
    register(anon_client, "dave@example.com")

    fresh = TestClient(app)
    assert fresh.get("/api/v1/auth/me").status_code == 401

    resp = fresh.post(
        "/api/v1/auth/login",
        json={"email": "dave@example.com", "password": DEFAULT_PASSWORD},
    )
    assert resp.status_code == 200
    assert settings.session_cookie_name in resp.cookies
    assert fresh.get("/api/v1/auth/me").status_code == 200

    fresh.post("/api/v1/auth/logout")
    fresh.cookies.clear()
    assert fresh.get("/api/v1/auth/me").status_code == 401


def test_login_with_wrong_password(anon_client):
    register(anon_client, "erin@example.com")
    resp = TestClient(app).post(
        "/api/v1/auth/login",
        json={"email": "erin@example.com", "password": "not-the-password"},
    )
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid email or password"}


def test_unauthenticated_requests_get_json_error(anon_client):
    resp = anon_client.get("/api/v1/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}


def test_tampered_session_cookie_is_anonymous(anon_client):
    anon_client.cookies.set(settings.session_cookie_name, "not-a-jwt")
    assert anon_client.get("/api/v1/auth/me").status_code == 401


def _passwordless_client(db) -> TestClient:
    user = User(email="oauth@example.com", name="OAuth Only")
    db.add(user)
    db.commit()
    client = TestClient(app)
    client.cookies.set(settings.session_cookie_name, create_session_token(user.id))
    return client


def test_check_password_for_oauth_only_account(db):
    client = _passwordless_client(db)

    resp = client.get("/api/v1/auth/check-password")
    assert resp.status_code == 200
    assert resp.json() == {"hasPassword": False}


def test_set_password_then_login(db):
    client = _passwordless_client(db)

    resp = client.post("/api/v1/auth/set-password", json={"password": "brand-new"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Password set successfully"}
    assert client.get("/api/v1/auth/check-password").json() == {"hasPassword": True}

    login = TestClient(app).post(
        "/api/v1/auth/login",
        json={"email": "oauth@example.com", "password": "brand-new"},
    )
    assert login.status_code == 200


def test_set_password_refuses_to_overwrite(alice):
    resp = alice.post("/api/v1/auth/set-password", json={"password": "another-one"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Password is already set"}


def test_passwordless_account_cannot_log_in(db):
    _passwordless_client(db)
    resp = TestClient(app).post(
        "/api/v1/auth/login",
        json={"email": "oauth@example.com", "password": "anything"},
    )
    assert resp.status_code == 401
