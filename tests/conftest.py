# File: tests/conftest.py

"""
Shared fixtures for the API tests.

The app is pointed at an in-memory SQLite database (one connection shared
through StaticPool) and a temporary upload directory before it is imported.
To run:
    pytest -q
"""

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_BACKEND"] = "local"
os.environ["MEDIA_ROOT"] = tempfile.mkdtemp(prefix="unpacked-media-")
os.environ["SECRET_KEY"] = "test-secret"
os.environ["PUBLIC_BASE_URL"] = "http://testserver"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from unpacked.api.deps import get_db, get_image_storage
from unpacked.main import app
from unpacked.models.base import Base
from unpacked.services.storage import LocalImageStorage

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def _database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture(autouse=True)
def _overrides(upload_dir):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_storage] = lambda: LocalImageStorage(upload_dir)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    return TestClient(app)


def register(client: TestClient, email: str, name: str = "Test User", password: str = DEFAULT_PASSWORD):
    resp = client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def make_client():
    """Factory for clients that each carry their own logged-in session."""
    counter = {"n": 0}

    def _make(name: str = "Test User") -> TestClient:
        counter["n"] += 1
        client = TestClient(app)
        register(client, f"user{counter['n']}@example.com", name=name)
        return client

    return _make


@pytest.fixture
def alice(make_client):
    return make_client("Alice")


@pytest.fixture
def bob(make_client):
    return make_client("Bob")


def create_outfit(client: TestClient, **overrides):
    body = {
        "name": "Test API Outfit",
        "description": "An outfit created via API test",
        "isPrivate": False,
        "tags": ["test", "api"],
        "items": [],
    }
    body.update(overrides)
    resp = client.post("/api/v1/outfits", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()
