"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Registered, logged-in users
"""

import os

# Settings are read at import time, so point them at test values first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.models import JobApplication, User  # noqa: F401  Register models on Base.metadata
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def register_and_login(client, email: str, password: str = "secret1") -> dict:
    """Register a user through the API and return Authorization headers for them."""
    response = client.post("/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201, response.text

    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text

    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Authorization headers for the primary test user"""
    return register_and_login(client, "owner@example.com")


@pytest.fixture
def other_auth_headers(client):
    """Authorization headers for a second, unrelated user"""
    return register_and_login(client, "intruder@example.com")


@pytest.fixture
def sample_job_data():
    """Sample job application payload"""
    return {
        "companyName": "Acme Corp",
        "jobTitle": "Backend Engineer",
        "status": "Applied"
    }
