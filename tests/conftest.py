"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from starter.config import Settings
from starter.main import create_app


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway work directory."""
    return Settings(_env_file=None, work_dir=str(tmp_path / "data"))


@pytest.fixture
def app(settings):
    """Application built from the test settings."""
    return create_app(settings)


@pytest.fixture
def client(app):
    """Create a test client; entering it runs application startup."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(client):
    """Database session on the same store the client writes to."""
    session = client.app.state.context.session_factory()
    yield session
    session.close()


@pytest.fixture
def registered_user(client):
    """Register a user and return the request body and response JSON."""
    body = {"email": "test@example.com", "password": "testpass123", "name": "Test User"}
    response = client.post("/api/user", json=body)
    assert response.status_code == 200
    return body, response.json()
