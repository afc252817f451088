"""
Shared pytest fixtures for the contact intake API tests.
"""
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.security import create_access_token
from app.main import create_app

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-pw"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        jwt_secret="test-secret",
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(client, app):
    """Session on the same in-memory database the client talks to."""
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def admin_headers(settings):
    token = create_access_token(ADMIN_USERNAME, settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def contact_payload():
    return {
        "name": "Asha Verma",
        "email": "asha@example.com",
        "phone": "9876543210",
        "message": "Please call me about a home loan.",
    }
