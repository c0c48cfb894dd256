"""
Pytest configuration: settings, application and client fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from lockbox.config import Settings
from lockbox_api.main import create_app

USER_NAME = "alice"
USER_PASSWORD = "s3cret"


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir):
    """Settings pointing at a per-test upload directory."""
    return Settings(
        _env_file=None,
        SESSION_SECRET="test-secret",
        USER_NAME=USER_NAME,
        USER_PASSWORD=USER_PASSWORD,
        UPLOAD_DIR=str(upload_dir),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Anonymous test client."""
    return TestClient(app)


@pytest.fixture
def auth_client(client):
    """Test client with a logged-in session."""
    response = client.post(
        "/login",
        data={"username": USER_NAME, "password": USER_PASSWORD},
        follow_redirects=False,
    )
    assert response.status_code == 302
    return client
