"""Pytest configuration for catalog API tests.

Every test gets a fresh in-memory SQLite database seeded with the sample
catalog through the application lifespan.
"""

import pytest
from fastapi.testclient import TestClient

from catalog_api.config import Settings
from catalog_api.main import create_app


@pytest.fixture
def settings():
    """Settings pointing at a private in-memory database."""
    return Settings(database_url="sqlite://", seed_on_startup=True, debug=False)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client with startup (table creation and seeding) applied."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def db(app, client):
    """Session on the same database the client is talking to."""
    session = app.state.database.session()
    try:
        yield session
    finally:
        session.close()
