"""Pytest configuration and fixtures."""

import os

# Cheapest bcrypt cost so hashing does not dominate the suite. Must be set
# before the application modules read their settings.
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from src.api.dependencies import get_user_storage  # noqa: E402
from src.main import app  # noqa: E402
from src.services.storage import InMemoryUserStorage  # noqa: E402

ANN = {"name": "Ann", "email": "a@x.com", "password": "secret"}


@pytest.fixture
def storage():
    """Fresh in-memory storage document for each test."""
    return InMemoryUserStorage()


@pytest.fixture
def client(storage):
    """Create a test client with the storage dependency overridden."""
    app.dependency_overrides[get_user_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def ann(client):
    """Create Ann and return the created user as returned by the API."""
    response = client.post("/users", json=ANN)
    assert response.status_code == 201
    return response.json()
