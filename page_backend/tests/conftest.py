import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.api.repositories import InMemoryPageStore


@pytest.fixture
def store():
    return InMemoryPageStore()


@pytest.fixture
def client(store):
    """TestClient over a fresh app so every test starts from an empty store."""
    return TestClient(create_app(store=store))
