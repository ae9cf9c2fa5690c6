"""
Pytest configuration and fixtures.
"""
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.main import create_app

API_KEY = "test-key"


@pytest.fixture
def settings():
    return Settings(api_key=API_KEY, app_env="production", log_level="INFO", _env_file=None)


@pytest.fixture
def store():
    """Fresh seeded store per test."""
    return ProductStore.seeded()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"X-API-Key": API_KEY}


@pytest.fixture
def product_data():
    """Valid create/update payload."""
    return {
        "name": "Desk Lamp",
        "description": "LED lamp with adjustable arm",
        "price": 45.5,
        "category": "Home",
        "inStock": True,
    }
