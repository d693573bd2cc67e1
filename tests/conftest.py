"""Shared fixtures: settings pointed at a fake API and an in-memory session."""

from typing import Callable

import httpx
import pytest

from food_manager.core.config import Settings
from food_manager.schemas import FoodItem
from food_manager.services.session import InMemorySessionStore, SessionContext

API = "http://api.test"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        api_base_url=API,
        session_backend="memory",
    )


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def session(session_store) -> SessionContext:
    return SessionContext(session_store)


@pytest.fixture
def logged_in(session) -> SessionContext:
    session.create("abc123", {"username": "admin", "email": "admin@restaurant.com"})
    return session


def mock_client(handler: Handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def server_record(**overrides) -> dict:
    record = {
        "id": 1,
        "name": "Dal",
        "description": "Yellow lentils",
        "veg": True,
        "unit": "Bowl",
        "price": 50,
        "is_available": True,
        "image": "https://cdn.test/dal.png",
        "ingredients": "lentils, turmeric",
    }
    record.update(overrides)
    return record


def make_item(**overrides) -> FoodItem:
    data = {
        "id": 1,
        "name": "Dal",
        "description": "Yellow lentils",
        "is_veg": True,
        "is_available": True,
        "image": "",
        "units": [{"name": "Bowl", "price": 50}],
    }
    data.update(overrides)
    return FoodItem(**data)
