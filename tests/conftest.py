"""Root conftest — shared test configuration and API fixtures.

Invariants:
    - MONGO_URI set before any users_api import reads settings
    - Every API test gets a fresh InMemoryUserStore injected via create_app()

Design Decisions:
    - In-memory store over a live MongoDB: route tests exercise HTTP mapping,
      the Mongo adapter is covered separately in tests/infrastructure
"""

import os

# Ensure tests never reach a real cluster
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017/?serverSelectionTimeoutMS=10")

import pytest
from httpx import ASGITransport, AsyncClient

from users_api.main import create_app
from tests.fake_store import InMemoryUserStore


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def app(store):
    return create_app(store)


@pytest.fixture
async def client(app):
    """FastAPI test client bound to the in-memory store."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
