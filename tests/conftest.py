"""
tests/conftest.py -- Shared test fixtures for RentCar.

This module provides:
  - memory_db_url(): named shared-memory SQLite URL for one test database
  - stores / auth_service / favorites: isolated service graph per test
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api_client: TestClient against the real app with two seeded cars

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because UserStore and CarStore each own an engine, and TestClient runs route
handlers in a thread pool. Plain :memory: DBs are per-connection; the named
URI format (file:name?mode=memory&cache=shared&uri=true) shares one in-memory
instance across every connection in the process.

TOKEN_SECRET must be set before any import that could build Settings.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager

TEST_SECRET = "rentcar-test-secret-0123456789abcdef0123456789abcdef"

os.environ.setdefault("TOKEN_SECRET", TEST_SECRET)

import pytest
from fastapi.testclient import TestClient

from api.limiter import limiter
from api.main import app
from auth.favorites import FavoritesManager
from auth.service import AuthService
from auth.store import UserStore
from auth.tokens import TokenIssuer
from fleet.models import Car
from fleet.store import CarStore

# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def memory_db_url(name: str) -> str:
    return f"sqlite:///file:{name}?mode=memory&cache=shared&uri=true"


def make_car(**overrides) -> Car:
    fields = {
        "brand": "Toyota",
        "model": "Corolla",
        "year": 2021,
        "price": 45.0,
        "capacity": 5,
        "transmission": "Automatic",
        "fuel_capacity": 50,
        "city": "Tirana",
    }
    fields.update(overrides)
    return Car(**fields)


# ---------------------------------------------------------------------------
# Function-scoped service graph
# ---------------------------------------------------------------------------


@pytest.fixture
def stores() -> Generator[tuple[UserStore, CarStore], None, None]:
    """Yield (user_store, car_store) sharing one fresh in-memory database."""
    url = memory_db_url(f"test_{uuid.uuid4().hex}")
    user_store = UserStore(db_url=url)
    car_store = CarStore(db_url=url)
    yield user_store, car_store
    car_store.close()
    user_store.close()


@pytest.fixture
def user_store(stores) -> UserStore:
    return stores[0]


@pytest.fixture
def car_store(stores) -> CarStore:
    return stores[1]


@pytest.fixture
def car_factory():
    """Build an unsaved Car; keyword arguments override the defaults."""
    return make_car


@pytest.fixture
def token_secret() -> str:
    return TEST_SECRET


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET)


@pytest.fixture
def auth_service(user_store, token_issuer) -> AuthService:
    return AuthService(user_store, token_issuer)


@pytest.fixture
def favorites(user_store) -> FavoritesManager:
    return FavoritesManager(user_store)


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


def _patch_lifespan(user_store: UserStore, car_store: CarStore):
    """Return an async context manager that replaces the real lifespan.

    Wires pre-created test stores into app.state so TestClient routes see
    isolated test DBs rather than the configured database.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.token_issuer = TokenIssuer(TEST_SECRET)
        app.state.user_store = user_store
        app.state.car_store = car_store
        app.state.auth_service = AuthService(user_store, app.state.token_issuer)
        app.state.favorites = FavoritesManager(user_store)
        yield

    return test_lifespan


@pytest.fixture(scope="module")
def api_client() -> Generator[tuple[TestClient, list[int]], None, None]:
    """Yield (client, car_ids) for API integration tests.

    One TestClient per test module for speed. Two cars are listed before the
    client starts so favorites tests have real car ids to point at. Rate
    limit counters are reset so each module starts with a full login budget.
    """
    url = memory_db_url(f"test_api_{uuid.uuid4().hex}")
    user_store = UserStore(db_url=url)
    car_store = CarStore(db_url=url)
    car_ids = [
        car_store.create_car(make_car()),
        car_store.create_car(make_car(brand="Volkswagen", model="Golf", city="Durres")),
    ]

    limiter.reset()
    app.router.lifespan_context = _patch_lifespan(user_store, car_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, car_ids

    car_store.close()
    user_store.close()
