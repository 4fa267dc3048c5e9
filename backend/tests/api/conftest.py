"""API test fixtures — app built per test with explicit settings and store.

Invariants:
    - Every test gets a fresh seeded store with deterministic ids (id-1, id-2, id-3)
    - `client` sends the valid API key header; `anon_client` sends none
"""

import itertools

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import create_app
from app.services.product_store import SAMPLE_PRODUCTS, InMemoryProductStore

API_KEY = "test-secret"


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, api_key=API_KEY, log_format="text")


@pytest.fixture
def store() -> InMemoryProductStore:
    counter = itertools.count(1)
    return InMemoryProductStore(
        id_factory=lambda: f"id-{next(counter)}", seed=SAMPLE_PRODUCTS,
    )


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"x-api-key": API_KEY},
    ) as c:
        yield c


@pytest.fixture
async def anon_client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
