"""Product Store — CRUD semantics, id lifecycle and isolation of stored state.

Invariants under test:
    - create → get returns the payload's five fields plus a fresh id
    - delete → get raises NotFoundError
    - update keeps id and position, replaces every field (no merge)
    - unknown keys are dropped, ids never collide
"""

import itertools
from dataclasses import FrozenInstanceError

import pytest

from app.core.domain_types import ProductId
from app.core.errors import NotFoundError, ValidationError
from app.core.product_query import ProductQuery
from app.services.product_store import (
    SAMPLE_PRODUCTS, InMemoryProductStore, create_product_store,
)


def _payload(**overrides) -> dict:
    payload = {
        "name": "Phone",
        "description": "Smartphone",
        "price": 499.99,
        "category": "electronics",
        "inStock": True,
    }
    payload.update(overrides)
    return payload


def _counter_ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def store() -> InMemoryProductStore:
    return InMemoryProductStore(id_factory=_counter_ids(), seed=SAMPLE_PRODUCTS)


# ─── create / get ────────────────────────────────────────────────

async def test_create_then_get_returns_payload_plus_id(store):
    created = await store.create(_payload())
    fetched = await store.get(created.id)
    assert fetched == created
    assert created.id == "id-4"
    assert (fetched.name, fetched.description, fetched.price) == (
        "Phone", "Smartphone", 499.99,
    )
    assert (fetched.category, fetched.in_stock) == ("electronics", True)


async def test_create_appends_to_end(store):
    created = await store.create(_payload())
    page = await store.list_products(ProductQuery())
    assert page.data[-1].id == created.id
    assert page.total == 4


async def test_create_drops_unknown_fields_and_client_id(store):
    created = await store.create(_payload(id="client-chosen", color="red"))
    assert created.id != "client-chosen"
    assert not hasattr(created, "color")


async def test_create_rejects_invalid_payload_without_storing(store):
    with pytest.raises(ValidationError):
        await store.create(_payload(price=-5))
    assert (await store.count_by_category()).total == 3


async def test_create_does_not_mutate_payload(store):
    payload = _payload()
    snapshot = dict(payload)
    await store.create(payload)
    assert payload == snapshot


async def test_get_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError) as exc_info:
        await store.get(ProductId("missing"))
    assert exc_info.value.message == "Product not found"


# ─── update ──────────────────────────────────────────────────────

async def test_update_preserves_id_and_position(store):
    page = await store.list_products(ProductQuery())
    target = page.data[1]

    updated = await store.update(target.id, _payload(name="Travel Mug"))

    assert updated.id == target.id
    after = await store.list_products(ProductQuery())
    assert after.data[1].id == target.id
    assert after.data[1].name == "Travel Mug"


async def test_update_is_full_replacement(store):
    target = (await store.list_products(ProductQuery())).data[0]
    updated = await store.update(
        target.id,
        _payload(name="Tablet", description="", price=0, category="misc", inStock=False),
    )
    assert updated.description == ""
    assert updated.price == 0
    assert updated.category == "misc"
    assert updated.in_stock is False


async def test_update_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError):
        await store.update(ProductId("missing"), _payload())


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_returns_removed_product(store):
    target = (await store.list_products(ProductQuery())).data[0]
    removed = await store.delete(target.id)
    assert removed == target


async def test_delete_then_get_raises_not_found(store):
    created = await store.create(_payload())
    await store.delete(created.id)
    with pytest.raises(NotFoundError):
        await store.get(created.id)


async def test_delete_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError):
        await store.delete(ProductId("missing"))


# ─── ids ─────────────────────────────────────────────────────────

async def test_colliding_id_factory_is_retried():
    ids = iter(["dup", "dup", "dup", "fresh"])
    store = InMemoryProductStore(id_factory=lambda: next(ids))
    first = await store.create(_payload())
    second = await store.create(_payload())
    assert (first.id, second.id) == ("dup", "fresh")


async def test_sequential_creates_never_collide():
    store = create_product_store(seed_samples=False)
    created = [await store.create(_payload()) for _ in range(50)]
    assert len({p.id for p in created}) == 50


# ─── stats / isolation ───────────────────────────────────────────

async def test_count_by_category_on_seeded_store(store):
    stats = await store.count_by_category()
    assert stats.total == 3
    assert stats.counts == {"electronics": 1, "home": 1, "stationery": 1}


async def test_returned_products_are_frozen(store):
    product = (await store.list_products(ProductQuery())).data[0]
    with pytest.raises(FrozenInstanceError):
        product.name = "Hacked"


async def test_mutating_listed_data_does_not_touch_store(store):
    page = await store.list_products(ProductQuery())
    page.data.clear()
    assert (await store.list_products(ProductQuery())).total == 3


def test_unseeded_factory_starts_empty():
    store = create_product_store(seed_samples=False)
    assert store._products == []
