# tests/test_product_repo.py
import json
from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.domain.errors import ProductNotFound, StorageUnavailable
from app.domain.schemas import Product
from app.repos.product_repo import (
    DELETE_CONFIRMATION,
    InMemoryProductStore,
    RedisProductStore,
)


def make_redis_store():
    client = MagicMock()
    return RedisProductStore(client=client, hash_key="Product"), client


# in-memory

def test_memory_save_then_find_by_id(store):
    p = Product(id=1, name="Pen", price=1.5)
    assert store.save(p) == p
    assert store.find_by_id(1) == p


def test_memory_upsert_keeps_one_record(store):
    store.save(Product(id=2, name="A", qty=1))
    store.save(Product(id=2, name="B"))

    products = store.find_all()
    assert len(products) == 1
    assert products[0].model_dump() == {"id": 2, "name": "B"}


def test_memory_delete_then_not_found(store):
    store.save(Product(id=3))
    assert store.delete(3) == DELETE_CONFIRMATION
    with pytest.raises(ProductNotFound):
        store.find_by_id(3)
    assert store.delete(3) == DELETE_CONFIRMATION


def test_memory_find_all_is_a_snapshot(store):
    store.save(Product(id=1))
    snapshot = store.find_all()
    store.save(Product(id=2))
    assert len(snapshot) == 1
    assert len(store.find_all()) == 2


# redis

def test_redis_save_writes_json_into_hash():
    store, client = make_redis_store()
    p = Product(id=5, name="Pen", price=1.5)

    assert store.save(p) is p
    client.hset.assert_called_once()
    key, field, value = client.hset.call_args.args
    assert key == "Product"
    assert field == "5"
    assert json.loads(value) == {"id": 5, "name": "Pen", "price": 1.5}


def test_redis_find_by_id():
    store, client = make_redis_store()
    client.hget.return_value = '{"id": 5, "name": "Pen"}'

    assert store.find_by_id(5).model_dump() == {"id": 5, "name": "Pen"}
    client.hget.assert_called_once_with("Product", "5")


def test_redis_find_by_id_missing():
    store, client = make_redis_store()
    client.hget.return_value = None

    with pytest.raises(ProductNotFound) as exc:
        store.find_by_id(42)
    assert exc.value.product_id == 42


def test_redis_find_all():
    store, client = make_redis_store()
    client.hgetall.return_value = {
        "1": '{"id": 1, "name": "A"}',
        "2": '{"id": 2, "name": "B"}',
    }

    products = sorted(store.find_all(), key=lambda p: p.id)
    assert [p.model_dump() for p in products] == [
        {"id": 1, "name": "A"},
        {"id": 2, "name": "B"},
    ]


def test_redis_delete_missing_is_idempotent():
    store, client = make_redis_store()
    client.hdel.return_value = 0

    assert store.delete(999) == DELETE_CONFIRMATION
    client.hdel.assert_called_once_with("Product", "999")


def test_redis_errors_become_storage_unavailable():
    store, client = make_redis_store()
    client.hset.side_effect = RedisConnectionError("refused")
    client.hgetall.side_effect = RedisConnectionError("refused")
    client.hget.side_effect = RedisConnectionError("refused")
    client.hdel.side_effect = RedisConnectionError("refused")
    client.ping.side_effect = RedisConnectionError("refused")

    with pytest.raises(StorageUnavailable):
        store.save(Product(id=1))
    with pytest.raises(StorageUnavailable):
        store.find_all()
    with pytest.raises(StorageUnavailable):
        store.find_by_id(1)
    with pytest.raises(StorageUnavailable):
        store.delete(1)
    with pytest.raises(StorageUnavailable):
        store.ping()


def test_redis_corrupt_value_is_storage_unavailable():
    store, client = make_redis_store()
    client.hget.return_value = "not json"

    with pytest.raises(StorageUnavailable):
        store.find_by_id(1)


def test_in_memory_is_independent_per_instance():
    a, b = InMemoryProductStore(), InMemoryProductStore()
    a.save(Product(id=1))
    assert b.find_all() == []


def test_memory_returned_product_does_not_share_nested_values(store):
    original = Product(id=9, tags=["a"], dims={"w": 1})
    store.save(original)
    original.tags.append("from-caller")

    found = store.find_by_id(9)
    found.tags.append("b")
    found.dims["w"] = 100
    store.find_all()[0].tags.append("c")

    assert store.find_by_id(9).model_dump() == {"id": 9, "tags": ["a"], "dims": {"w": 1}}


def test_product_rejects_non_finite_extras():
    with pytest.raises(ValueError):
        Product(id=1, price=float("nan"))
    with pytest.raises(ValueError):
        Product(id=1, dims={"w": float("inf")})
    assert Product(id=1, price=1.5).model_dump() == {"id": 1, "price": 1.5}
