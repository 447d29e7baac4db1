# app/repos/product_repo.py
import copy
import json
import threading
from abc import ABC, abstractmethod
from typing import Dict, List

import redis
from pydantic import ValidationError
from redis.exceptions import RedisError

from app.domain.errors import ProductNotFound, StorageUnavailable
from app.domain.schemas import Product
from app.utils.settings import REDIS_URL, REDIS_SOCKET_TIMEOUT, PRODUCT_HASH_KEY
from app.utils.logging import get_logger

logger = get_logger(__name__)

DELETE_CONFIRMATION = "product removed !!"


class ProductStore(ABC):
    """
    Repozytorium klucz-wartosc dla produktow (klucz = product.id).
    save to upsert, delete jest idempotentny,
    find_by_id rzuca ProductNotFound gdy brak rekordu.
    """

    name = "abstract"

    @abstractmethod
    def save(self, product: Product) -> Product: ...

    @abstractmethod
    def find_all(self) -> List[Product]: ...

    @abstractmethod
    def find_by_id(self, product_id: int) -> Product: ...

    @abstractmethod
    def delete(self, product_id: int) -> str: ...

    @abstractmethod
    def ping(self) -> bool: ...


class RedisProductStore(ProductStore):
    """
    Wszystkie produkty w jednym hashu:
    HSET Product <id> <json>
    """

    name = "redis"

    def __init__(
        self,
        client: redis.Redis | None = None,
        url: str | None = None,
        hash_key: str | None = None,
    ):
        #klient redis ma wlasny pool polaczen, bezpieczny dla wielu watkow
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
            socket_timeout=REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=REDIS_SOCKET_TIMEOUT,
        )
        self.hash_key = hash_key or PRODUCT_HASH_KEY

    def _decode(self, raw: str) -> Product:
        try:
            return Product.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.error(f"Corrupt value in hash {self.hash_key}: {e}")
            raise StorageUnavailable(f"Stored product could not be decoded: {e}") from e

    def save(self, product: Product) -> Product:
        logger.info(f"HSET {self.hash_key} {product.id}")
        try:
            self.redis.hset(self.hash_key, str(product.id), product.model_dump_json())
        except RedisError as e:
            logger.error(f"Redis save failed for product {product.id}: {e}")
            raise StorageUnavailable(str(e)) from e
        return product

    def find_all(self) -> List[Product]:
        logger.info(f"HGETALL {self.hash_key}")
        try:
            values = self.redis.hgetall(self.hash_key)
        except RedisError as e:
            logger.error(f"Redis scan failed: {e}")
            raise StorageUnavailable(str(e)) from e
        return [self._decode(raw) for raw in values.values()]

    def find_by_id(self, product_id: int) -> Product:
        logger.info(f"HGET {self.hash_key} {product_id}")
        try:
            raw = self.redis.hget(self.hash_key, str(product_id))
        except RedisError as e:
            logger.error(f"Redis lookup failed for product {product_id}: {e}")
            raise StorageUnavailable(str(e)) from e

        if raw is None:
            raise ProductNotFound(product_id)
        return self._decode(raw)

    def delete(self, product_id: int) -> str:
        logger.info(f"HDEL {self.hash_key} {product_id}")
        try:
            removed = self.redis.hdel(self.hash_key, str(product_id))
        except RedisError as e:
            logger.error(f"Redis delete failed for product {product_id}: {e}")
            raise StorageUnavailable(str(e)) from e

        if not removed:
            logger.info(f"Product {product_id} was not stored, nothing to delete")
        return DELETE_CONFIRMATION

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except RedisError as e:
            raise StorageUnavailable(str(e)) from e


class InMemoryProductStore(ProductStore):
    """Magazyn w pamieci procesu (lokalne uruchomienie i testy)."""

    name = "memory"

    def __init__(self):
        self._products: Dict[int, dict] = {}
        self._lock = threading.Lock()

    def save(self, product: Product) -> Product:
        logger.info(f"Saving product {product.id} in memory")
        with self._lock:
            self._products[product.id] = copy.deepcopy(product.model_dump())
        return product

    def find_all(self) -> List[Product]:
        with self._lock:
            snapshot = list(self._products.values())
        return [Product.model_validate(copy.deepcopy(data)) for data in snapshot]

    def find_by_id(self, product_id: int) -> Product:
        with self._lock:
            data = self._products.get(product_id)
        if data is None:
            raise ProductNotFound(product_id)
        return Product.model_validate(copy.deepcopy(data))

    def delete(self, product_id: int) -> str:
        with self._lock:
            self._products.pop(product_id, None)
        return DELETE_CONFIRMATION

    def ping(self) -> bool:
        return True
