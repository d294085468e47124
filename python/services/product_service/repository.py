"""Product storage: the repository capability set and its backends."""

from __future__ import annotations

import threading
from typing import Protocol

from loguru import logger
from pymongo.database import Database
from pymongo.errors import PyMongoError

from product_service.model import COLLECTION, Product


class StorageError(Exception):
    """The document store could not be reached or rejected a write."""


class ProductRepository(Protocol):
    def save(self, product: Product) -> Product: ...

    def find_all(self) -> list[Product]: ...


class MongoProductRepository:
    """Stores one document per product in the ``product`` collection, keyed by id."""

    def __init__(self, database: Database):
        self._collection = database[COLLECTION]

    def save(self, product: Product) -> Product:
        try:
            self._collection.replace_one(
                {"_id": product.id}, product.to_document(), upsert=True
            )
        except PyMongoError as exc:
            logger.error("Failed to save product {}: {}", product.id, exc)
            raise StorageError(f"could not save product {product.id}") from exc
        return product

    def find_all(self) -> list[Product]:
        try:
            return [Product.from_document(doc) for doc in self._collection.find()]
        except PyMongoError as exc:
            logger.error("Failed to list products: {}", exc)
            raise StorageError("could not list products") from exc


class InMemoryProductRepository:
    """Products in a dict keyed by id, guarded by a lock."""

    def __init__(self) -> None:
        self._products: dict[str, Product] = {}
        self._lock = threading.Lock()

    def save(self, product: Product) -> Product:
        with self._lock:
            self._products[product.id] = product.model_copy()
        return product

    def find_all(self) -> list[Product]:
        with self._lock:
            return [p.model_copy() for p in self._products.values()]
