"""Create and list use-cases for products."""

from __future__ import annotations

from uuid import uuid4

from loguru import logger

from common.models import ProductRequest, ProductResponse
from product_service.model import Product
from product_service.repository import ProductRepository, StorageError


class PersistenceFailure(Exception):
    """A product operation failed because the store did."""


def _to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
    )


class ProductService:
    def __init__(self, repository: ProductRepository):
        self._repository = repository

    def create_product(self, request: ProductRequest) -> ProductResponse:
        """Persist a product built from ``request``.

        A missing or empty ``id`` is replaced by a generated one, which is
        returned in the response.
        """
        product = Product(
            id=request.id or str(uuid4()),
            name=request.name,
            description=request.description,
            price=request.price,
        )
        try:
            saved = self._repository.save(product)
        except StorageError as exc:
            raise PersistenceFailure(str(exc)) from exc
        logger.info("Product {} saved", saved.id)
        return _to_response(saved)

    def get_all_products(self) -> list[ProductResponse]:
        try:
            products = self._repository.find_all()
        except StorageError as exc:
            raise PersistenceFailure(str(exc)) from exc
        return [_to_response(p) for p in products]
