from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from common.models import ProductRequest
from product_service.model import Product
from product_service.repository import InMemoryProductRepository, StorageError
from product_service.service import PersistenceFailure, ProductService


class FailingRepository:
    def save(self, product: Product) -> Product:
        raise StorageError("write failed")

    def find_all(self) -> list[Product]:
        raise StorageError("read failed")


@pytest.fixture
def repository():
    return InMemoryProductRepository()


@pytest.fixture
def service(repository):
    return ProductService(repository)


def test_create_product_copies_request_fields(service, repository):
    request = ProductRequest(id="p1", name="Pen", description="ball", price="1.25")

    response = service.create_product(request)

    assert response.model_dump() == {
        "id": "p1",
        "name": "Pen",
        "description": "ball",
        "price": Decimal("1.25"),
    }
    assert repository.find_all() == [
        Product(id="p1", name="Pen", description="ball", price=Decimal("1.25"))
    ]


@pytest.mark.parametrize("product_id", [None, ""])
def test_create_product_generates_missing_id(service, product_id):
    request = ProductRequest(id=product_id, name="Pen", price="1")

    response = service.create_product(request)

    assert response.id
    assert [p.id for p in service.get_all_products()] == [response.id]


def test_get_all_products_empty(service):
    assert service.get_all_products() == []


def test_storage_errors_surface_as_persistence_failure():
    service = ProductService(FailingRepository())

    with pytest.raises(PersistenceFailure) as excinfo:
        service.create_product(ProductRequest(id="p1", name="Pen", price="1"))
    assert isinstance(excinfo.value.__cause__, StorageError)

    with pytest.raises(PersistenceFailure):
        service.get_all_products()


def test_concurrent_creates_are_all_stored(service):
    ids = [f"p{i}" for i in range(50)]

    def create(product_id):
        return service.create_product(ProductRequest(id=product_id, name="x", price="1"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(create, ids))

    assert {p.id for p in service.get_all_products()} == set(ids)
