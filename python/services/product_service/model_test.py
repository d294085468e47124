from decimal import Decimal

from bson.decimal128 import Decimal128

from product_service.model import Product


def test_document_round_trip_keeps_price_exponent():
    product = Product(id="p1", name="Pen", description="", price=Decimal("10.00"))

    doc = product.to_document()

    assert doc["_id"] == "p1"
    assert doc["price"] == Decimal128("10.00")
    assert str(Product.from_document(doc).price) == "10.00"


def test_from_document_defaults_missing_description():
    product = Product.from_document({"_id": "p1", "name": "Pen", "price": Decimal128("1")})

    assert product.description == ""
