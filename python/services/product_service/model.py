"""Persisted Product entity and its MongoDB document mapping."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from bson.decimal128 import Decimal128
from pydantic import BaseModel

COLLECTION = "product"


class Product(BaseModel):
    id: str
    name: str
    description: str
    price: Decimal

    def to_document(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "name": self.name,
            "description": self.description,
            "price": Decimal128(self.price),
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> Product:
        price = doc["price"]
        if isinstance(price, Decimal128):
            price = price.to_decimal()
        return cls(
            id=doc["_id"],
            name=doc["name"],
            description=doc.get("description", ""),
            price=price,
        )
