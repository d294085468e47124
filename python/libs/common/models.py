"""Shared Pydantic models used across Python services."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

# Decimal128 limits: prices must be storable exactly in a document store.
MAX_PRICE_DIGITS = 34
MIN_PRICE_EXPONENT = -6176
MAX_PRICE_EXPONENT = 6111


class ProductBase(BaseModel):
    name: str
    description: str = ""
    # Serialized as a JSON string so the exact digits survive the round trip.
    price: Decimal

    @field_validator("price")
    @classmethod
    def price_fits_decimal128(cls, value: Decimal) -> Decimal:
        if not value.is_finite():
            raise ValueError("price must be a finite decimal")
        sign, digits, exponent = value.as_tuple()
        if len(digits) > MAX_PRICE_DIGITS:
            raise ValueError(f"price has more than {MAX_PRICE_DIGITS} digits")
        if not MIN_PRICE_EXPONENT <= exponent <= MAX_PRICE_EXPONENT:
            raise ValueError("price exponent out of range")
        return value


class ProductRequest(ProductBase):
    # Legacy clients still send skuCode; it is dropped along with any other extra field.
    model_config = ConfigDict(extra="ignore")

    id: str | None = None


class ProductResponse(ProductBase):
    id: str


class HealthResponse(BaseModel):
    status: str
    service: str
