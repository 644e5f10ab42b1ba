"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``ProductDTO``: input for creation and full replacement (PUT).
- ``PartialProductDTO``: input for partial updates (PATCH).
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductDTO(BaseModel):
    """Immutable DTO for product creation and replacement.

    Validates:
    - ``name`` is 2 to 100 characters, ``description`` at most 500.
    - ``unit_price`` is greater than zero with at most two decimal places.
    - ``stock_quantity`` is non-negative.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    product_id: int = 0
    name: str = Field(min_length=2, max_length=100)
    description: str = Field(default="", max_length=500)
    unit_price: Decimal = Field(max_digits=18, decimal_places=2)
    stock_quantity: int = Field(ge=0)

    @field_validator("unit_price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v


class PartialProductDTO(BaseModel):
    """Immutable DTO for partial product updates.

    All fields are optional; only supplied fields will be updated.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    product_id: int = 0
    name: str | None = Field(default=None, min_length=2, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    unit_price: Decimal | None = Field(default=None, max_digits=18, decimal_places=2)
    stock_quantity: int | None = Field(default=None, ge=0)

    @field_validator("unit_price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v
