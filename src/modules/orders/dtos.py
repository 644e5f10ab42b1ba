"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderLineDTO``: input for a single order line.
- ``CreateOrderDTO``: input for order creation (nested lines).
"""

from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateOrderLineDTO(BaseModel):
    """Immutable DTO for a single line in an order creation request.

    ``unit_price`` is resolved by the Service Layer from the product catalog.
    """

    model_config = ConfigDict(frozen=True)

    product_id: int
    quantity: Decimal = Field(max_digits=18, decimal_places=2)

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_whole_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Quantity must be greater than 0.")
        if v != v.to_integral_value():
            raise ValueError("Quantity must be a whole number of units.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    ``order_id`` must stay ``0``; the service rejects anything else.
    The same product may appear on several lines; each line is checked
    against the stock left by the previous ones.
    """

    model_config = ConfigDict(frozen=True)

    order_id: int = 0
    client_id: int
    lines: List[CreateOrderLineDTO]

    @field_validator("lines")
    @classmethod
    def lines_must_not_be_empty(
        cls, v: List[CreateOrderLineDTO]
    ) -> List[CreateOrderLineDTO]:
        if not v:
            raise ValueError("Order must have at least one line.")
        return v
