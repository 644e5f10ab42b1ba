"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
envelope responses.
"""

from __future__ import annotations

from modules.core.exceptions import InvalidRequest, NotFound


class ProductNotFound(NotFound):
    """The requested product does not exist."""

    def __init__(self, product_id) -> None:
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class ProductIdNotAllowed(InvalidRequest):
    """A creation payload tried to pre-assign the product id."""

    def __init__(self) -> None:
        super().__init__("product_id must be 0 for new products")


class ProductIdMismatch(InvalidRequest):
    def __init__(self, url_id, body_id) -> None:
        super().__init__(
            f"product_id {body_id} in the body does not match product {url_id} in the URL"
        )
