"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
Everything detected while creating an order is an ``InvalidRequest``
(HTTP 400); missing resources on reads are ``NotFound`` (HTTP 404).
"""

from __future__ import annotations

from modules.core.exceptions import InvalidRequest, NotFound
from modules.orders.constants import MAX_AMOUNT


class OrderNotFound(NotFound):
    """The requested order does not exist."""

    def __init__(self, order_id) -> None:
        super().__init__(f"Order with ID {order_id} not found")
        self.order_id = order_id


class OrderLineNotFound(NotFound):
    """The requested order line does not exist."""

    def __init__(self, line_id) -> None:
        super().__init__(f"Order line with ID {line_id} not found")
        self.line_id = line_id


class OrderIdNotAllowed(InvalidRequest):
    """A creation request tried to pre-assign the order id."""

    def __init__(self) -> None:
        super().__init__("order_id must be 0 for new orders")


class ClientNotFound(InvalidRequest):
    """The client referenced by the order does not exist."""

    def __init__(self, client_id) -> None:
        super().__init__(f"Client with ID {client_id} not found")
        self.client_id = client_id


class ProductNotFound(InvalidRequest):
    """A product referenced by an order line does not exist."""

    def __init__(self, product_id) -> None:
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class InsufficientStock(InvalidRequest):
    """Not enough stock to fulfil an order line."""

    def __init__(self, product_id, product_name: str, available, requested) -> None:
        super().__init__(
            f"Product '{product_name}' does not have enough stock. "
            f"Available: {available}, Requested: {requested}"
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested


class AmountOutOfRange(InvalidRequest):
    """A line or order amount does not fit the stored money columns."""

    def __init__(self, amount) -> None:
        super().__init__(
            f"Order amount {amount} exceeds the maximum of {MAX_AMOUNT}"
        )
        self.amount = amount
