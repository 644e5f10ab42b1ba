"""Order service layer (Use Cases).

Orchestrates order creation and the order/order-line queries.
``create_order`` is the unit-of-work boundary: the order row, every line
row, every stock decrement and the final totals update commit together or
not at all.

Rules enforced:
- A new order must not carry an id (``order_id == 0``).
- The client and every product must exist.
- No line may take more stock than is left; the check is repeated by the
  conditional decrement, so a concurrent order cannot oversell.
- Order amounts are the sums of the line amounts (see ``pricing``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.orders.exceptions import (
    ClientNotFound,
    InsufficientStock,
    OrderIdNotAllowed,
    OrderLineNotFound,
    OrderNotFound,
    ProductNotFound,
)
from modules.orders.models import Order, OrderLine
from modules.orders.pricing import LineAmounts, price_line, sum_amounts
from modules.products.constants import StockDecrement

if TYPE_CHECKING:
    from django.db import models

    from modules.clients.repositories.interfaces import IClientRepository
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.repositories.interfaces import (
        IOrderLineRepository,
        IOrderRepository,
    )
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        order_line_repository: IOrderLineRepository,
        client_repository: IClientRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._order_repo = order_repository
        self._line_repo = order_line_repository
        self._client_repo = client_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create an order and its lines, decrementing product stock.

        Steps:
        1. Reject a pre-assigned order id and a missing client.
        2. Insert the order with zeroed amounts to obtain its id.
        3. Lock the referenced product rows (sorted by id).
        4. For each line, in request order: check the product and its
           stock, price the line, insert it, decrement the stock.
        5. Store the line sums on the order.

        Any exception raised after step 2 leaves this method and rolls the
        whole transaction back.

        Raises:
            OrderIdNotAllowed: ``dto.order_id`` is not ``0``.
            ClientNotFound: the client does not exist.
            ProductNotFound: a product does not exist.
            InsufficientStock: a line asks for more than the remaining stock.
            AmountOutOfRange: a line or order total does not fit the money
                columns.
        """
        log = logger.bind(client_id=dto.client_id, line_count=len(dto.lines))
        log.info("order.creation_started")

        if dto.order_id != 0:
            raise OrderIdNotAllowed()

        client = self._client_repo.get_by_id(dto.client_id)
        if client is None:
            raise ClientNotFound(dto.client_id)

        order = self._order_repo.save(Order(client=client))
        log = log.bind(order_id=order.id)

        self._product_repo.lock_for_update(line.product_id for line in dto.lines)

        line_amounts: List[LineAmounts] = []
        for line_dto in dto.lines:
            # Re-read per line: an earlier line may have used the same product.
            product = self._product_repo.get_by_id(line_dto.product_id)
            if product is None:
                log.info("order.product_missing", product_id=line_dto.product_id)
                raise ProductNotFound(line_dto.product_id)
            if line_dto.quantity > product.stock_quantity:
                log.info(
                    "order.insufficient_stock",
                    product_id=product.id,
                    available=product.stock_quantity,
                    requested=str(line_dto.quantity),
                )
                raise InsufficientStock(
                    product.id,
                    product.name,
                    product.stock_quantity,
                    int(line_dto.quantity),
                )

            amounts = price_line(line_dto.quantity, product.unit_price)
            line = self._line_repo.save(
                OrderLine(
                    order=order,
                    product=product,
                    quantity=line_dto.quantity,
                    unit_price=product.unit_price,
                    subtotal=amounts.subtotal,
                    tax=amounts.tax,
                    total=amounts.total,
                )
            )

            outcome = self._product_repo.decrement_stock(
                product.id, int(line_dto.quantity)
            )
            if outcome == StockDecrement.NOT_FOUND:
                raise ProductNotFound(product.id)
            if outcome == StockDecrement.INSUFFICIENT_STOCK:
                # Stock changed between the read and the decrement.
                current = self._product_repo.get_by_id(product.id)
                available = current.stock_quantity if current else 0
                raise InsufficientStock(
                    product.id, product.name, available, int(line_dto.quantity)
                )

            line_amounts.append(amounts)
            log.info(
                "order.line_added",
                order_line_id=line.id,
                product_id=product.id,
                quantity=str(line_dto.quantity),
                remaining=product.stock_quantity - int(line_dto.quantity),
            )

        totals = sum_amounts(line_amounts)
        order.subtotal = totals.subtotal
        order.tax = totals.tax
        order.total = totals.total
        self._order_repo.save(order)

        log.info(
            "order.created",
            subtotal=str(totals.subtotal),
            tax=str(totals.tax),
            total=str(totals.total),
        )
        return self._order_repo.get_by_id(order.id) or order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: Any) -> Order:
        """Retrieve an order with its lines.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def list_orders(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[Order]:
        return self._order_repo.list(filters)


class OrderLineService:
    """Read-only use-cases for order lines.

    Lines are created exclusively by ``OrderService.create_order``.
    """

    def __init__(
        self,
        order_line_repository: IOrderLineRepository,
        order_repository: IOrderRepository,
    ) -> None:
        self._line_repo = order_line_repository
        self._order_repo = order_repository

    def get_line(self, line_id: Any) -> OrderLine:
        """Raises ``OrderLineNotFound`` when the line does not exist."""
        line = self._line_repo.get_by_id(line_id)
        if line is None:
            raise OrderLineNotFound(line_id)
        return line

    def list_lines(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[OrderLine]:
        return self._line_repo.list(filters)

    def list_lines_for_order(self, order_id: Any) -> models.QuerySet[OrderLine]:
        """Lines of one order.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return self._line_repo.list_for_order(order.id)
