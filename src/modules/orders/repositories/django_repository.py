"""Django ORM implementations of the Order and OrderLine repositories.

Writes are wrapped in ``transaction.atomic()``; when called from
``OrderService.create_order`` they join the service's transaction, so a
failure anywhere rolls back the whole order.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.orders.models import Order, OrderLine
from modules.orders.repositories.interfaces import (
    IOrderLineRepository,
    IOrderRepository,
)

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        ``select_related`` for the client FK and ``prefetch_related`` for
        lines and each line's product, so rendering an order is a fixed
        number of queries.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return (
                Order.objects.select_related("client")
                .prefetch_related("lines__product")
                .filter(id=id)
                .first()
            )
        except (TypeError, ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Order]:
        """List orders with optional Django ORM look-ups.

        Examples of valid filters::

            {"client_id": 3}
            {"total__gte": "100.00"}
        """
        queryset = Order.objects.select_related("client")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (insert or update) an order."""
        is_new = entity._state.adding
        entity.save()
        logger.info("order.saved", order_id=entity.id, is_new=is_new)
        return entity


class OrderLineDjangoRepository(IOrderLineRepository):
    """Concrete OrderLine repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[OrderLine]:
        try:
            return OrderLine.objects.select_related("product").filter(id=id).first()
        except (TypeError, ValueError, ValidationError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[OrderLine]:
        queryset = OrderLine.objects.select_related("product")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def list_for_order(self, order_id: int) -> models.QuerySet[OrderLine]:
        return self.list({"order_id": order_id}).order_by("id")

    @transaction.atomic
    def save(self, entity: OrderLine) -> OrderLine:
        """Persist an order line."""
        entity.save()
        logger.debug(
            "order_line.saved",
            order_line_id=entity.id,
            order_id=entity.order_id,
            product_id=entity.product_id,
        )
        return entity
