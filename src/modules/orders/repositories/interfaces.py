"""Order and OrderLine repository interfaces.

``save`` covers both the insert that assigns the order id and the final
update that stores the line sums.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderLine


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate."""

    @abstractmethod
    def get_by_id(self, id: int) -> Optional["Order"]:
        """Retrieve an order with its client and lines (and their products)."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Order]":
        """List orders with optional filters."""


class IOrderLineRepository(IRepository["OrderLine"]):
    """Repository contract for order lines."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[OrderLine]":
        """List order lines with optional filters."""

    @abstractmethod
    def list_for_order(self, order_id: int) -> "models.QuerySet[OrderLine]":
        """List the lines of one order in creation order."""
