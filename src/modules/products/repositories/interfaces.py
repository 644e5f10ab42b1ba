"""Product repository interface.

Extends ``IRepository[Product]`` with the stock operations the order
workflow relies on.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.constants import StockDecrement
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """List products with optional filters."""

    @abstractmethod
    def lock_for_update(self, ids: Iterable[int]) -> None:
        """Lock the given product rows (SELECT FOR UPDATE) in primary-key order.

        Only takes the locks; callers re-read the rows they need.  Must be
        called inside a transaction.  Missing ids are ignored.
        """

    @abstractmethod
    def decrement_stock(self, id: int, quantity: int) -> "StockDecrement":
        """Subtract ``quantity`` from the stock only if enough remains.

        The check and the write happen in one statement, so concurrent
        callers can never drive the stock below zero.
        """
