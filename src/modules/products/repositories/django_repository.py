"""Django ORM implementation of the Product repository.

Methods return ``None`` (or a ``StockDecrement`` outcome) instead of
raising for missing rows; the Service Layer decides what that means.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone

from modules.products.constants import StockDecrement
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (TypeError, ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Product]:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"stock_quantity__gt": 0}
            {"name__icontains": "laptop"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        is_new = entity._state.adding
        entity.save()
        logger.info("product.saved", product_id=entity.id, is_new=is_new)
        return entity

    def lock_for_update(self, ids: Iterable[int]) -> None:
        # Sorted locking order prevents deadlocks between concurrent orders.
        locked = list(
            Product.objects.select_for_update()
            .filter(id__in=sorted(set(ids)))
            .order_by("id")
            .values_list("id", flat=True)
        )
        logger.debug("product.rows_locked", product_ids=locked)

    def decrement_stock(self, id: int, quantity: int) -> StockDecrement:
        updated = Product.objects.filter(id=id, stock_quantity__gte=quantity).update(
            stock_quantity=F("stock_quantity") - quantity,
            updated_at=timezone.now(),
        )
        if updated:
            return StockDecrement.SUCCESS
        if Product.objects.filter(id=id).exists():
            logger.warning("product.stock_decrement_rejected", product_id=id, quantity=quantity)
            return StockDecrement.INSUFFICIENT_STOCK
        return StockDecrement.NOT_FOUND
