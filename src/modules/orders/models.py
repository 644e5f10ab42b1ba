"""Order and OrderLine models.

Rules implemented:
- Client and product FKs use PROTECT to preserve financial history.
- OrderLine snapshots the product price at creation time (``unit_price``);
  later price changes never touch existing lines.
- Order amounts are the sums of its line amounts.  They are written once,
  by ``OrderService.create_order``, and never edited afterwards.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Order(BaseModel):
    """Order aggregate root.

    Created with zeroed amounts, then updated with the line sums inside the
    same transaction.
    """

    client = models.ForeignKey(
        "clients.Client",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    subtotal = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )
    tax = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    total = models.DecimalField(
        max_digits=18, decimal_places=2, default=Decimal("0.00")
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Order #{self.pk} (client {self.client_id}, total {self.total})"


class OrderLine(BaseModel):
    """Line item linking an Order to a Product.

    ``quantity`` is a fixed-point number but always a whole number of units,
    since product stock is counted in units.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="lines",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_lines",
    )
    quantity = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    unit_price = models.DecimalField(max_digits=18, decimal_places=2)
    subtotal = models.DecimalField(max_digits=18, decimal_places=2)
    tax = models.DecimalField(max_digits=18, decimal_places=2)
    total = models.DecimalField(max_digits=18, decimal_places=2)

    class Meta:
        db_table = "order_lines"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name="order_lines_quantity_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} (${self.total})"
