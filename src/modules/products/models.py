"""Product model with price and stock control.

Rules implemented:
- Price must be greater than zero.
- Stock quantity cannot be negative (DB check constraint as well, so a
  concurrent decrement can never drive it below zero).
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinLengthValidator, MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Product(BaseModel):
    """Product catalog entry.

    ``stock_quantity`` is only mutated by the order workflow through
    ``IProductRepository.decrement_stock`` or by an explicit product update.
    """

    name = models.CharField(max_length=100, validators=[MinLengthValidator(2)])
    description = models.CharField(max_length=500, blank=True, default="")
    unit_price = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    stock_quantity = models.PositiveBigIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["name"], name="products_name_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(unit_price__gt=0),
                name="products_unit_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(stock_quantity__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.unit_price is not None and self.unit_price <= 0:
            raise ValidationError({"unit_price": "Price must be greater than zero."})
        if self.stock_quantity is not None and self.stock_quantity < 0:
            raise ValidationError(
                {"stock_quantity": "Stock quantity cannot be negative."}
            )

    def __str__(self) -> str:
        return f"{self.name} (${self.unit_price})"
