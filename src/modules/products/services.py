"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Rules enforced here:
- New products are created with ``product_id == 0``.
- Price and stock bounds are validated by the DTOs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.products.exceptions import (
    ProductIdMismatch,
    ProductIdNotAllowed,
    ProductNotFound,
)
from modules.products.models import Product

if TYPE_CHECKING:
    from django.db import models

    from modules.products.dtos import PartialProductDTO, ProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: ProductDTO) -> Product:
        """Create a new product.

        Raises:
            ProductIdNotAllowed: ``dto.product_id`` is not ``0``.
        """
        if dto.product_id != 0:
            raise ProductIdNotAllowed()

        product = Product(
            name=dto.name,
            description=dto.description,
            unit_price=dto.unit_price,
            stock_quantity=dto.stock_quantity,
        )
        product = self._repo.save(product)
        logger.info("product.created", product_id=product.id)
        return product

    @transaction.atomic
    def update_product(
        self, product_id: Any, dto: ProductDTO | PartialProductDTO
    ) -> Product:
        """Update an existing product with the fields present in ``dto``.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductIdMismatch: the body names a different product.
        """
        product = self.get_product(product_id)
        if dto.product_id not in (0, product.id):
            raise ProductIdMismatch(product.id, dto.product_id)

        changes = dto.model_dump(exclude={"product_id"}, exclude_none=True)
        for field, value in changes.items():
            setattr(product, field, value)

        product = self._repo.save(product)
        logger.info("product.updated", product_id=product.id, fields=sorted(changes))
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[Product]:
        """Return products, optionally filtered."""
        return self._repo.list(filters)

    def get_product(self, product_id: Any) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product
