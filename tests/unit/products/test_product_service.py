"""Unit tests for ProductService."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from modules.products.dtos import PartialProductDTO, ProductDTO
from modules.products.exceptions import (
    ProductIdMismatch,
    ProductIdNotAllowed,
    ProductNotFound,
)
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository
from modules.products.services import ProductService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return ProductService(repository=ProductDjangoRepository())


@pytest.fixture()
def product():
    return Product.objects.create(
        name="Impresora Epson",
        description="Impresora multifuncional Epson EcoTank",
        unit_price=Decimal("4500.00"),
        stock_quantity=8,
    )


def _dto(**overrides) -> ProductDTO:
    data = {
        "name": "Tarjeta Gráfica",
        "description": "NVIDIA GeForce RTX 3060",
        "unit_price": Decimal("8000.00"),
        "stock_quantity": 5,
    }
    data.update(overrides)
    return ProductDTO(**data)


# ===========================================================================
# Create
# ===========================================================================


class TestCreateProduct:
    def test_creates_product(self, service):
        product = service.create_product(_dto())
        assert product.id is not None
        assert Product.objects.get(pk=product.id).unit_price == Decimal("8000.00")

    def test_rejects_preassigned_id(self, service):
        with pytest.raises(ProductIdNotAllowed):
            service.create_product(_dto(product_id=3))
        assert Product.objects.count() == 0

    def test_uses_repository_save(self):
        repo = MagicMock(spec=IProductRepository)
        repo.save.side_effect = lambda p: p
        ProductService(repository=repo).create_product(_dto())
        repo.save.assert_called_once()
        saved = repo.save.call_args.args[0]
        assert saved.name == "Tarjeta Gráfica"


# ===========================================================================
# Update
# ===========================================================================


class TestUpdateProduct:
    def test_full_replacement(self, service, product):
        updated = service.update_product(
            product.id,
            _dto(name="Impresora HP", description="", unit_price=Decimal("3999.99"), stock_quantity=2),
        )
        assert updated.name == "Impresora HP"
        assert updated.description == ""
        assert updated.unit_price == Decimal("3999.99")
        assert updated.stock_quantity == 2

    def test_partial_update_keeps_other_fields(self, service, product):
        updated = service.update_product(product.id, PartialProductDTO(stock_quantity=20))
        assert updated.stock_quantity == 20
        assert updated.name == "Impresora Epson"
        assert updated.unit_price == Decimal("4500.00")

    def test_missing_product(self, service):
        with pytest.raises(ProductNotFound, match="Product with ID 77 not found"):
            service.update_product(77, PartialProductDTO(name="Nothing"))

    def test_body_id_must_match(self, service, product):
        with pytest.raises(ProductIdMismatch):
            service.update_product(product.id, _dto(product_id=product.id + 1))

    def test_body_id_equal_to_url_id_is_accepted(self, service, product):
        updated = service.update_product(product.id, _dto(product_id=product.id))
        assert updated.name == "Tarjeta Gráfica"


# ===========================================================================
# Queries
# ===========================================================================


class TestProductQueries:
    def test_get_product(self, service, product):
        assert service.get_product(product.id) == product

    def test_get_missing_product(self, service):
        with pytest.raises(ProductNotFound):
            service.get_product(404)

    def test_list_products(self, service, product):
        assert list(service.list_products()) == [product]
