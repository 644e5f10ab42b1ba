"""Unit tests for order DTOs."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.orders.dtos import CreateOrderDTO, CreateOrderLineDTO

pytestmark = pytest.mark.unit


class TestCreateOrderLineDTO:
    def test_valid_line(self):
        dto = CreateOrderLineDTO(product_id=1, quantity=Decimal("2"))
        assert dto.quantity == Decimal("2")

    def test_accepts_whole_number_with_decimals(self):
        dto = CreateOrderLineDTO(product_id=1, quantity="3.00")
        assert dto.quantity == Decimal("3")

    @pytest.mark.parametrize("quantity", ["0", "-1"])
    def test_rejects_non_positive_quantity(self, quantity):
        with pytest.raises(ValidationError, match="greater than 0"):
            CreateOrderLineDTO(product_id=1, quantity=quantity)

    def test_rejects_fractional_quantity(self):
        with pytest.raises(ValidationError, match="whole number"):
            CreateOrderLineDTO(product_id=1, quantity="1.50")

    def test_is_frozen(self):
        dto = CreateOrderLineDTO(product_id=1, quantity=1)
        with pytest.raises(ValidationError):
            dto.quantity = Decimal("5")


class TestCreateOrderDTO:
    def test_order_id_defaults_to_zero(self):
        dto = CreateOrderDTO(
            client_id=1, lines=[CreateOrderLineDTO(product_id=1, quantity=1)]
        )
        assert dto.order_id == 0

    def test_rejects_empty_lines(self):
        with pytest.raises(ValidationError, match="at least one line"):
            CreateOrderDTO(client_id=1, lines=[])

    def test_allows_same_product_on_several_lines(self):
        dto = CreateOrderDTO(
            client_id=1,
            lines=[
                CreateOrderLineDTO(product_id=1, quantity=1),
                CreateOrderLineDTO(product_id=1, quantity=2),
            ],
        )
        assert len(dto.lines) == 2

    def test_keeps_non_zero_order_id_for_service_to_reject(self):
        dto = CreateOrderDTO(
            order_id=5, client_id=1, lines=[CreateOrderLineDTO(product_id=1, quantity=1)]
        )
        assert dto.order_id == 5
