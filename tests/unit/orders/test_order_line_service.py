"""Unit tests for OrderLineService (read-only line queries)."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.clients.models import Client
from modules.orders.exceptions import OrderLineNotFound, OrderNotFound
from modules.orders.models import Order, OrderLine
from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderLineDjangoRepository,
)
from modules.orders.services import OrderLineService
from modules.products.models import Product

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return OrderLineService(
        order_line_repository=OrderLineDjangoRepository(),
        order_repository=OrderDjangoRepository(),
    )


@pytest.fixture()
def order_with_lines():
    client = Client.objects.create(name="Ana Martínez", identity_document="0401-1992-98765")
    product = Product.objects.create(
        name="Webcam", unit_price=Decimal("10.00"), stock_quantity=50
    )
    order = Order.objects.create(
        client=client,
        subtotal=Decimal("30.00"),
        tax=Decimal("4.50"),
        total=Decimal("34.50"),
    )
    lines = [
        OrderLine.objects.create(
            order=order,
            product=product,
            quantity=Decimal(q),
            unit_price=Decimal("10.00"),
            subtotal=Decimal(q) * Decimal("10.00"),
            tax=Decimal(q) * Decimal("1.50"),
            total=Decimal(q) * Decimal("11.50"),
        )
        for q in ("1", "2")
    ]
    return order, lines


class TestGetLine:
    def test_returns_line(self, service, order_with_lines):
        _, lines = order_with_lines
        assert service.get_line(lines[0].id) == lines[0]

    def test_missing_line_raises(self, service):
        with pytest.raises(OrderLineNotFound, match="Order line with ID 999 not found"):
            service.get_line(999)

    def test_malformed_id_raises_not_found(self, service):
        with pytest.raises(OrderLineNotFound):
            service.get_line("abc")


class TestListLines:
    def test_list_for_order_in_creation_order(self, service, order_with_lines):
        order, lines = order_with_lines
        result = list(service.list_lines_for_order(order.id))
        assert result == lines

    def test_list_for_missing_order_raises(self, service):
        with pytest.raises(OrderNotFound):
            service.list_lines_for_order(12345)

    def test_list_lines_with_filters(self, service, order_with_lines):
        order, lines = order_with_lines
        result = service.list_lines({"quantity__gte": Decimal("2")})
        assert list(result) == [lines[1]]
