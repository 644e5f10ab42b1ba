from decimal import Decimal

import pytest

from modules.clients.models import Client
from modules.products.models import Product

ORDERS_URL = "/api/v1/orders/"


@pytest.fixture()
def client_record():
    return Client.objects.create(name="Juan Pérez", identity_document="0801-1990-12345")


@pytest.fixture()
def laptop():
    return Product.objects.create(
        name="Laptop HP",
        description='Laptop HP Pavilion 15.6"',
        unit_price=Decimal("100.00"),
        stock_quantity=10,
    )


@pytest.fixture()
def mouse():
    return Product.objects.create(
        name="Mouse Inalámbrico",
        unit_price=Decimal("50.00"),
        stock_quantity=30,
    )


@pytest.fixture()
def keyboard():
    return Product.objects.create(
        name="Teclado Logitech",
        unit_price=Decimal("30.00"),
        stock_quantity=20,
    )


@pytest.fixture()
def post_order(auth_client):
    """POST an order payload as JSON."""

    def _post(client_id, lines, **extra):
        payload = {"order_id": 0, "client_id": client_id, "lines": lines, **extra}
        return auth_client.post(ORDERS_URL, payload, format="json")

    return _post
