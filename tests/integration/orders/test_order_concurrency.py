"""Stock concurrency integration test.

Concurrent orders for the same product must never oversell it.

Scenario:
- Product "Tarjeta Gráfica" with **stock = 5**.
- 10 threads attempt to buy 1 unit each simultaneously.
- Exactly 5 succeed, 5 raise ``InsufficientStock``.
- Final stock is 0 (never negative).

Uses ``TransactionTestCase`` so each thread can see committed data and
row-level locking behaves realistically.  SQLite serialises writers at
the file level and reports "database is locked" instead of waiting, so
the test only runs against a server database.
"""

from __future__ import annotations

import logging
import unittest
from concurrent.futures import ThreadPoolExecutor, as_completed
from decimal import Decimal

import django
from django.db import connection
from django.test import TransactionTestCase

from modules.clients.models import Client
from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.orders.dtos import CreateOrderDTO, CreateOrderLineDTO
from modules.orders.exceptions import InsufficientStock
from modules.orders.models import Order
from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderLineDjangoRepository,
)
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

logger = logging.getLogger(__name__)

INITIAL_STOCK = 5
NUM_WORKERS = 10


@unittest.skipIf(
    connection.vendor == "sqlite", "row locking needs a server database"
)
class TestStockConcurrency(TransactionTestCase):
    """Prove atomic stock decrement under concurrent load."""

    def setUp(self):
        self.client_record = Client.objects.create(
            name="Concurrency Client", identity_document="0901-1975-75319"
        )
        self.product = Product.objects.create(
            name="Tarjeta Gráfica",
            unit_price=Decimal("8000.00"),
            stock_quantity=INITIAL_STOCK,
        )

    def _create_order_in_thread(self, thread_id: int) -> str:
        """Attempt to create an order. Returns 'success' or 'insufficient'."""
        service = OrderService(
            order_repository=OrderDjangoRepository(),
            order_line_repository=OrderLineDjangoRepository(),
            client_repository=ClientDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        dto = CreateOrderDTO(
            client_id=self.client_record.id,
            lines=[CreateOrderLineDTO(product_id=self.product.id, quantity=Decimal("1"))],
        )
        try:
            service.create_order(dto)
            logger.warning("Thread %d: order created successfully", thread_id)
            return "success"
        except InsufficientStock:
            logger.warning("Thread %d: InsufficientStock (expected)", thread_id)
            return "insufficient"
        finally:
            django.db.connections.close_all()

    def _run_workers(self) -> list[str]:
        with ThreadPoolExecutor(max_workers=NUM_WORKERS) as pool:
            futures = [
                pool.submit(self._create_order_in_thread, i) for i in range(NUM_WORKERS)
            ]
            return [future.result() for future in as_completed(futures)]

    def test_concurrent_orders_exhaust_stock(self):
        """10 threads buy 1 unit from stock=5: exactly 5 succeed."""
        results = self._run_workers()

        self.assertEqual(results.count("success"), INITIAL_STOCK)
        self.assertEqual(results.count("insufficient"), NUM_WORKERS - INITIAL_STOCK)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 0)
        self.assertEqual(Order.objects.count(), INITIAL_STOCK)

    def test_stock_is_conserved(self):
        """initial stock == units sold + units remaining"""
        results = self._run_workers()

        self.product.refresh_from_db()
        self.assertGreaterEqual(self.product.stock_quantity, 0)
        self.assertEqual(
            INITIAL_STOCK, results.count("success") + self.product.stock_quantity
        )

    def test_two_large_orders_only_one_fits(self):
        """Stock 10, two concurrent orders of 6: exactly one succeeds."""
        Product.objects.filter(pk=self.product.pk).update(stock_quantity=10)

        def _buy_six(_):
            service = OrderService(
                order_repository=OrderDjangoRepository(),
                order_line_repository=OrderLineDjangoRepository(),
                client_repository=ClientDjangoRepository(),
                product_repository=ProductDjangoRepository(),
            )
            dto = CreateOrderDTO(
                client_id=self.client_record.id,
                lines=[CreateOrderLineDTO(product_id=self.product.id, quantity=Decimal("6"))],
            )
            try:
                service.create_order(dto)
                return "success"
            except InsufficientStock:
                return "insufficient"
            finally:
                django.db.connections.close_all()

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(_buy_six, range(2)))

        self.assertEqual(sorted(results), ["insufficient", "success"])
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 4)
