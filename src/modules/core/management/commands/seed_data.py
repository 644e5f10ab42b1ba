from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.clients.models import Client
from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.orders.dtos import CreateOrderDTO, CreateOrderLineDTO
from modules.orders.models import Order
from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderLineDjangoRepository,
)
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

SEED_CLIENTS = [
    ("Juan Pérez", "0801-1990-12345"),
    ("María López", "0501-1985-67890"),
    ("Carlos Rodríguez", "0101-1978-54321"),
    ("Ana Martínez", "0401-1992-98765"),
    ("Roberto Sánchez", "0601-1980-13579"),
    ("Laura Mendoza", "0301-1995-24680"),
    ("Fernando Gómez", "0701-1988-97531"),
    ("Patricia Flores", "0201-1983-86420"),
    ("Miguel Torres", "0901-1975-75319"),
    ("Sofía Ramírez", "0501-1990-86421"),
]

SEED_PRODUCTS = [
    ("Laptop HP", 'Laptop HP Pavilion 15.6" Intel Core i5', "15000.00", 10),
    ("Monitor Dell", 'Monitor Dell 24" Full HD', "3500.00", 15),
    ("Teclado Logitech", "Teclado mecánico Logitech G Pro", "1200.00", 20),
    ("Mouse Inalámbrico", "Mouse inalámbrico Logitech M185", "350.00", 30),
    ("Impresora Epson", "Impresora multifuncional Epson EcoTank", "4500.00", 8),
    ("Disco Duro Externo", "Disco duro externo Seagate 1TB", "1800.00", 12),
    ("Memoria RAM", "Memoria RAM Kingston 8GB DDR4", "950.00", 25),
    ("Tarjeta Gráfica", "Tarjeta gráfica NVIDIA GeForce RTX 3060", "8000.00", 5),
    ("Auriculares Bluetooth", "Auriculares Bluetooth Sony WH-1000XM4", "3200.00", 10),
    ("Webcam HD", "Webcam Logitech C920 HD Pro", "1500.00", 15),
]


class Command(BaseCommand):
    help = "Seed database with development data (orders go through OrderService)."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        clients = self._seed_clients()
        products = self._seed_products()
        orders_created = self._seed_orders(clients, products)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"clients={len(clients)}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        if User.objects.filter(username="admin").exists():
            return 0
        User.objects.create_superuser("admin", password="admin123")
        return 1

    def _seed_clients(self) -> list[Client]:
        self.stdout.write("Creating clients...")
        clients: list[Client] = []
        for name, identity_document in SEED_CLIENTS:
            client, _ = Client.objects.get_or_create(
                identity_document=identity_document,
                defaults={"name": name},
            )
            clients.append(client)
        return clients

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        for name, description, price, stock in SEED_PRODUCTS:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={
                    "description": description,
                    "unit_price": Decimal(price),
                    "stock_quantity": stock,
                },
            )
            products.append(product)
        return products

    def _seed_orders(self, clients: list[Client], products: list[Product]) -> int:
        if Order.objects.exists():
            self.stdout.write("Orders already present, skipping.")
            return 0

        self.stdout.write("Creating orders...")
        service = OrderService(
            order_repository=OrderDjangoRepository(),
            order_line_repository=OrderLineDjangoRepository(),
            client_repository=ClientDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        remaining = {p.id: p.stock_quantity for p in products}
        created = 0

        for client in clients:
            for _ in range(random.randint(1, 3)):
                available = [p for p in products if remaining[p.id] > 0]
                if not available:
                    return created
                chosen = random.sample(available, k=min(len(available), random.randint(1, 5)))
                lines = []
                for product in chosen:
                    quantity = min(random.randint(1, 5), remaining[product.id])
                    remaining[product.id] -= quantity
                    lines.append(
                        CreateOrderLineDTO(product_id=product.id, quantity=Decimal(quantity))
                    )
                service.create_order(CreateOrderDTO(client_id=client.id, lines=lines))
                created += 1

        return created
