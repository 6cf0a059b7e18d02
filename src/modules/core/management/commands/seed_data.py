from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.core.exceptions import DomainError
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import OrderLineInputDTO, PlaceOrderDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository


class Command(BaseCommand):
    help = "Seed database with development customers, products and orders."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=20)
        parser.add_argument("--seed", type=int, default=42)

    def handle(self, *args, **options):
        random.seed(options["seed"])
        self.stdout.write("Seeding development data...")

        customers = self._seed_customers()
        products = self._seed_products()
        placed, rejected = self._seed_orders(customers, products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"customers={len(customers)}, "
                f"products={len(products)}, "
                f"orders={placed}, "
                f"rejected={rejected}"
            )
        )

    def _seed_customers(self) -> list[Customer]:
        seed_customers = [
            ("Ana Souza", "ana@example.com"),
            ("Bruno Lima", "bruno@example.com"),
            ("Carla Mendes", "carla@example.com"),
            ("Daniel Costa", "daniel@example.com"),
            ("Eduardo Alves", "eduardo@example.com"),
        ]
        customers = []
        for name, email in seed_customers:
            customer, _ = Customer.objects.get_or_create(
                email=email, defaults={"name": name}
            )
            customers.append(customer)
        return customers

    def _seed_products(self) -> list[Product]:
        catalog = [
            ("Monitor 27\"", Decimal("1299.90")),
            ("Mechanical Keyboard", Decimal("399.90")),
            ("Gaming Mouse", Decimal("249.90")),
            ("Office Desk", Decimal("899.00")),
            ("Ergonomic Chair", Decimal("1499.00")),
            ("A4 Paper", Decimal("29.90")),
            ("Blue Pen", Decimal("4.90")),
            ("Notebook", Decimal("19.90")),
        ]
        products = []
        for name, price in catalog:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={
                    "unit_price": price,
                    "stock_quantity": random.randint(5, 50),
                },
            )
            products.append(product)
        return products

    def _seed_orders(
        self, customers: list[Customer], products: list[Product], count: int
    ) -> tuple[int, int]:
        if not customers or not products:
            self.stdout.write(self.style.WARNING("Skipping orders (no customers/products)."))
            return 0, 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        placed = rejected = 0
        for _ in range(count):
            picked = random.sample(products, k=random.randint(1, min(3, len(products))))
            dto = PlaceOrderDTO(
                customer_id=random.choice(customers).id,
                items=[
                    OrderLineInputDTO(product_id=p.id, quantity=random.randint(1, 4))
                    for p in picked
                ],
            )
            try:
                service.place_order(dto)
                placed += 1
            except DomainError as exc:
                rejected += 1
                self.stdout.write(self.style.WARNING(f"Order rejected: {exc.detail}"))
        return placed, rejected
