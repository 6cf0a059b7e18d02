from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from modules.orders.assembler import OrderHeader, OrderLineRow
from modules.orders.constants import OrderStatus
from modules.orders.models import OrderLine
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.integration


class TestConditionalDecrement:
    def test_decrements_when_enough_stock(self, product_a):
        assert ProductDjangoRepository().conditional_decrement_stock(product_a.id, 5)
        product_a.refresh_from_db()
        assert product_a.stock_quantity == 0

    def test_no_op_when_short(self, product_b):
        assert not ProductDjangoRepository().conditional_decrement_stock(product_b.id, 3)
        product_b.refresh_from_db()
        assert product_b.stock_quantity == 2

    def test_no_op_for_unknown_product(self):
        assert not ProductDjangoRepository().conditional_decrement_stock(999999, 1)


class TestOrderRepository:
    def test_header_then_lines(self, customer, product_a, product_b):
        repo = OrderDjangoRepository()
        order = repo.insert_header(
            OrderHeader(
                customer_id=customer.id,
                status=OrderStatus.PENDING,
                total_amount=Decimal("21.00"),
            )
        )
        repo.insert_lines(
            [
                OrderLineRow(order.id, product_a.id, 0, 1, Decimal("10.00")),
                OrderLineRow(order.id, product_b.id, 1, 2, Decimal("5.50")),
            ]
        )

        loaded = repo.find_by_id(order.id)
        assert loaded.customer == customer
        assert [line.product.name for line in loaded.lines.all()] == [
            "Product A",
            "Product B",
        ]

    def test_same_product_twice_violates_constraint(self, customer, product_a):
        repo = OrderDjangoRepository()
        order = repo.insert_header(
            OrderHeader(customer.id, OrderStatus.PENDING, Decimal("20.00"))
        )
        with pytest.raises(IntegrityError), transaction.atomic():
            repo.insert_lines(
                [
                    OrderLineRow(order.id, product_a.id, 0, 1, Decimal("10.00")),
                    OrderLineRow(order.id, product_a.id, 1, 1, Decimal("10.00")),
                ]
            )
        assert OrderLine.objects.count() == 0

    def test_find_by_id_malformed(self):
        assert OrderDjangoRepository().find_by_id("not-a-number") is None

    def test_update_status_unknown(self):
        assert OrderDjangoRepository().update_status(999999, OrderStatus.PAID) is None

    def test_update_status_returns_replaced_status(self, customer):
        repo = OrderDjangoRepository()
        order = repo.insert_header(
            OrderHeader(customer.id, OrderStatus.PENDING, Decimal("0.00"))
        )

        assert repo.update_status(order.id, OrderStatus.PAID) == "pending"
        assert repo.update_status(order.id, OrderStatus.SHIPPED) == "paid"
        assert repo.find_by_id(order.id).status == "shipped"

    def test_delete_reports_missing(self):
        assert OrderDjangoRepository().delete(999999) is False


class TestProductConstraints:
    def test_negative_stock_rejected_by_database(self, product_a):
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.filter(id=product_a.id).update(stock_quantity=-1)
