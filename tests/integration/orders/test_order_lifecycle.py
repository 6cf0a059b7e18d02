"""Reads, status updates, deletion and listing through OrderService."""

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from modules.core.exceptions import NotFound, StorageError
from modules.customers.models import Customer
from modules.orders.dtos import ListOrdersDTO, OrderLineInputDTO, PlaceOrderDTO
from modules.orders.exceptions import InvalidStatus
from modules.orders.models import Order, OrderLine
from modules.orders.repositories.django_repository import OrderDjangoRepository

pytestmark = pytest.mark.integration


def _place(service, customer, product, quantity=1, status=None):
    return service.place_order(
        PlaceOrderDTO(
            customer_id=customer.id,
            items=[OrderLineInputDTO(product_id=product.id, quantity=quantity)],
            status=status,
        )
    )


class TestGetOrder:
    def test_lines_sum_to_total_and_reads_are_stable(
        self, order_service, customer, product_a, product_b
    ):
        placed = order_service.place_order(
            PlaceOrderDTO(
                customer_id=customer.id,
                items=[
                    OrderLineInputDTO(product_id=product_a.id, quantity=3),
                    OrderLineInputDTO(product_id=product_b.id, quantity=2),
                ],
            )
        )

        first = order_service.get_order(placed.id)
        second = order_service.get_order(placed.id)

        assert sum(line.subtotal for line in first.lines) == first.total_amount
        assert first == second == placed

    def test_unknown_order(self, order_service):
        with pytest.raises(NotFound) as exc_info:
            order_service.get_order(424242)
        assert exc_info.value.detail == "Order 424242 not found."


class TestUpdateOrderStatus:
    def test_changes_only_status(self, order_service, customer, product_a):
        placed = _place(order_service, customer, product_a, quantity=2)

        updated = order_service.update_order_status(placed.id, "shipped")

        assert updated.status == "shipped"
        assert updated.total_amount == placed.total_amount
        assert updated.lines == placed.lines
        assert Order.objects.get(id=placed.id).status == "shipped"

    def test_any_status_reachable(self, order_service, customer, product_a):
        placed = _place(order_service, customer, product_a)
        order_service.update_order_status(placed.id, "delivered")
        assert order_service.update_order_status(placed.id, "pending").status == "pending"

    def test_invalid_status_leaves_order_untouched(
        self, order_service, customer, product_a
    ):
        placed = _place(order_service, customer, product_a)
        with pytest.raises(InvalidStatus):
            order_service.update_order_status(placed.id, "archived")
        assert Order.objects.get(id=placed.id).status == "pending"

    def test_unknown_order(self, order_service):
        with pytest.raises(NotFound):
            order_service.update_order_status(424242, "paid")


class TestDeleteOrder:
    def test_cascades_lines_and_keeps_stock(self, order_service, customer, product_a):
        placed = _place(order_service, customer, product_a, quantity=4)

        order_service.delete_order(placed.id)

        assert not Order.objects.filter(id=placed.id).exists()
        assert not OrderLine.objects.filter(order_id=placed.id).exists()
        product_a.refresh_from_db()
        assert product_a.stock_quantity == 1

    def test_unknown_order_has_no_side_effects(self, order_service, customer, product_a):
        placed = _place(order_service, customer, product_a)

        with pytest.raises(NotFound):
            order_service.delete_order(placed.id + 1000)

        assert Order.objects.count() == 1
        assert OrderLine.objects.count() == 1


class TestListOrders:
    def test_newest_first_with_limit_and_offset(self, order_service, customer, product_a):
        ids = [_place(order_service, customer, product_a).id for _ in range(4)]

        page = order_service.list_orders(ListOrdersDTO(limit=3))
        rest = order_service.list_orders(ListOrdersDTO(limit=3, offset=3))

        assert [o.id for o in page] == ids[::-1][:3]
        assert [o.id for o in rest] == [ids[0]]

    def test_filters_by_customer_and_status(self, order_service, customer, product_a):
        other = Customer.objects.create(name="Joao", email="joao@example.com")
        mine = _place(order_service, customer, product_a)
        _place(order_service, other, product_a)
        paid = _place(order_service, customer, product_a, status="paid")

        by_customer = order_service.list_orders(ListOrdersDTO(customer_id=customer.id))
        by_status = order_service.list_orders(
            ListOrdersDTO(customer_id=customer.id, status="pending")
        )

        assert {o.id for o in by_customer} == {mine.id, paid.id}
        assert [o.id for o in by_status] == [mine.id]
        assert by_status[0].customer.name == "Maria Silva"
        assert by_status[0].total_amount == Decimal("10.00")

    def test_offset_past_end_is_empty(self, order_service, customer, product_a):
        _place(order_service, customer, product_a)
        assert order_service.list_orders(ListOrdersDTO(offset=10)) == []


class TestReadStorageFailures:
    def test_get_order_reports_storage_error(self, order_service):
        with patch.object(
            OrderDjangoRepository, "find_by_id", side_effect=DatabaseError("down")
        ):
            with pytest.raises(StorageError) as exc_info:
                order_service.get_order(1)
        assert isinstance(exc_info.value.__cause__, DatabaseError)

    def test_list_orders_reports_storage_error(self, order_service):
        with patch.object(
            OrderDjangoRepository, "find_all", side_effect=DatabaseError("down")
        ):
            with pytest.raises(StorageError):
                order_service.list_orders(ListOrdersDTO())
