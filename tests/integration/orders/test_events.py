"""Domain events are published only once the transaction commits."""

import pytest

from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import OrderLineInputDTO, PlaceOrderDTO
from modules.orders.events import OrderDeleted, OrderPlaced, OrderStatusChanged
from modules.orders.exceptions import InsufficientStock
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository
from tests.fakes import RecordingEventBus

pytestmark = pytest.mark.integration


@pytest.fixture()
def bus():
    return RecordingEventBus()


@pytest.fixture()
def service(bus):
    return OrderService(
        order_repository=OrderDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
        product_repository=ProductDjangoRepository(),
        bus=bus,
    )


def _dto(customer, product, quantity):
    return PlaceOrderDTO(
        customer_id=customer.id,
        items=[OrderLineInputDTO(product_id=product.id, quantity=quantity)],
    )


class TestOrderEvents:
    def test_order_placed_on_commit(
        self, service, bus, customer, product_a, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            order = service.place_order(_dto(customer, product_a, 3))

        assert len(bus.published) == 1
        event = bus.published[0]
        assert isinstance(event, OrderPlaced)
        assert event.aggregate_id == order.id
        assert event.customer_id == customer.id
        assert event.total_amount == "30.00"

    def test_aborted_placement_publishes_nothing(
        self, service, bus, customer, product_b, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with pytest.raises(InsufficientStock):
                service.place_order(_dto(customer, product_b, 3))

        assert callbacks == []
        assert bus.published == []

    def test_status_change_and_delete(
        self, service, bus, customer, product_a, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            order = service.place_order(_dto(customer, product_a, 1))
            service.update_order_status(order.id, "paid")
            service.delete_order(order.id)

        changed, deleted = bus.published[1], bus.published[2]
        assert isinstance(changed, OrderStatusChanged)
        assert (changed.old_status, changed.new_status) == ("pending", "paid")
        assert isinstance(deleted, OrderDeleted)
        assert deleted.aggregate_id == order.id

    def test_not_published_before_commit(self, service, bus, customer, product_a):
        service.place_order(_dto(customer, product_a, 1))
        # The test transaction never commits.
        assert bus.published == []
