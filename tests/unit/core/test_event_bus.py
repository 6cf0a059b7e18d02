import pytest

from modules.orders.events import OrderDeleted, OrderPlaced, OrderStatusChanged
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


class Recorder:
    def __init__(self):
        self.events = []

    def handle(self, event):
        self.events.append(event)


class TestDomainEvents:
    def test_event_name_is_class_name(self):
        event = OrderPlaced(aggregate_id=1, customer_id=2, total_amount="41.00")
        assert event.event_name == "OrderPlaced"
        assert event.event_id is not None

    def test_events_are_immutable(self):
        event = OrderDeleted(aggregate_id=1)
        with pytest.raises(AttributeError):
            event.aggregate_id = 2


class TestInMemoryEventBus:
    def test_dispatches_on_exact_class(self):
        bus = InMemoryEventBus()
        placed, changed = Recorder(), Recorder()
        bus.subscribe(OrderPlaced, placed)
        bus.subscribe(OrderStatusChanged, changed)

        bus.publish(OrderPlaced(aggregate_id=1, customer_id=1, total_amount="1.00"))

        assert len(placed.events) == 1
        assert changed.events == []

    def test_subscribing_twice_registers_once(self):
        bus = InMemoryEventBus()
        recorder = Recorder()
        bus.subscribe(OrderDeleted, recorder)
        bus.subscribe(OrderDeleted, recorder)

        bus.publish(OrderDeleted(aggregate_id=5))

        assert len(recorder.events) == 1
