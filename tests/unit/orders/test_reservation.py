import pytest

from modules.core.exceptions import NotFound
from modules.orders.exceptions import InsufficientStock
from modules.orders.reservation import InventoryReservation
from tests.fakes import FakeProductRepository, make_product

pytestmark = pytest.mark.unit


class StaleProductRepository(FakeProductRepository):
    """Decrement always loses the race; reads report what is left."""

    def __init__(self, products, remaining):
        super().__init__(products)
        self._remaining = remaining

    def conditional_decrement_stock(self, id, quantity):
        product = self.get_by_id(id)
        if product is not None:
            product.stock_quantity = self._remaining
        return False


class TestInventoryReservation:
    def test_reserve_decrements(self):
        repo = FakeProductRepository([make_product(1, "A", "1.00", 3)])
        InventoryReservation(repo).reserve(1, 2)
        assert repo.get_by_id(1).stock_quantity == 1

    def test_failed_decrement_reports_current_stock(self):
        repo = StaleProductRepository([make_product(1, "A", "1.00", 3)], remaining=1)

        with pytest.raises(InsufficientStock) as exc_info:
            InventoryReservation(repo).reserve(1, 2)

        assert exc_info.value.available == 1
        assert exc_info.value.requested == 2

    def test_missing_product(self):
        with pytest.raises(NotFound):
            InventoryReservation(FakeProductRepository()).reserve(7, 1)

    @pytest.mark.django_db(transaction=True)
    def test_requires_open_transaction(self):
        repo = FakeProductRepository([make_product(1, "A", "1.00", 3)])
        with pytest.raises(RuntimeError):
            InventoryReservation(repo).reserve(1, 1)
        assert repo.get_by_id(1).stock_quantity == 3
