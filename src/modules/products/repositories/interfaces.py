"""Product repository interface.

Extends ``IRepository[Product]`` with the conditional stock decrement
used for inventory reservation.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product  # noqa: F401


class IProductRepository(IRepository["Product"]):
    """Repository contract for Product records."""

    @abstractmethod
    def conditional_decrement_stock(self, id: int, quantity: int) -> bool:
        """Subtract *quantity* from stock only if enough stock remains.

        Must be a single atomic storage operation (no read-then-write).
        Returns ``True`` when the decrement was applied, ``False`` when the
        product is missing or its stock is below *quantity*.
        """
