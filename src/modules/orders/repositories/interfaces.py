"""Order repository interface.

Extends ``IRepository[Order]`` with the operations the order service
needs: header and line insertion as separate steps (lines need the
generated header id), single-field status updates, and paginated
look-ups with eager-loaded relations.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.assembler import OrderHeader, OrderLineRow
    from modules.orders.models import Order, OrderLine


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate (header + lines)."""

    @abstractmethod
    def insert_header(self, header: OrderHeader) -> Order:
        """Insert the order header and return it with its generated id."""

    @abstractmethod
    def insert_lines(self, lines: Sequence[OrderLineRow]) -> List[OrderLine]:
        """Insert the line rows of an already inserted header."""

    @abstractmethod
    def update_status(self, id: int, status: str) -> Optional[str]:
        """Set the status of an order and return the status it replaced.

        The previous value is read under the same row lock as the write.
        ``None`` if the order does not exist.
        """

    @abstractmethod
    def find_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with its customer and lines (with products)."""

    @abstractmethod
    def find_all(
        self,
        limit: int,
        offset: int,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Order]:
        """Return a page of orders, newest first.

        Supported filter keys: ``customer`` (id) and ``status``.
        """
