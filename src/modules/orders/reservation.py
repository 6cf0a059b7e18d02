"""Inventory reservation.

Stock is reserved with one conditional decrement per line
(``UPDATE ... SET stock = stock - qty WHERE stock >= qty``).  There is no
separate read before the write, so concurrent orders for the same
product can never drive stock below zero, whatever the isolation level.

Reservations must run inside the caller's transaction scope: if a later
line or the persistence step fails, the rollback restores every unit
reserved by the same attempt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from modules.core.exceptions import NotFound
from modules.core.transaction import in_transaction
from modules.orders.exceptions import InsufficientStock

if TYPE_CHECKING:
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class InventoryReservation:
    """Atomically reserves stock for a single product."""

    def __init__(self, product_repository: IProductRepository) -> None:
        self._product_repo = product_repository

    def reserve(self, product_id: int, quantity: int) -> None:
        """Decrement stock of *product_id* by *quantity* or fail.

        Raises:
            InsufficientStock: the conditional decrement matched no row.
            NotFound: the product disappeared since validation.
        """
        if not in_transaction():
            raise RuntimeError("Stock reservation requires an open transaction.")

        if self._product_repo.conditional_decrement_stock(product_id, quantity):
            logger.info(
                "order.stock_reserved",
                product_id=product_id,
                quantity=quantity,
            )
            return

        # Re-read only to report what is left; the decision was already made.
        product = self._product_repo.get_by_id(product_id)
        if not product:
            raise NotFound("product", product_id)

        logger.warning(
            "order.stock_reservation_failed",
            product_id=product_id,
            available=product.stock_quantity,
            requested=quantity,
        )
        raise InsufficientStock(
            product_id=product_id,
            available=product.stock_quantity,
            requested=quantity,
        )
