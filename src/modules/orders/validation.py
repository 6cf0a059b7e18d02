"""Entity validation for order placement.

``EntityValidator`` resolves the customer and every requested product
and captures each product's current ``unit_price`` as the line's price
snapshot.

The stock comparison done here is advisory: it rejects requests that
obviously cannot be served before anything is written, but it may be
stale by the time stock is reserved.  ``InventoryReservation`` is the
authoritative guard.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Tuple

import structlog

from modules.core.exceptions import NotFound
from modules.orders.exceptions import InsufficientStock

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import OrderLineInputDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ResolvedLine:
    """A requested line with its price snapshot."""

    product_id: int
    quantity: int
    price_at_purchase: Decimal


@dataclass(frozen=True)
class ValidatedOrder:
    """Customer id plus resolved lines, in request order."""

    customer_id: int
    lines: Tuple[ResolvedLine, ...]


class EntityValidator:
    """Checks that the customer and products exist and stock looks sufficient."""

    def __init__(
        self,
        customer_repository: ICustomerRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._customer_repo = customer_repository
        self._product_repo = product_repository

    def validate(
        self, customer_id: int, lines: Iterable[OrderLineInputDTO]
    ) -> ValidatedOrder:
        """Resolve *customer_id* and *lines*.

        Raises:
            NotFound: the customer or a product does not exist.
            InsufficientStock: a line asks for more than the current stock.
        """
        customer = self._customer_repo.get_by_id(customer_id)
        if not customer:
            raise NotFound("customer", customer_id)

        resolved = []
        for line in lines:
            product = self._product_repo.get_by_id(line.product_id)
            if not product:
                raise NotFound("product", line.product_id)
            if line.quantity > product.stock_quantity:
                logger.info(
                    "order.validation.insufficient_stock",
                    product_id=line.product_id,
                    available=product.stock_quantity,
                    requested=line.quantity,
                )
                raise InsufficientStock(
                    product_id=line.product_id,
                    available=product.stock_quantity,
                    requested=line.quantity,
                )
            resolved.append(
                ResolvedLine(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price_at_purchase=product.unit_price,
                )
            )

        return ValidatedOrder(customer_id=customer.id, lines=tuple(resolved))
