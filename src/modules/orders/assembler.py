"""Order assembly: status resolution, totals and row construction."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List, Optional

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import InvalidStatus
from modules.orders.validation import ResolvedLine, ValidatedOrder

CENT = Decimal("0.01")


@dataclass(frozen=True)
class OrderHeader:
    """Header row to insert; the id is generated by storage."""

    customer_id: int
    status: str
    total_amount: Decimal


@dataclass(frozen=True)
class OrderLineRow:
    order_id: int
    product_id: int
    position: int
    quantity: int
    price_at_purchase: Decimal


class OrderAssembler:
    """Builds the header and line rows of an order from validated input."""

    @staticmethod
    def resolve_status(value: Optional[Any]) -> str:
        """Return the enumerated status for *value*, defaulting to pending.

        Raises:
            InvalidStatus: *value* is not one of the enumerated statuses.
        """
        if value is None:
            return OrderStatus.PENDING
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in OrderStatus.values:
                return OrderStatus(normalized)
        raise InvalidStatus(value)

    @staticmethod
    def compute_total(lines: Iterable[ResolvedLine]) -> Decimal:
        total = sum(
            (line.price_at_purchase * line.quantity for line in lines),
            Decimal("0"),
        )
        return total.quantize(CENT, rounding=ROUND_HALF_UP)

    def build_header(self, validated: ValidatedOrder, status: str) -> OrderHeader:
        return OrderHeader(
            customer_id=validated.customer_id,
            status=status,
            total_amount=self.compute_total(validated.lines),
        )

    def build_lines(
        self, order_id: int, validated: ValidatedOrder
    ) -> List[OrderLineRow]:
        """Line rows referencing the freshly inserted header by *order_id*."""
        return [
            OrderLineRow(
                order_id=order_id,
                product_id=line.product_id,
                position=position,
                quantity=line.quantity,
                price_at_purchase=line.price_at_purchase,
            )
            for position, line in enumerate(validated.lines)
        ]
