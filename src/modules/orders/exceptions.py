"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The DRF exception handler renders them with their ``http_status``,
surfacing ``as_dict()`` unchanged.
"""

from __future__ import annotations

from typing import Any, Dict

from rest_framework import status

from modules.core.exceptions import DomainError


class InsufficientStock(DomainError):
    """Not enough stock to fulfil a line of the order."""

    code = "insufficient_stock"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, product_id: int, available: int, requested: int) -> None:
        super().__init__(
            f"Insufficient stock for product {product_id}: "
            f"available {available}, requested {requested}."
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested

    def as_dict(self) -> Dict[str, Any]:
        data = super().as_dict()
        data.update(
            product_id=self.product_id,
            available=self.available,
            requested=self.requested,
        )
        return data


class InvalidStatus(DomainError):
    """The value is not one of the enumerated order statuses."""

    code = "invalid_status"

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid order status: {value!r}.")
        self.value = value

    def as_dict(self) -> Dict[str, Any]:
        data = super().as_dict()
        data.update(value=self.value, attr="status")
        return data
