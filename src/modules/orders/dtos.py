"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``OrderLineInputDTO``: input for a single requested line.
- ``PlaceOrderDTO``: input for order placement (nested lines).
- ``ListOrdersDTO``: pagination window and filters for listing.
- ``CustomerSummaryDTO``: customer id/name/email attached to orders.
- ``OrderLineDTO``: output for a single line.
- ``OrderDTO``: output with lines and customer summary.
- ``OrderSummaryDTO``: list output (no lines).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.orders.constants import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT

if TYPE_CHECKING:
    from modules.customers.models import Customer
    from modules.orders.models import Order


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class OrderLineInputDTO(BaseModel):
    """Immutable DTO for a single requested line.

    The client sends ``product_id`` and ``quantity``.
    ``price_at_purchase`` is resolved by the Service Layer from the catalog.
    """

    model_config = ConfigDict(frozen=True)

    product_id: int = Field(gt=0)
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class PlaceOrderDTO(BaseModel):
    """Immutable DTO for order placement requests.

    Validates:
    - ``items`` must contain at least one line.
    - Each line quantity must be positive.
    - A product may appear only once per order.

    ``status`` is checked against the enumerated statuses by the
    assembler, so an unknown value surfaces as ``InvalidStatus``.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: int = Field(gt=0)
    items: List[OrderLineInputDTO]
    status: Optional[str] = None

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[OrderLineInputDTO]
    ) -> List[OrderLineInputDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    @model_validator(mode="after")
    def no_duplicate_products(self):
        """Prevent duplicate product IDs in the same order."""
        product_ids = [item.product_id for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValueError("Duplicate product IDs are not allowed in the same order.")
        return self


class ListOrdersDTO(BaseModel):
    """Immutable DTO describing a page of the order list."""

    model_config = ConfigDict(frozen=True)

    limit: int = Field(default=DEFAULT_LIST_LIMIT, ge=1, le=MAX_LIST_LIMIT)
    offset: int = Field(default=0, ge=0)
    customer_id: Optional[int] = Field(default=None, gt=0)
    status: Optional[str] = None


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class CustomerSummaryDTO(BaseModel):
    """Immutable DTO for the customer attached to an order."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    email: str

    @classmethod
    def from_entity(cls, customer: Customer) -> CustomerSummaryDTO:
        return cls(id=customer.id, name=customer.name, email=customer.email)


class OrderLineDTO(BaseModel):
    """Immutable DTO for a single order line."""

    model_config = ConfigDict(frozen=True)

    product_id: int
    product_name: str
    quantity: int
    price_at_purchase: Decimal
    subtotal: Decimal


class OrderSummaryDTO(BaseModel):
    """Immutable DTO for list responses (no lines)."""

    model_config = ConfigDict(frozen=True)

    id: int
    customer_id: int
    customer: CustomerSummaryDTO
    status: str
    total_amount: Decimal
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, order: Order) -> OrderSummaryDTO:
        """Assumes ``customer`` is select-related."""
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            customer=CustomerSummaryDTO.from_entity(order.customer),
            status=order.status,
            total_amount=order.total_amount,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderDTO(OrderSummaryDTO):
    """Immutable DTO for a full order with its lines."""

    lines: List[OrderLineDTO]

    @classmethod
    def from_entity(cls, order: Order) -> OrderDTO:
        """Build an output DTO from an Order model instance.

        Assumes ``customer`` is select-related and ``lines__product`` is
        prefetched.
        """
        lines = [
            OrderLineDTO(
                product_id=line.product_id,
                product_name=line.product.name,  # type: ignore[attr-defined]
                quantity=line.quantity,
                price_at_purchase=line.price_at_purchase,
                subtotal=line.subtotal,
            )
            for line in order.lines.all()
        ]
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            customer=CustomerSummaryDTO.from_entity(order.customer),
            status=order.status,
            total_amount=order.total_amount,
            created_at=order.created_at,
            updated_at=order.updated_at,
            lines=lines,
        )
