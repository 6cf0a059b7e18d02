"""Domain events for the Orders module.

Published by ``OrderService`` through ``transaction.on_commit``, so an
aborted attempt never emits anything.
"""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrderPlaced(DomainEvent):
    """Raised when an order and its lines have been committed."""

    customer_id: int
    total_amount: str


@dataclass(frozen=True, kw_only=True)
class OrderStatusChanged(DomainEvent):
    """Raised when an order status changes."""

    old_status: str
    new_status: str


@dataclass(frozen=True)
class OrderDeleted(DomainEvent):
    """Raised when an order (and its lines) has been deleted."""
