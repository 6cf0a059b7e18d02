"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  Header and
lines are inserted by separate calls; atomicity of the pair is the
caller's transaction scope (``OrderService.place_order``), never this
class.

Reads eager-load the customer (``select_related``) and the lines with
their products (``prefetch_related``) to prevent N+1 queries.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import structlog
from django.db import transaction

from modules.orders.filters import OrderFilter
from modules.orders.models import Order, OrderLine
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    @staticmethod
    def _queryset():
        return Order.objects.select_related("customer").prefetch_related(
            "lines__product"
        )

    # ------------------------------------------------------------------
    # Create (header, then children)
    # ------------------------------------------------------------------

    def insert_header(self, header) -> Order:
        order = Order.objects.create(
            customer_id=header.customer_id,
            status=header.status,
            total_amount=header.total_amount,
        )
        logger.info("order.header_inserted", order_id=order.id)
        return order

    def insert_lines(self, lines: Sequence) -> List[OrderLine]:
        created = OrderLine.objects.bulk_create(
            [
                OrderLine(
                    order_id=line.order_id,
                    product_id=line.product_id,
                    position=line.position,
                    quantity=line.quantity,
                    price_at_purchase=line.price_at_purchase,
                )
                for line in lines
            ]
        )
        logger.info("order.lines_inserted", line_count=len(created))
        return created

    def insert(self, data: Dict[str, Any]) -> Order:
        """Create a bare header from field values.

        Lines are never created here; use ``insert_lines``.
        """
        return Order.objects.create(**data)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    @transaction.atomic
    def update(self, id: int, data: Dict[str, Any]) -> Optional[Order]:
        """Update header fields using ``select_for_update`` for safety."""
        order = Order.objects.select_for_update().filter(id=id).first()
        if not order:
            return None

        for field, value in data.items():
            setattr(order, field, value)

        order.save(update_fields=list(data))
        logger.info("order.updated", order_id=id, fields=sorted(data))
        return order

    @transaction.atomic
    def update_status(self, id: int, status: str) -> Optional[str]:
        """Set the status under a row lock and return the previous one."""
        order = Order.objects.select_for_update().filter(id=id).first()
        if not order:
            return None

        previous = order.status
        order.status = status
        order.save(update_fields=["status"])
        logger.info(
            "order.status_changed", order_id=id, old_status=previous, new_status=status
        )
        return previous

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: int) -> Optional[Order]:
        return self.find_by_id(id)

    def find_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return self._queryset().filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def find_all(
        self,
        limit: int,
        offset: int,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Order]:
        """Apply ``OrderFilter`` then slice the newest-first queryset."""
        queryset = self._queryset().order_by("-created_at", "-id")
        if filters:
            filterset = OrderFilter(data=filters, queryset=queryset)
            queryset = filterset.qs
        return list(queryset[offset : offset + limit])

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        queryset = self._queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete(self, id: int) -> bool:
        """Hard-delete an order; its lines are removed by CASCADE.

        Product stock is left untouched.
        """
        deleted, per_model = Order.objects.filter(id=id).delete()
        if not deleted:
            return False
        logger.info(
            "order.deleted",
            order_id=id,
            lines_deleted=per_model.get(OrderLine._meta.label, 0),
        )
        return True
